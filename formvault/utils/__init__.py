"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_utc,
    ensure_utc_naive,
    get_app_timezone,
    to_app_timezone,
    utcnow,
    utcnow_naive,
)

__all__ = [
    "ensure_utc",
    "ensure_utc_naive",
    "get_app_timezone",
    "to_app_timezone",
    "utcnow",
    "utcnow_naive",
]
