"""Aggregate application use cases."""

from .attachments import (
    delete_attachment,
    delete_record,
    fetch_attachments,
    ingest_attachments,
    read_attachment_content,
    reconcile_attachments,
)
from .otp import OtpManager
from .records import create_record, get_record, list_records

__all__ = [
    "OtpManager",
    "create_record",
    "delete_attachment",
    "delete_record",
    "fetch_attachments",
    "get_record",
    "ingest_attachments",
    "list_records",
    "read_attachment_content",
    "reconcile_attachments",
]
