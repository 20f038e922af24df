"""Use cases for managing form records."""

from .create_record import create_record
from .get_record import get_record
from .list_records import list_records

__all__ = ["create_record", "get_record", "list_records"]
