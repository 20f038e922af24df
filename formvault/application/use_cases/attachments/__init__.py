"""Use cases for managing record attachments."""

from .delete_attachments import delete_attachment, delete_record
from .fetch_attachments import fetch_attachments, read_attachment_content
from .ingest_attachments import ingest_attachments
from .payloads import decode_payload, decode_payloads
from .reconcile_attachments import reconcile_attachments

__all__ = [
    "decode_payload",
    "decode_payloads",
    "delete_attachment",
    "delete_record",
    "fetch_attachments",
    "ingest_attachments",
    "read_attachment_content",
    "reconcile_attachments",
]
