"""Repository implementations for infrastructure layer."""

from .attachment_repository import AttachmentRepository
from .record_repository import RecordRepository
from .transaction import transaction
from .user_repository import UserRepository

__all__ = [
    "AttachmentRepository",
    "RecordRepository",
    "UserRepository",
    "transaction",
]
