"""Domain entities exposed by the application."""

from .attachment import DEFAULT_CONTENT_TYPE, Attachment, AttachmentPayload, build_locator
from .otp_record import OtpRecord
from .parent_record import ParentRecord
from .role import Role
from .user import ROLE_ADMIN, ROLE_EDITOR, ROLE_VIEWER, User

__all__ = [
    "Attachment",
    "AttachmentPayload",
    "DEFAULT_CONTENT_TYPE",
    "OtpRecord",
    "ParentRecord",
    "ROLE_ADMIN",
    "ROLE_EDITOR",
    "ROLE_VIEWER",
    "Role",
    "User",
    "build_locator",
]
