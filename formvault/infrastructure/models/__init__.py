"""ORM models used by the application infrastructure."""

from .attachment import AttachmentModel
from .form_record import FormRecordModel
from .role import RoleModel
from .user import UserModel

__all__ = [
    "AttachmentModel",
    "FormRecordModel",
    "RoleModel",
    "UserModel",
]
