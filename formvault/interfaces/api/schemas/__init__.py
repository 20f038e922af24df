from .otp import OtpIssueResponse, OtpRequest, OtpVerifyRequest, OtpVerifyResponse
from .record import (
    AttachmentRead,
    AttachmentUpload,
    RecordCreate,
    RecordRead,
    RecordUpdate,
)

__all__ = [
    "AttachmentRead",
    "AttachmentUpload",
    "OtpIssueResponse",
    "OtpRequest",
    "OtpVerifyRequest",
    "OtpVerifyResponse",
    "RecordCreate",
    "RecordRead",
    "RecordUpdate",
]
