"""Routes issuing and verifying one-time passcodes."""

from fastapi import APIRouter, Depends, status

from formvault.application.use_cases import OtpManager
from formvault.application.use_cases.otp import normalize_recipient
from formvault.domain.errors import FormVaultError
from formvault.interfaces.api.dependencies import get_otp_manager
from formvault.interfaces.api.routes_helpers import to_http_exception
from formvault.interfaces.api.schemas import (
    OtpIssueResponse,
    OtpRequest,
    OtpVerifyRequest,
    OtpVerifyResponse,
)

router = APIRouter(prefix="/otp", tags=["otp"])


@router.post("/", response_model=OtpIssueResponse, status_code=status.HTTP_202_ACCEPTED)
def issue_passcode(
    payload: OtpRequest,
    manager: OtpManager = Depends(get_otp_manager),
) -> OtpIssueResponse:
    """Issue a passcode and send it to the recipient. The code is never returned."""

    try:
        manager.issue(payload.recipient)
        recipient = normalize_recipient(payload.recipient)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return OtpIssueResponse(
        recipient=recipient,
        expires_in_seconds=int(manager.expires_in.total_seconds()),
    )


@router.post("/resend", response_model=OtpIssueResponse, status_code=status.HTTP_202_ACCEPTED)
def resend_passcode(
    payload: OtpRequest,
    manager: OtpManager = Depends(get_otp_manager),
) -> OtpIssueResponse:
    """Deliver the outstanding passcode again without changing it."""

    try:
        manager.resend(payload.recipient)
        recipient = normalize_recipient(payload.recipient)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return OtpIssueResponse(
        recipient=recipient,
        expires_in_seconds=int(manager.expires_in.total_seconds()),
    )


@router.post("/verify", response_model=OtpVerifyResponse)
def verify_passcode(
    payload: OtpVerifyRequest,
    manager: OtpManager = Depends(get_otp_manager),
) -> OtpVerifyResponse:
    try:
        manager.verify(payload.recipient, payload.code)
    except FormVaultError as exc:
        raise to_http_exception(exc) from exc
    return OtpVerifyResponse(verified=True)


__all__ = ["router"]
