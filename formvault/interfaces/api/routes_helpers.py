"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from formvault.domain.errors import (
    Conflict,
    DeliveryFailed,
    Expired,
    FormVaultError,
    InvalidPayload,
    Mismatch,
    NotFound,
    PayloadTooLarge,
    StorageFailure,
)

_STATUS_BY_ERROR: dict[type[FormVaultError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidPayload: 422,
    PayloadTooLarge: 413,
    Conflict: status.HTTP_409_CONFLICT,
    DeliveryFailed: status.HTTP_502_BAD_GATEWAY,
    Expired: status.HTTP_410_GONE,
    Mismatch: status.HTTP_400_BAD_REQUEST,
    StorageFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: FormVaultError) -> int:
    """Return the HTTP status code matching the failure kind of ``exc``."""

    for error_type in type(exc).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(exc: FormVaultError) -> HTTPException:
    """Translate a domain failure into the response sent to the client."""

    return HTTPException(
        status_code=status_for(exc),
        detail={"code": exc.code, "message": exc.message},
    )
