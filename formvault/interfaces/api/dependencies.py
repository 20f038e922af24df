"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from formvault.application.use_cases import OtpManager
from formvault.config import Settings, get_settings
from formvault.domain.entities import User
from formvault.infrastructure.database import get_db
from formvault.infrastructure.repositories import UserRepository
from formvault.infrastructure.security import decode_access_token
from formvault.infrastructure.storage import ContentSink, get_content_sink

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

_INVALID_CREDENTIALS = "Invalid credentials"


def _unauthorized(detail: str = _INVALID_CREDENTIALS) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the caller for the provided bearer token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _unauthorized()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_editor(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the caller may create and change records."""

    if not current_user.can_edit_records():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user


def get_sink() -> ContentSink:
    return get_content_sink()


def get_app_settings() -> Settings:
    return get_settings()


def get_otp_manager(request: Request) -> OtpManager:
    """Return the passcode manager owned by the running application."""

    return request.app.state.otp_manager
