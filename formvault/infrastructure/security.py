"""Bearer token helpers shared with the identity provider."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from formvault.config import get_settings


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` the way the identity provider does.

    Used by operational scripts and tests; the service itself only decodes.
    """

    settings = get_settings()
    expire = datetime.now(tz=timezone.utc) + (expires_delta or timedelta(minutes=30))
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=settings.token_algorithm
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = ["create_access_token", "decode_access_token"]
