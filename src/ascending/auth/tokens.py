"""Signed session tokens (JWT, HS256 by default) carrying ``{id, email, role}``."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from ascending.config import Settings
from ascending.errors import AuthError
from ascending.schemas.auth import TokenClaims


def create_access_token(
    claims: TokenClaims,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token for the given identity.

    Raises:
        RuntimeError: if no signing secret is configured.
    """
    if not settings.jwt_secret:
        raise RuntimeError("ASCENDING_JWT_SECRET is not configured")

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_expire_hours)

    to_encode = claims.model_dump()
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenClaims:
    """Verify signature and expiry, then return the identity claims.

    Raises:
        AuthError: (403) for a bad signature, malformed or expired token, or
            a payload without the identity claims.
    """
    if not settings.jwt_secret:
        raise RuntimeError("ASCENDING_JWT_SECRET is not configured")

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenClaims.model_validate(payload)
    except (JWTError, PydanticValidationError):
        raise AuthError("Invalid or expired token", status_code=403) from None
