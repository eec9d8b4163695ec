"""Registration and login."""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ascending.auth.passwords import hash_password, verify_password
from ascending.auth.tokens import create_access_token
from ascending.config import Settings
from ascending.errors import AuthError, ConflictError, ValidationError
from ascending.models.profile import Profile
from ascending.models.user import User
from ascending.schemas.auth import LoginRequest, RegisterRequest, TokenClaims

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "client"
INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    user: User
    token: str


def _mask_email(email: str) -> str:
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}" if domain else "***"


def issue_token(user: User, settings: Settings) -> str:
    claims = TokenClaims(id=user.id, email=user.email, role=user.role)
    return create_access_token(claims, settings)


async def register_user(
    session: AsyncSession, body: RegisterRequest, settings: Settings
) -> AuthResult:
    """Create a user and its empty profile, then issue a token.

    Both rows are written in one transaction.

    Raises:
        ValidationError: name, email or password missing.
        ConflictError: the email is already registered.
    """
    if not body.name or not body.email or not body.password:
        raise ValidationError("Name, email, and password are required")

    existing = await session.scalar(select(User.id).where(User.email == body.email))
    if existing is not None:
        raise ConflictError("Email already registered")

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password, settings.bcrypt_rounds),
        role=body.role or DEFAULT_ROLE,
        phone=body.phone,
    )
    session.add(user)
    try:
        await session.flush()
        session.add(Profile(user_id=user.id))
        await session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await session.rollback()
        raise ConflictError("Email already registered") from None

    await session.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.role)
    return AuthResult(user=user, token=issue_token(user, settings))


async def authenticate_user(
    session: AsyncSession, body: LoginRequest, settings: Settings
) -> AuthResult:
    """Check credentials and issue a token.

    Unknown email and wrong password fail with the same message.
    """
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user = await session.scalar(select(User).where(User.email == body.email))
    if user is None or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login attempt for %s", _mask_email(body.email))
        raise AuthError(INVALID_CREDENTIALS)

    logger.info("User %s logged in", user.id)
    return AuthResult(user=user, token=issue_token(user, settings))
