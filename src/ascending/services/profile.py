"""Profile read and partial update.

A profile patch only ever touches the columns named in ``PROFILE_FIELDS``.
Caller-supplied keys are matched against that allow-list and applied one by
one through ``setattr``; they are never interpolated into SQL.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ascending.errors import ConflictError, NotFoundError
from ascending.models.profile import PROFILE_FIELDS, Profile
from ascending.models.user import User
from ascending.schemas.profile import ProfileRead, ProfileUpdate, ProfileUpdateRequest
from ascending.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


def build_profile_changes(patch: ProfileUpdate | dict[str, Any]) -> dict[str, Any]:
    """Reduce a patch to ``{column: value}`` for allow-listed, non-null fields.

    Accepts either a validated ``ProfileUpdate`` or a raw mapping keyed by
    attribute names. Keys outside ``PROFILE_FIELDS`` are dropped.
    """
    if isinstance(patch, ProfileUpdate):
        patch = patch.model_dump(exclude_none=True)
    return {
        field: patch[field]
        for field in PROFILE_FIELDS
        if field in patch and patch[field] is not None
    }


def serialize_profile(profile: Profile | None) -> dict[str, str]:
    """Render a profile row as its non-null fields keyed by wire name.

    A missing row and an empty row both render as ``{}``.
    """
    if profile is None:
        return {}
    return ProfileRead.model_validate(profile).model_dump(by_alias=True, exclude_none=True)


async def get_profile(session: AsyncSession, user_id: int) -> tuple[User, dict[str, str]]:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    profile = await session.get(Profile, user_id)
    return user, serialize_profile(profile)


async def _apply_user_patch(session: AsyncSession, user: User, patch: UserUpdate) -> None:
    changes = patch.model_dump(exclude_unset=True)
    # name and email are NOT NULL; an explicit null leaves them as they are
    for field in ("name", "email"):
        if changes.get(field) is None:
            changes.pop(field, None)

    new_email = changes.get("email")
    if new_email is not None and new_email != user.email:
        taken = await session.scalar(
            select(User.id).where(User.email == new_email, User.id != user.id)
        )
        if taken is not None:
            raise ConflictError("Email already in use by another account")

    for field, value in changes.items():
        setattr(user, field, value)
    user.updated_at = datetime.utcnow()


async def _apply_profile_patch(
    session: AsyncSession, user_id: int, patch: ProfileUpdate
) -> int:
    changes = build_profile_changes(patch)
    if not changes:
        return 0

    profile = await session.get(Profile, user_id)
    if profile is None:
        profile = Profile(user_id=user_id)
        session.add(profile)

    for field, value in changes.items():
        setattr(profile, field, value)
    return len(changes)


async def update_profile(
    session: AsyncSession, user_id: int, body: ProfileUpdateRequest
) -> None:
    """Apply the user and/or profile patch in a single transaction.

    Raises:
        NotFoundError: the user no longer exists.
        ConflictError: the new email belongs to another user. Nothing is written.
    """
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")

    try:
        if body.user is not None:
            await _apply_user_patch(session, user, body.user)
        changed_fields = 0
        if body.profile is not None:
            changed_fields = await _apply_profile_patch(session, user_id, body.profile)
        await session.commit()
    except IntegrityError:
        # Another account claimed the email between the check and the write
        await session.rollback()
        raise ConflictError("Email already in use by another account") from None
    except Exception:
        await session.rollback()
        raise

    logger.info(
        "Updated user %s (user patch: %s, profile fields: %d)",
        user_id,
        body.user is not None,
        changed_fields,
    )
