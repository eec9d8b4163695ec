"""Profile endpoints for the authenticated user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ascending.auth.dependencies import get_current_claims
from ascending.database import get_db
from ascending.errors import AppError
from ascending.schemas.auth import TokenClaims
from ascending.schemas.profile import ProfileResponse, ProfileUpdateRequest
from ascending.schemas.system import MessageResponse
from ascending.schemas.user import UserRead
from ascending.services.profile import get_profile, update_profile

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def read_profile(
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Get the current user together with their intake profile.

    A user without a profile row gets an empty ``profile`` object.
    """
    try:
        user, profile = await get_profile(session, claims.id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from None
    return ProfileResponse(user=UserRead.model_validate(user), profile=profile)


@router.put("", response_model=MessageResponse)
async def write_profile(
    body: ProfileUpdateRequest,
    claims: TokenClaims = Depends(get_current_claims),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Partially update the user record and/or profile.

    Only fields present and non-null in the patch are written.
    """
    try:
        await update_profile(session, claims.id, body)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from None
    return MessageResponse(message="Profile updated successfully")
