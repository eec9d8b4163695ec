"""Auth endpoints: register and login."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ascending.config import Settings, get_settings
from ascending.database import get_db
from ascending.errors import AppError
from ascending.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from ascending.schemas.user import UserRead
from ascending.services.auth import authenticate_user, register_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Register a new client and return a session token.

    Returns 400 if a required field is missing or the email is taken.
    """
    try:
        result = await register_user(session, body, settings)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from None
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserRead.model_validate(result.user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Exchange email + password for a session token."""
    try:
        result = await authenticate_user(session, body, settings)
    except AppError as e:
        headers = {"WWW-Authenticate": "Bearer"} if e.status_code == 401 else None
        raise HTTPException(status_code=e.status_code, detail=e.message, headers=headers) from None
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserRead.model_validate(result.user),
    )
