from ascending.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, TokenClaims
from ascending.schemas.profile import (
    ProfileFields,
    ProfileRead,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateRequest,
)
from ascending.schemas.system import HealthResponse, MessageResponse
from ascending.schemas.user import UserRead, UserUpdate

__all__ = [
    "AuthResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileFields",
    "ProfileRead",
    "ProfileResponse",
    "ProfileUpdate",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "TokenClaims",
    "UserRead",
    "UserUpdate",
]
