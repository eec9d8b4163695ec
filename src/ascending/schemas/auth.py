from pydantic import BaseModel

from ascending.schemas.user import UserRead


class RegisterRequest(BaseModel):
    # Presence is checked by the auth service so that a missing field is a 400
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserRead


class TokenClaims(BaseModel):
    id: int
    email: str
    role: str
