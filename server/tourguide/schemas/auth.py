"""Authentication and user Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..models.user import UserType

__all__ = ["RegisterRequest", "LoginRequest", "UserPublic", "AuthResponse", "AuthenticatedUser"]


class RegisterRequest(BaseModel):
    """Request schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Login email, unique")
    password: str = Field(..., min_length=6, max_length=128, description="Plain-text password")
    user_type: UserType = Field(..., description="tourist or guide")


class LoginRequest(BaseModel):
    """Request schema for logging in."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, description="Plain-text password")


class UserPublic(BaseModel):
    """User fields safe to return to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login email")
    user_type: UserType = Field(..., description="tourist or guide")
    avatar_url: str | None = Field(None, description="Avatar image URL")


class AuthResponse(BaseModel):
    """Response schema for register and login."""

    message: str
    user: UserPublic
    token: str = Field(..., description="Bearer token")


class AuthenticatedUser(BaseModel):
    """Identity verified from a bearer token."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    email: str
    user_type: UserType

    @property
    def is_guide(self) -> bool:
        return self.user_type == UserType.GUIDE
