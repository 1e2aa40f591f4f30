"""
User and Auth Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agencyhub.backend.core.rbac import Role
from agencyhub.backend.schemas.base import reject_null


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""

    username: str = Field(..., min_length=1, max_length=100, examples=["admin"])
    password: str = Field(..., min_length=1, max_length=200)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Schema for user in API responses. Never includes the hash."""

    id: str
    username: str
    email: str | None
    first_name: str | None
    last_name: str | None
    role: str
    client_id: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MeResponse(UserResponse):
    """Current user plus the resolved permission map."""

    display_name: str
    permissions: dict[str, bool]


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserCreate(BaseModel):
    """Schema for creating a user."""

    username: str = Field(..., min_length=3, max_length=100, examples=["jordan"])
    password: str = Field(..., min_length=8, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: Role = Role.STAFF
    client_id: str | None = None


class UserUpdate(BaseModel):
    """Schema for updating a user. Only provided fields change."""

    password: str | None = Field(default=None, min_length=8, max_length=200)
    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: Role | None = None
    client_id: str | None = None

    check_not_null = reject_null("password", "role")


class TeamMemberResponse(BaseModel):
    id: str
    username: str
    first_name: str | None
    last_name: str | None
    display_name: str
    role: str

    model_config = ConfigDict(from_attributes=True)
