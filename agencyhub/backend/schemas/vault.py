"""
Password Vault Schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from agencyhub.backend.schemas.base import reject_null


class VaultUnlockRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=500)


class VaultStatusResponse(BaseModel):
    unlocked: bool
    unlocked_until: datetime | None = None


class VaultItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    username: str | None = Field(default=None, max_length=300)
    url: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=20000)
    password: str = Field(..., min_length=1, max_length=5000)


class VaultItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    username: str | None = Field(default=None, max_length=300)
    url: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=20000)
    password: str | None = Field(default=None, min_length=1, max_length=5000)

    check_not_null = reject_null("name", "password")


class VaultItemResponse(BaseModel):
    """A vault entry with its password decrypted."""

    id: str
    name: str
    username: str | None
    url: str | None
    notes: str | None
    password: str
    created_by: str | None
    created_at: datetime
    updated_at: datetime
