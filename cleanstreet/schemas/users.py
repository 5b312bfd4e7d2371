"""Schemas for user profile and role administration endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..constants import Role


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    location: str = ""
    phone: str = ""
    bio: str = ""
    profile_photo: str = ""
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    items: list[UserResponse]


class ProfileUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=150)
    location: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    bio: str | None = Field(default=None, max_length=500)
    profile_photo: str | None = Field(default=None, max_length=1024)


class RoleUpdateRequest(BaseModel):
    role: Role


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class PhotoUploadResponse(BaseModel):
    message: str = "Uploaded"
    url: str
    user: UserResponse


__all__ = [
    "UserResponse",
    "UserListResponse",
    "ProfileUpdateRequest",
    "RoleUpdateRequest",
    "PasswordChangeRequest",
    "PhotoUploadResponse",
]
