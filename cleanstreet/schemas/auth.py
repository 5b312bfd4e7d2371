"""Pydantic schemas for authentication endpoints."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from ..constants import Role
from .users import UserResponse


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Role = "user"
    admin_code: str | None = None
    location: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=64)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse


__all__ = ["RegisterRequest", "LoginRequest", "AuthResponse"]
