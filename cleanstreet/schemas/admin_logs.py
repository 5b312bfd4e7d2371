"""Schemas for the admin audit trail."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class LogActor(BaseModel):
    name: str | None = None
    email: str | None = None


class AdminLogResponse(BaseModel):
    id: UUID
    user_id: UUID
    action: str
    timestamp: datetime
    actor: LogActor | None = None


class AdminLogListResponse(BaseModel):
    items: list[AdminLogResponse]


__all__ = ["LogActor", "AdminLogResponse", "AdminLogListResponse"]
