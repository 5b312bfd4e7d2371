"""Pydantic schemas for complaint resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..constants import MAX_COMPLAINT_PHOTOS, ComplaintStatus


class ComplaintResponse(BaseModel):
    """Serialized representation of a persisted complaint."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str = ""
    photos: list[str] = Field(default_factory=list)
    location_coords: str = ""
    address: str = ""
    assigned_to: str = ""
    status: str
    created_at: datetime
    updated_at: datetime


class ComplaintListResponse(BaseModel):
    """Envelope used when returning a collection of complaints."""

    items: list[ComplaintResponse]


class ComplaintUpdateRequest(BaseModel):
    """Owner edit. Only the fields present in the request are written."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    photos: list[str] | None = Field(default=None, max_length=MAX_COMPLAINT_PHOTOS)
    location_coords: str | None = Field(default=None, max_length=64)
    address: str | None = Field(default=None, max_length=500)
    status: ComplaintStatus | None = None
    assigned_to: str | None = Field(default=None, max_length=150)


class ComplaintStatusUpdateRequest(BaseModel):
    status: ComplaintStatus
    assigned_to: str | None = Field(default=None, max_length=150)


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "ComplaintResponse",
    "ComplaintListResponse",
    "ComplaintUpdateRequest",
    "ComplaintStatusUpdateRequest",
    "MessageResponse",
]
