"""Pydantic schemas for complaint comments and reactions."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ..constants import ReactionAction


class CommentResponse(BaseModel):
    id: UUID
    complaint_id: UUID
    user_id: UUID
    name: str | None = None
    profile_photo: str | None = None
    role: str | None = None
    content: str | None = None
    photo_url: str | None = None
    parent_id: UUID | None = None
    created_at: datetime
    like_count: int = 0
    dislike_count: int = 0
    viewer_has_liked: bool = False
    viewer_has_disliked: bool = False


class CommentListResponse(BaseModel):
    items: list[CommentResponse]


class ReactionRequest(BaseModel):
    action: ReactionAction | None = None


class ReactionResponse(BaseModel):
    """Reaction counters for one comment, from the caller's point of view."""

    comment_id: UUID
    like_count: int
    dislike_count: int
    viewer_has_liked: bool
    viewer_has_disliked: bool


__all__ = ["CommentResponse", "CommentListResponse", "ReactionRequest", "ReactionResponse"]
