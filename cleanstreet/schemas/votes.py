"""Schemas for complaint votes."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from ..constants import VoteType


class VoteRequest(BaseModel):
    vote_type: VoteType | None = None


class VoteSummaryResponse(BaseModel):
    up: int = 0
    down: int = 0


class VoteStateResponse(BaseModel):
    complaint_id: UUID
    vote_type: str | None = None
    up: int = 0
    down: int = 0


__all__ = ["VoteRequest", "VoteSummaryResponse", "VoteStateResponse"]
