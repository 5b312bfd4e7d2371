"""Project-wide constant values."""
from __future__ import annotations

from typing import Literal

Role = Literal["user", "volunteer", "admin"]
ComplaintStatus = Literal["received", "in_review", "resolved"]
VoteType = Literal["up", "down"]
ReactionAction = Literal["like", "dislike"]

ROLES: tuple[str, ...] = ("user", "volunteer", "admin")
COMPLAINT_STATUSES: tuple[str, ...] = ("received", "in_review", "resolved")
DEFAULT_COMPLAINT_STATUS = "received"

MAX_COMPLAINT_PHOTOS = 6
RECENT_COMPLAINTS_LIMIT = 5
ADMIN_LOG_LIMIT = 200
RECENT_ADMIN_LOG_LIMIT = 25

__all__ = [
    "Role",
    "ComplaintStatus",
    "VoteType",
    "ReactionAction",
    "ROLES",
    "COMPLAINT_STATUSES",
    "DEFAULT_COMPLAINT_STATUS",
    "MAX_COMPLAINT_PHOTOS",
    "RECENT_COMPLAINTS_LIMIT",
    "ADMIN_LOG_LIMIT",
    "RECENT_ADMIN_LOG_LIMIT",
]
