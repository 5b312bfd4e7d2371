"""One up/down vote per user and complaint."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, UpstreamError, ValidationError
from ..models import Complaint, Vote
from .policy import Principal

logger = logging.getLogger(__name__)


def _ensure_complaint(db: Session, complaint_id: UUID) -> None:
    if db.get(Complaint, complaint_id) is None:
        raise NotFoundError("Complaint not found")


def _find_vote(db: Session, *, user_id: UUID, complaint_id: UUID) -> Vote | None:
    return db.scalar(select(Vote).where(Vote.user_id == user_id, Vote.complaint_id == complaint_id))


def vote_summary(db: Session, *, complaint_id: UUID) -> dict[str, int]:
    """Up/down totals aggregated across all users."""

    _ensure_complaint(db, complaint_id)
    rows = db.execute(
        select(Vote.vote_type, func.count(Vote.id)).where(Vote.complaint_id == complaint_id).group_by(Vote.vote_type)
    ).all()
    counts = {"up": 0, "down": 0}
    for vote_type, count in rows:
        if vote_type in counts:
            counts[vote_type] = int(count or 0)
    return counts


def set_vote(db: Session, *, principal: Principal, complaint_id: UUID, vote_type: str | None) -> dict[str, Any]:
    """Create, overwrite or remove the caller's vote.

    ``None`` deletes any existing vote. The unique ``(user_id, complaint_id)``
    constraint is authoritative: if a concurrent request inserts the pair
    first, the insert is retried as an overwrite of that row.
    """

    if vote_type not in (None, "up", "down"):
        raise ValidationError("Invalid vote_type")
    _ensure_complaint(db, complaint_id)

    existing = _find_vote(db, user_id=principal.id, complaint_id=complaint_id)
    try:
        if vote_type is None:
            if existing is not None:
                db.delete(existing)
            db.commit()
        elif existing is not None:
            existing.vote_type = vote_type
            db.commit()
        else:
            db.add(Vote(user_id=principal.id, complaint_id=complaint_id, vote_type=vote_type))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                existing = _find_vote(db, user_id=principal.id, complaint_id=complaint_id)
                if existing is None:
                    raise
                existing.vote_type = vote_type
                db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to record vote")
        raise UpstreamError("Failed to record vote") from exc

    summary = vote_summary(db, complaint_id=complaint_id)
    return {"complaint_id": complaint_id, "vote_type": vote_type, **summary}


__all__ = ["set_vote", "vote_summary"]
