"""SQLAlchemy ORM model for complaint votes."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from cleanstreet.database import Base
from .base import TimestampMixin


class Vote(TimestampMixin, Base):
    __tablename__ = "votes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    complaint_id = Column(
        UUID(as_uuid=True), ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # "up" | "down"
    vote_type = Column(String(8), nullable=False)

    user = relationship("User", back_populates="votes")
    complaint = relationship("Complaint", back_populates="votes")

    __table_args__ = (UniqueConstraint("user_id", "complaint_id", name="uq_votes_user_complaint"),)


__all__ = ["Vote"]
