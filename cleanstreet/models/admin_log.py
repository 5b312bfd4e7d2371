"""SQLAlchemy ORM model for the append-only admin audit trail."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from cleanstreet.database import Base
from .base import utcnow


class AdminLog(Base):
    __tablename__ = "admin_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # No FK cascade: entries outlive the accounts that produced them.
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    action = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True)

    actor = relationship("User", primaryjoin="foreign(AdminLog.user_id) == User.id", viewonly=True)


__all__ = ["AdminLog"]
