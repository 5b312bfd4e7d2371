"""SQLAlchemy ORM model for civic complaints."""
from __future__ import annotations

import uuid

from sqlalchemy import JSON, Column, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from cleanstreet.database import Base
from .base import TimestampMixin


class Complaint(TimestampMixin, Base):
    __tablename__ = "complaints"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, server_default="", default="")
    # Ordered list of public photo URLs.
    photos = Column(JSON, nullable=False, default=list)
    location_coords = Column(String(64), nullable=False, server_default="", default="")
    address = Column(String(500), nullable=False, server_default="", default="")
    # Free-text label for whoever is handling the issue; not a user reference.
    assigned_to = Column(String(150), nullable=False, server_default="", default="")
    status = Column(String(16), nullable=False, server_default="received", default="received", index=True)

    owner = relationship("User", back_populates="complaints")
    comments = relationship("Comment", back_populates="complaint", cascade="all, delete-orphan")
    votes = relationship("Vote", back_populates="complaint", cascade="all, delete-orphan")


__all__ = ["Complaint"]
