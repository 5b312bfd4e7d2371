"""SQLAlchemy ORM model for platform users."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from cleanstreet.database import Base
from .base import TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, server_default="user", default="user", index=True)
    location = Column(String(255), nullable=False, server_default="", default="")
    phone = Column(String(64), nullable=False, server_default="", default="")
    bio = Column(String(500), nullable=False, server_default="", default="")
    profile_photo = Column(String(1024), nullable=False, server_default="", default="")

    complaints = relationship("Complaint", back_populates="owner", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
    votes = relationship("Vote", back_populates="user", cascade="all, delete-orphan")


__all__ = ["User"]
