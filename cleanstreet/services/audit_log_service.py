"""Append-only audit trail of admin-relevant actions."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..constants import ADMIN_LOG_LIMIT, RECENT_ADMIN_LOG_LIMIT
from ..models import AdminLog, User
from .policy import Principal, ensure_admin

logger = logging.getLogger(__name__)


def record_log(db: Session, *, user_id: UUID, action: str) -> AdminLog | None:
    """Persist an audit entry, best effort.

    Callers commit their own change first. A failure here is logged and
    swallowed so it never fails or rolls back the operation being audited.
    """

    try:
        entry = AdminLog(user_id=user_id, action=action)
        db.add(entry)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to record audit entry for user %s", user_id)
        return None

    logger.info("[adminLog] %s", action)
    return entry


def _list_entries(db: Session, *, limit: int) -> list[dict[str, Any]]:
    stmt = (
        select(AdminLog, User.name, User.email)
        .outerjoin(User, AdminLog.user_id == User.id)
        .order_by(AdminLog.timestamp.desc())
        .limit(limit)
    )
    records: list[dict[str, Any]] = []
    for entry, name, email in db.execute(stmt).all():
        actor = {"name": name, "email": email} if (name is not None or email is not None) else None
        records.append(
            {
                "id": entry.id,
                "user_id": entry.user_id,
                "action": entry.action,
                "timestamp": entry.timestamp,
                "actor": actor,
            }
        )
    return records


def list_logs(db: Session, *, principal: Principal) -> list[dict[str, Any]]:
    """Full history for admins, newest first."""

    ensure_admin(principal)
    return _list_entries(db, limit=ADMIN_LOG_LIMIT)


def list_recent_logs(db: Session) -> list[dict[str, Any]]:
    """Short public activity feed."""

    return _list_entries(db, limit=RECENT_ADMIN_LOG_LIMIT)


__all__ = ["record_log", "list_logs", "list_recent_logs"]
