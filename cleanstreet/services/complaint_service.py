"""Complaint lifecycle: creation, scoped reads, edits, triage and deletion."""
from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import COMPLAINT_STATUSES, DEFAULT_COMPLAINT_STATUS, MAX_COMPLAINT_PHOTOS, RECENT_COMPLAINTS_LIMIT
from ..errors import NotFoundError, UpstreamError, ValidationError
from ..models import Complaint
from ..schemas import ComplaintUpdateRequest
from . import policy
from .audit_log_service import record_log
from .media_service import discard_photos, present_files, upload_photos
from .policy import Principal
from .spaces_service import COMPLAINT_FOLDER

logger = logging.getLogger(__name__)

_CONTENT_FIELDS = ("title", "description", "photos", "location_coords", "address")


def _commit(db: Session, failure: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure)
        raise UpstreamError(failure) from exc


def _get_complaint_or_404(db: Session, complaint_id: UUID) -> Complaint:
    complaint = db.get(Complaint, complaint_id)
    if complaint is None:
        raise NotFoundError("Complaint not found")
    return complaint


def _validate_status(value: str) -> str:
    if value not in COMPLAINT_STATUSES:
        raise ValidationError("Invalid status")
    return value


async def create_complaint(
    db: Session,
    *,
    principal: Principal,
    title: str | None,
    description: str | None = None,
    address: str | None = None,
    location_coords: str | None = None,
    photos: Sequence[UploadFile | None] | None = None,
) -> Complaint:
    """Create a complaint owned by ``principal``.

    Photos are uploaded before anything is written, so a storage failure
    leaves no complaint behind. The initial status is always ``received``.
    """

    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("Title required")

    files = present_files(photos)
    if len(files) > MAX_COMPLAINT_PHOTOS:
        raise ValidationError(f"At most {MAX_COMPLAINT_PHOTOS} photos are allowed")

    stored = await upload_photos(files, folder=COMPLAINT_FOLDER)

    complaint = Complaint(
        user_id=principal.id,
        title=clean_title,
        description=(description or "").strip(),
        photos=[result.url for result in stored],
        location_coords=(location_coords or "").strip(),
        address=(address or "").strip(),
        status=DEFAULT_COMPLAINT_STATUS,
    )
    db.add(complaint)
    try:
        _commit(db, "Failed to create complaint")
    except UpstreamError:
        discard_photos(stored)
        raise
    db.refresh(complaint)
    return complaint


def _scoped_query(principal: Principal):
    stmt = select(Complaint)
    clause = policy.complaint_scope_filter(principal)
    if clause is not None:
        stmt = stmt.where(clause)
    return stmt.order_by(Complaint.created_at.desc())


def list_complaints(db: Session, *, principal: Principal) -> list[Complaint]:
    """All complaints visible to ``principal``, newest first."""

    return list(db.scalars(_scoped_query(principal)))


def list_recent_complaints(db: Session, *, principal: Principal) -> list[Complaint]:
    return list(db.scalars(_scoped_query(principal).limit(RECENT_COMPLAINTS_LIMIT)))


def list_my_complaints(db: Session, *, principal: Principal) -> list[Complaint]:
    stmt = select(Complaint).where(Complaint.user_id == principal.id).order_by(Complaint.created_at.desc())
    return list(db.scalars(stmt))


def get_complaint(db: Session, *, principal: Principal, complaint_id: UUID) -> Complaint:
    stmt = select(Complaint).where(Complaint.id == complaint_id)
    clause = policy.complaint_lookup_filter(principal)
    if clause is not None:
        stmt = stmt.where(clause)
    complaint = db.scalar(stmt)
    # Out-of-scope records read as missing rather than forbidden.
    if complaint is None:
        raise NotFoundError("Complaint not found")
    return complaint


def _apply_triage(
    db: Session,
    complaint: Complaint,
    *,
    principal: Principal,
    status: str,
    assigned_to: str | None,
) -> None:
    previous_status = complaint.status
    complaint.status = status
    if assigned_to is not None:
        complaint.assigned_to = assigned_to.strip()
    _commit(db, "Failed to update complaint status")
    db.refresh(complaint)

    if previous_status != status:
        action = f'"{complaint.title}" status updated from {previous_status} to {status}'
    else:
        action = f'"{complaint.title}" status unchanged (still {status})'
    record_log(db, user_id=principal.id, action=action)


def update_complaint_status(
    db: Session,
    *,
    principal: Principal,
    complaint_id: UUID,
    status: str,
    assigned_to: str | None = None,
) -> Complaint:
    """Triage transition. Any status may move to any other status."""

    policy.ensure_can_triage(principal)
    _validate_status(status)
    complaint = _get_complaint_or_404(db, complaint_id)
    _apply_triage(db, complaint, principal=principal, status=status, assigned_to=assigned_to)
    return complaint


def update_complaint(
    db: Session,
    *,
    principal: Principal,
    complaint_id: UUID,
    payload: ComplaintUpdateRequest,
) -> Complaint:
    """Owner edit of content fields; status and assignment only when sent explicitly."""

    complaint = _get_complaint_or_404(db, complaint_id)
    policy.ensure_can_edit_complaint(principal, complaint)

    update_data = payload.model_dump(exclude_unset=True)
    triage_requested = "status" in update_data or "assigned_to" in update_data
    if triage_requested:
        policy.ensure_can_triage(principal)
        if update_data.get("status") is not None:
            _validate_status(update_data["status"])

    for field in _CONTENT_FIELDS:
        if field not in update_data or update_data[field] is None:
            continue
        value = update_data[field]
        if field == "title":
            value = value.strip()
            if not value:
                raise ValidationError("Title required")
        elif isinstance(value, str):
            value = value.strip()
        setattr(complaint, field, value)

    if triage_requested:
        _apply_triage(
            db,
            complaint,
            principal=principal,
            status=update_data.get("status") or complaint.status,
            assigned_to=update_data.get("assigned_to"),
        )
    else:
        _commit(db, "Failed to update complaint")
        db.refresh(complaint)
    return complaint


def delete_complaint(db: Session, *, principal: Principal, complaint_id: UUID) -> None:
    complaint = _get_complaint_or_404(db, complaint_id)
    policy.ensure_can_delete_complaint(principal, complaint)

    title = complaint.title
    db.delete(complaint)
    _commit(db, "Failed to delete complaint")
    record_log(db, user_id=principal.id, action=f'"{title}" complaint deleted')


__all__ = [
    "create_complaint",
    "list_complaints",
    "list_recent_complaints",
    "list_my_complaints",
    "get_complaint",
    "update_complaint",
    "update_complaint_status",
    "delete_complaint",
]
