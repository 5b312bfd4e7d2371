"""Profile management and role administration."""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, UpstreamError, ValidationError
from ..models import User
from ..schemas import PasswordChangeRequest, ProfileUpdateRequest
from .audit_log_service import record_log
from .auth_service import hash_password, verify_password
from .media_service import discard_photos, present_files, upload_photo
from .policy import Principal, check_role_change, ensure_admin
from .spaces_service import PROFILE_FOLDER

logger = logging.getLogger(__name__)


def _get_user_or_404(db: Session, user_id: UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _commit(db: Session, user: User, failure: str) -> User:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure)
        raise UpstreamError(failure) from exc
    db.refresh(user)
    return user


def get_me(db: Session, *, principal: Principal) -> User:
    return _get_user_or_404(db, principal.id)


def update_me(db: Session, *, principal: Principal, payload: ProfileUpdateRequest) -> User:
    """Apply the profile fields the client actually sent."""

    user = _get_user_or_404(db, principal.id)
    update_data = payload.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        if value is None:
            continue
        setattr(user, field, value.strip())

    return _commit(db, user, "Failed to update profile")


async def upload_profile_photo(db: Session, *, principal: Principal, file: UploadFile | None) -> User:
    if not present_files([file]):
        raise ValidationError("No file uploaded")

    user = _get_user_or_404(db, principal.id)
    stored = await upload_photo(file, folder=PROFILE_FOLDER)
    user.profile_photo = stored.url
    try:
        return _commit(db, user, "Failed to update profile photo")
    except UpstreamError:
        discard_photos([stored])
        raise


def change_password(db: Session, *, principal: Principal, payload: PasswordChangeRequest) -> None:
    user = _get_user_or_404(db, principal.id)
    if not verify_password(payload.current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    user.hashed_password = hash_password(payload.new_password)
    _commit(db, user, "Failed to update password")


def list_users(db: Session, *, principal: Principal) -> list[User]:
    ensure_admin(principal)
    return list(db.scalars(select(User).order_by(User.created_at.asc())))


def update_user_role(db: Session, *, principal: Principal, target_user_id: UUID, new_role: str) -> User:
    """Let an admin change another account's role; every attempt is audited."""

    desired_role = check_role_change(principal, target_user_id, new_role)

    target = _get_user_or_404(db, target_user_id)
    previous_role = target.role
    target_label = target.name or target.email or str(target.id)

    target.role = desired_role
    _commit(db, target, "Failed to update role")

    actor = principal.display_name
    if previous_role != desired_role:
        action = f"role_change: admin='{actor}' changed '{target_label}' from '{previous_role}' to '{desired_role}'"
    else:
        action = f"role_change_noop: admin='{actor}' kept '{target_label}' at '{desired_role}'"
    record_log(db, user_id=principal.id, action=action)
    return target


__all__ = [
    "get_me",
    "update_me",
    "upload_profile_photo",
    "change_password",
    "list_users",
    "update_user_role",
]
