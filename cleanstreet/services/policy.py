"""Authorization policy for complaints, comments, votes and roles.

Every role or ownership decision made by the API lives here. The functions
take an explicit :class:`Principal` and never touch the database themselves.
Complaint visibility is expressed as SQLAlchemy filter clauses
(:func:`complaint_scope_filter` for listings, :func:`complaint_lookup_filter`
for reads by id); the remaining checks are predicates on loaded records.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import false, func
from sqlalchemy.sql.elements import ColumnElement

from ..constants import ROLES
from ..errors import AuthorizationError, ValidationError
from ..models import Comment, Complaint, User


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated caller of a service operation."""

    id: UUID
    role: str = "user"
    name: str = ""
    email: str = ""
    location: str = ""

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            role=(user.role or "user").lower(),
            name=user.name or "",
            email=user.email or "",
            location=user.location or "",
        )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_volunteer(self) -> bool:
        return self.role == "volunteer"

    @property
    def display_name(self) -> str:
        return self.name or self.email or str(self.id)


def _volunteer_area(principal: Principal) -> str:
    return (principal.location or "").strip().lower()


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def complaint_scope_filter(principal: Principal) -> ColumnElement[bool] | None:
    """Return the WHERE clause limiting which complaints ``principal`` may list.

    ``None`` means no restriction. Volunteers without a location get a clause
    that matches nothing. The address match uses the database's ``lower()``;
    on SQLite that folds ASCII letters only.
    """

    if principal.is_volunteer:
        area = _volunteer_area(principal)
        if not area:
            return false()
        return func.lower(Complaint.address).like(f"%{_escape_like(area)}%", escape="\\")
    return None


def complaint_lookup_filter(principal: Principal) -> ColumnElement[bool] | None:
    """WHERE clause for fetching a single complaint by id.

    Admins see everything, volunteers get their listing scope and plain users
    only their own complaints. Listing and lookup share the volunteer clause
    so both agree on what is in scope.
    """

    if principal.is_admin:
        return None
    if principal.is_volunteer:
        return complaint_scope_filter(principal)
    return Complaint.user_id == principal.id


def is_owner(principal: Principal, record: Any) -> bool:
    return record.user_id == principal.id


def can_triage_complaints(principal: Principal) -> bool:
    """Admins and volunteers may change status and assignment."""

    return principal.is_admin or principal.is_volunteer


def can_edit_complaint(principal: Principal, complaint: Complaint) -> bool:
    return is_owner(principal, complaint)


def can_delete_complaint(principal: Principal, complaint: Complaint) -> bool:
    # Owner only, admins included.
    return is_owner(principal, complaint)


def can_delete_comment(principal: Principal, comment: Comment) -> bool:
    return is_owner(principal, comment) or principal.is_admin


def ensure_can_triage(principal: Principal) -> None:
    if not can_triage_complaints(principal):
        raise AuthorizationError("Only admins and volunteers can update complaint status")


def ensure_can_edit_complaint(principal: Principal, complaint: Complaint) -> None:
    if not can_edit_complaint(principal, complaint):
        raise AuthorizationError("Forbidden: You can only edit your own complaints")


def ensure_can_delete_complaint(principal: Principal, complaint: Complaint) -> None:
    if not can_delete_complaint(principal, complaint):
        raise AuthorizationError("Forbidden: You can only delete your own complaints")


def ensure_can_delete_comment(principal: Principal, comment: Comment) -> None:
    if not can_delete_comment(principal, comment):
        raise AuthorizationError("Forbidden")


def ensure_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise AuthorizationError("Forbidden: insufficient role")


def check_role_change(principal: Principal, target_id: UUID, new_role: str) -> str:
    """Validate a role assignment and return the normalized role.

    Self-demotion by an admin is a business-rule violation (400), checked
    before anything is read or written.
    """

    desired = (new_role or "").strip().lower()
    if desired not in ROLES:
        raise ValidationError("Invalid role")
    ensure_admin(principal)
    if principal.id == target_id and principal.is_admin and desired != "admin":
        raise ValidationError("Admins cannot demote themselves")
    return desired


__all__ = [
    "Principal",
    "complaint_scope_filter",
    "complaint_lookup_filter",
    "is_owner",
    "can_triage_complaints",
    "can_edit_complaint",
    "can_delete_complaint",
    "can_delete_comment",
    "ensure_can_triage",
    "ensure_can_edit_complaint",
    "ensure_can_delete_complaint",
    "ensure_can_delete_comment",
    "ensure_admin",
    "check_role_change",
]
