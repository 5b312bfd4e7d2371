"""Business logic for complaint comments and their like/dislike reactions."""
from __future__ import annotations

import logging
from typing import Any, cast
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, UpstreamError, ValidationError
from ..models import Comment, CommentDislike, CommentLike, Complaint, User
from . import policy
from .media_service import discard_photos, present_files, upload_photo
from .policy import Principal
from .spaces_service import COMMENT_FOLDER

logger = logging.getLogger(__name__)


def _get_complaint_or_404(db: Session, complaint_id: UUID) -> Complaint:
    complaint = db.get(Complaint, complaint_id)
    if complaint is None:
        raise NotFoundError("Complaint not found")
    return complaint


def _get_comment_or_404(db: Session, comment_id: UUID) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Not found")
    return comment


def _reaction_snapshot(db: Session, comment_id: UUID, viewer_id: UUID) -> dict[str, Any]:
    like_count = db.scalar(select(func.count(CommentLike.id)).where(CommentLike.comment_id == comment_id)) or 0
    dislike_count = (
        db.scalar(select(func.count(CommentDislike.id)).where(CommentDislike.comment_id == comment_id)) or 0
    )
    viewer_has_liked = (
        db.scalar(
            select(CommentLike.id).where(CommentLike.comment_id == comment_id, CommentLike.user_id == viewer_id).limit(1)
        )
        is not None
    )
    viewer_has_disliked = (
        db.scalar(
            select(CommentDislike.id)
            .where(CommentDislike.comment_id == comment_id, CommentDislike.user_id == viewer_id)
            .limit(1)
        )
        is not None
    )
    return {
        "comment_id": comment_id,
        "like_count": int(like_count),
        "dislike_count": int(dislike_count),
        "viewer_has_liked": viewer_has_liked,
        "viewer_has_disliked": viewer_has_disliked,
    }


def list_comments(db: Session, *, principal: Principal, complaint_id: UUID) -> list[dict[str, Any]]:
    """Comments on a complaint, oldest first, with author fields and reaction counters."""

    _get_complaint_or_404(db, complaint_id)

    like_count = select(func.count(CommentLike.id)).where(CommentLike.comment_id == Comment.id).scalar_subquery()
    dislike_count = (
        select(func.count(CommentDislike.id)).where(CommentDislike.comment_id == Comment.id).scalar_subquery()
    )
    viewer_like = (
        select(func.count(CommentLike.id))
        .where(CommentLike.comment_id == Comment.id, CommentLike.user_id == principal.id)
        .scalar_subquery()
    )
    viewer_dislike = (
        select(func.count(CommentDislike.id))
        .where(CommentDislike.comment_id == Comment.id, CommentDislike.user_id == principal.id)
        .scalar_subquery()
    )

    stmt = (
        select(
            Comment,
            User.name,
            User.profile_photo,
            User.role,
            like_count,
            dislike_count,
            viewer_like,
            viewer_dislike,
        )
        .join(User, Comment.user_id == User.id)
        .where(Comment.complaint_id == complaint_id)
        .order_by(Comment.created_at.asc())
    )

    records: list[dict[str, Any]] = []
    for comment, name, photo, role, likes, dislikes, liked, disliked in db.execute(stmt).all():
        records.append(
            {
                "id": comment.id,
                "complaint_id": comment.complaint_id,
                "user_id": comment.user_id,
                "name": cast(str | None, name),
                "profile_photo": cast(str | None, photo),
                "role": cast(str | None, role),
                "content": comment.content,
                "photo_url": comment.photo_url,
                "parent_id": comment.parent_id,
                "created_at": comment.created_at,
                "like_count": int(likes or 0),
                "dislike_count": int(dislikes or 0),
                "viewer_has_liked": bool(liked),
                "viewer_has_disliked": bool(disliked),
            }
        )
    return records


async def add_comment(
    db: Session,
    *,
    principal: Principal,
    complaint_id: UUID,
    content: str | None = None,
    parent_id: UUID | None = None,
    photo: UploadFile | None = None,
) -> dict[str, Any]:
    """Post a comment, optionally threaded under another comment of the same complaint."""

    complaint = _get_complaint_or_404(db, complaint_id)
    text = (content or "").strip()
    files = present_files([photo])
    if not text and not files:
        raise ValidationError("Content or photo required")

    if parent_id is not None:
        parent = db.get(Comment, parent_id)
        if parent is None or parent.complaint_id != complaint.id:
            raise ValidationError("Invalid parent comment")

    stored = [await upload_photo(files[0], folder=COMMENT_FOLDER)] if files else []

    comment = Comment(
        complaint_id=complaint.id,
        user_id=principal.id,
        content=text or None,
        photo_url=stored[0].url if stored else None,
        parent_id=parent_id,
    )
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        discard_photos(stored)
        logger.exception("Failed to add comment")
        raise UpstreamError("Failed to add comment") from exc

    db.refresh(comment)
    author = db.get(User, principal.id)
    return {
        "id": comment.id,
        "complaint_id": comment.complaint_id,
        "user_id": comment.user_id,
        "name": author.name if author else principal.name,
        "profile_photo": author.profile_photo if author else None,
        "role": author.role if author else principal.role,
        "content": comment.content,
        "photo_url": comment.photo_url,
        "parent_id": comment.parent_id,
        "created_at": comment.created_at,
        "like_count": 0,
        "dislike_count": 0,
        "viewer_has_liked": False,
        "viewer_has_disliked": False,
    }


def react_to_comment(
    db: Session,
    *,
    principal: Principal,
    comment_id: UUID,
    action: str | None,
) -> dict[str, Any]:
    """Set the caller's reaction to ``action`` (``like``, ``dislike`` or ``None``).

    The caller is first removed from both the like and dislike sets, then
    added to the requested set unless it is the reaction they already had.
    Both steps are committed together, so a like on a disliked comment flips
    the two sets at once and a repeated like clears the reaction. Losing a
    race against an identical concurrent request is not an error; the
    snapshot then reflects the reaction that request stored.
    """

    if action not in (None, "like", "dislike"):
        raise ValidationError("Invalid action")
    _get_comment_or_404(db, comment_id)

    had_like = (
        db.scalar(select(CommentLike.id).where(CommentLike.comment_id == comment_id, CommentLike.user_id == principal.id))
        is not None
    )
    had_dislike = (
        db.scalar(
            select(CommentDislike.id).where(
                CommentDislike.comment_id == comment_id, CommentDislike.user_id == principal.id
            )
        )
        is not None
    )

    db.execute(delete(CommentLike).where(CommentLike.comment_id == comment_id, CommentLike.user_id == principal.id))
    db.execute(
        delete(CommentDislike).where(CommentDislike.comment_id == comment_id, CommentDislike.user_id == principal.id)
    )

    if action == "like" and not had_like:
        db.add(CommentLike(comment_id=comment_id, user_id=principal.id))
    elif action == "dislike" and not had_dislike:
        db.add(CommentDislike(comment_id=comment_id, user_id=principal.id))

    try:
        db.commit()
    except IntegrityError:
        # A concurrent request from the same user stored this reaction first.
        db.rollback()
        logger.info("Duplicate %s on comment %s by %s ignored", action, comment_id, principal.id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update reaction")
        raise UpstreamError("Failed to update reaction") from exc

    return _reaction_snapshot(db, comment_id, principal.id)


def delete_comment(db: Session, *, principal: Principal, comment_id: UUID) -> None:
    comment = _get_comment_or_404(db, comment_id)
    policy.ensure_can_delete_comment(principal, comment)

    db.delete(comment)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise UpstreamError("Failed to delete comment") from exc


__all__ = ["list_comments", "add_comment", "react_to_comment", "delete_comment"]
