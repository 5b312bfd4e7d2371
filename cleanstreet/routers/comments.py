"""Comment and reaction routes for complaints."""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..errors import ValidationError
from ..schemas import CommentListResponse, CommentResponse, MessageResponse, ReactionRequest, ReactionResponse
from ..services import Principal, add_comment, delete_comment, get_current_principal, list_comments, react_to_comment

router = APIRouter(prefix="/comments", tags=["comments"])


def _parse_parent_id(raw: str | None) -> UUID | None:
    if raw is None or not raw.strip():
        return None
    try:
        return UUID(raw.strip())
    except ValueError as exc:
        raise ValidationError("parent_id must be a valid id") from exc


@router.get("/{complaint_id}", response_model=CommentListResponse)
async def list_comments_endpoint(
    complaint_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> CommentListResponse:
    items = list_comments(db, principal=principal, complaint_id=complaint_id)
    return CommentListResponse(items=[CommentResponse(**item) for item in items])


@router.post("/{complaint_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment_endpoint(
    complaint_id: UUID,
    content: Optional[str] = Form(None),
    parent_id: Optional[str] = Form(None),
    photo: UploadFile | None = File(None),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> CommentResponse:
    comment = await add_comment(
        db,
        principal=principal,
        complaint_id=complaint_id,
        content=content,
        parent_id=_parse_parent_id(parent_id),
        photo=photo,
    )
    return CommentResponse(**comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment_endpoint(
    comment_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> MessageResponse:
    delete_comment(db, principal=principal, comment_id=comment_id)
    return MessageResponse(message="Comment deleted")


@router.patch("/{comment_id}/react", response_model=ReactionResponse)
async def react_endpoint(
    comment_id: UUID,
    payload: ReactionRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ReactionResponse:
    snapshot = react_to_comment(db, principal=principal, comment_id=comment_id, action=payload.action)
    return ReactionResponse(**snapshot)
