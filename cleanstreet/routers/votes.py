"""Vote routes for complaints."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import VoteRequest, VoteStateResponse, VoteSummaryResponse
from ..services import Principal, get_current_principal, set_vote, vote_summary

router = APIRouter(prefix="/votes", tags=["votes"])


@router.get("/{complaint_id}/summary", response_model=VoteSummaryResponse)
async def vote_summary_endpoint(
    complaint_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> VoteSummaryResponse:
    return VoteSummaryResponse(**vote_summary(db, complaint_id=complaint_id))


@router.post("/{complaint_id}", response_model=VoteStateResponse)
async def set_vote_endpoint(
    complaint_id: UUID,
    payload: VoteRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> VoteStateResponse:
    return VoteStateResponse(**set_vote(db, principal=principal, complaint_id=complaint_id, vote_type=payload.vote_type))
