"""Audit trail routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import AdminLogListResponse, AdminLogResponse
from ..services import Principal, get_current_principal, list_logs, list_recent_logs, require_roles

router = APIRouter(prefix="/admin-logs", tags=["admin-logs"])


@router.get("", response_model=AdminLogListResponse)
async def list_logs_endpoint(
    principal: Principal = Depends(require_roles("admin")),
    db: Session = Depends(get_session),
) -> AdminLogListResponse:
    return AdminLogListResponse(items=[AdminLogResponse(**item) for item in list_logs(db, principal=principal)])


@router.get("/recent", response_model=AdminLogListResponse)
async def recent_logs_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> AdminLogListResponse:
    return AdminLogListResponse(items=[AdminLogResponse(**item) for item in list_recent_logs(db)])
