"""Complaint routes: filing, scoped listings, edits, triage and deletion."""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    ComplaintListResponse,
    ComplaintResponse,
    ComplaintStatusUpdateRequest,
    ComplaintUpdateRequest,
    MessageResponse,
)
from ..services import (
    Principal,
    create_complaint,
    delete_complaint,
    get_complaint,
    get_current_principal,
    list_complaints,
    list_my_complaints,
    list_recent_complaints,
    update_complaint,
    update_complaint_status,
)

router = APIRouter(prefix="/complaints", tags=["complaints"])


def _envelope(items) -> ComplaintListResponse:
    return ComplaintListResponse(items=[ComplaintResponse.model_validate(item) for item in items])


@router.get("", response_model=ComplaintListResponse)
async def list_complaints_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintListResponse:
    return _envelope(list_complaints(db, principal=principal))


@router.get("/recent", response_model=ComplaintListResponse)
async def recent_complaints_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintListResponse:
    return _envelope(list_recent_complaints(db, principal=principal))


@router.get("/mine", response_model=ComplaintListResponse)
async def my_complaints_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintListResponse:
    return _envelope(list_my_complaints(db, principal=principal))


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
async def create_complaint_endpoint(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    location_coords: Optional[str] = Form(None),
    photos: list[UploadFile] | None = File(None),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintResponse:
    """File a complaint as ``multipart/form-data`` with up to six ``photos`` parts."""

    complaint = await create_complaint(
        db,
        principal=principal,
        title=title,
        description=description,
        address=address,
        location_coords=location_coords,
        photos=photos,
    )
    return ComplaintResponse.model_validate(complaint)


@router.get("/{complaint_id}", response_model=ComplaintResponse)
async def get_complaint_endpoint(
    complaint_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintResponse:
    return ComplaintResponse.model_validate(get_complaint(db, principal=principal, complaint_id=complaint_id))


@router.put("/{complaint_id}", response_model=ComplaintResponse)
async def update_complaint_endpoint(
    complaint_id: UUID,
    payload: ComplaintUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintResponse:
    complaint = update_complaint(db, principal=principal, complaint_id=complaint_id, payload=payload)
    return ComplaintResponse.model_validate(complaint)


@router.patch("/{complaint_id}/status", response_model=ComplaintResponse)
async def update_status_endpoint(
    complaint_id: UUID,
    payload: ComplaintStatusUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> ComplaintResponse:
    complaint = update_complaint_status(
        db,
        principal=principal,
        complaint_id=complaint_id,
        status=payload.status,
        assigned_to=payload.assigned_to,
    )
    return ComplaintResponse.model_validate(complaint)


@router.delete("/{complaint_id}", response_model=MessageResponse)
async def delete_complaint_endpoint(
    complaint_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> MessageResponse:
    delete_complaint(db, principal=principal, complaint_id=complaint_id)
    return MessageResponse(message="Complaint deleted successfully")
