"""Profile and role administration routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import (
    MessageResponse,
    PasswordChangeRequest,
    PhotoUploadResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    UserListResponse,
    UserResponse,
)
from ..services import (
    Principal,
    change_password,
    get_current_principal,
    get_me,
    list_users,
    require_roles,
    update_me,
    update_user_role,
    upload_profile_photo,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def me_endpoint(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> UserResponse:
    return UserResponse.model_validate(get_me(db, principal=principal))


@router.put("/me", response_model=UserResponse)
async def update_me_endpoint(
    payload: ProfileUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> UserResponse:
    return UserResponse.model_validate(update_me(db, principal=principal, payload=payload))


@router.post("/me/photo", response_model=PhotoUploadResponse)
async def upload_photo_endpoint(
    photo: UploadFile | None = File(None),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> PhotoUploadResponse:
    user = await upload_profile_photo(db, principal=principal, file=photo)
    return PhotoUploadResponse(url=user.profile_photo, user=UserResponse.model_validate(user))


@router.post("/me/password", response_model=MessageResponse)
async def change_password_endpoint(
    payload: PasswordChangeRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_session),
) -> MessageResponse:
    change_password(db, principal=principal, payload=payload)
    return MessageResponse(message="Password updated")


@router.get("", response_model=UserListResponse)
async def list_users_endpoint(
    principal: Principal = Depends(require_roles("admin")),
    db: Session = Depends(get_session),
) -> UserListResponse:
    return UserListResponse(items=[UserResponse.model_validate(user) for user in list_users(db, principal=principal)])


@router.put("/{user_id}/role", response_model=UserResponse)
async def update_role_endpoint(
    user_id: UUID,
    payload: RoleUpdateRequest,
    principal: Principal = Depends(require_roles("admin")),
    db: Session = Depends(get_session),
) -> UserResponse:
    updated = update_user_role(db, principal=principal, target_user_id=user_id, new_role=payload.role)
    return UserResponse.model_validate(updated)
