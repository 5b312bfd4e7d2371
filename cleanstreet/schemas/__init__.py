"""Convenience exports for schema layer."""
from .admin_logs import AdminLogListResponse, AdminLogResponse, LogActor
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .comments import CommentListResponse, CommentResponse, ReactionRequest, ReactionResponse
from .complaints import (
    ComplaintListResponse,
    ComplaintResponse,
    ComplaintStatusUpdateRequest,
    ComplaintUpdateRequest,
    MessageResponse,
)
from .users import (
    PasswordChangeRequest,
    PhotoUploadResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    UserListResponse,
    UserResponse,
)
from .votes import VoteRequest, VoteStateResponse, VoteSummaryResponse

__all__ = [
    "AdminLogListResponse",
    "AdminLogResponse",
    "LogActor",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "CommentListResponse",
    "CommentResponse",
    "ReactionRequest",
    "ReactionResponse",
    "ComplaintListResponse",
    "ComplaintResponse",
    "ComplaintStatusUpdateRequest",
    "ComplaintUpdateRequest",
    "MessageResponse",
    "PasswordChangeRequest",
    "PhotoUploadResponse",
    "ProfileUpdateRequest",
    "RoleUpdateRequest",
    "UserListResponse",
    "UserResponse",
    "VoteRequest",
    "VoteStateResponse",
    "VoteSummaryResponse",
]
