"""Convenience exports for service layer."""
from .audit_log_service import list_logs, list_recent_logs, record_log
from .auth_service import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_current_principal,
    get_current_user,
    register_user,
    require_roles,
)
from .comment_service import add_comment, delete_comment, list_comments, react_to_comment
from .complaint_service import (
    create_complaint,
    delete_complaint,
    get_complaint,
    list_complaints,
    list_my_complaints,
    list_recent_complaints,
    update_complaint,
    update_complaint_status,
)
from .policy import Principal
from .spaces_service import SpacesConfigurationError, SpacesUploadError, get_spaces_client, upload_file_to_spaces
from .user_service import (
    change_password,
    get_me,
    list_users,
    update_me,
    update_user_role,
    upload_profile_photo,
)
from .vote_service import set_vote, vote_summary

__all__ = [
    "list_logs",
    "list_recent_logs",
    "record_log",
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "get_current_principal",
    "get_current_user",
    "register_user",
    "require_roles",
    "add_comment",
    "delete_comment",
    "list_comments",
    "react_to_comment",
    "create_complaint",
    "delete_complaint",
    "get_complaint",
    "list_complaints",
    "list_my_complaints",
    "list_recent_complaints",
    "update_complaint",
    "update_complaint_status",
    "Principal",
    "SpacesConfigurationError",
    "SpacesUploadError",
    "get_spaces_client",
    "upload_file_to_spaces",
    "change_password",
    "get_me",
    "list_users",
    "update_me",
    "update_user_role",
    "upload_profile_photo",
    "set_vote",
    "vote_summary",
]
