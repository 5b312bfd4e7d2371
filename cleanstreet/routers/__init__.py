"""Aggregate router exports."""
from .admin_logs import router as admin_logs_router
from .auth import router as auth_router
from .comments import router as comments_router
from .complaints import router as complaints_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "admin_logs_router",
    "auth_router",
    "comments_router",
    "complaints_router",
    "users_router",
    "votes_router",
]
