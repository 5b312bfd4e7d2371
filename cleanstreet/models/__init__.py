"""Convenience exports for ORM models."""
from .admin_log import AdminLog
from .comment import Comment, CommentDislike, CommentLike
from .complaint import Complaint
from .user import User
from .vote import Vote

__all__ = [
    "AdminLog",
    "Comment",
    "CommentLike",
    "CommentDislike",
    "Complaint",
    "User",
    "Vote",
]
