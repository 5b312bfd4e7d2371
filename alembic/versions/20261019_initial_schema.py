"""Initial CleanStreet schema.

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _uuid() -> postgresql.UUID:
    return postgresql.UUID(as_uuid=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column("location", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("bio", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("profile_photo", sa.String(length=1024), nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "complaints",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("user_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("photos", sa.JSON(), nullable=False),
        sa.Column("location_coords", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("address", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("assigned_to", sa.String(length=150), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="received"),
        *_timestamps(),
    )
    op.create_index("ix_complaints_user_id", "complaints", ["user_id"])
    op.create_index("ix_complaints_status", "complaints", ["status"])
    op.create_index("ix_complaints_created_at", "complaints", ["created_at"])

    op.create_table(
        "comments",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("complaint_id", _uuid(), sa.ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("parent_id", _uuid(), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("photo_url", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_comments_complaint_id", "comments", ["complaint_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])

    for table, constraint in (
        ("comment_likes", "uq_comment_likes_comment_user"),
        ("comment_dislikes", "uq_comment_dislikes_comment_user"),
    ):
        op.create_table(
            table,
            sa.Column("id", _uuid(), primary_key=True),
            sa.Column("comment_id", _uuid(), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=False),
            sa.Column("user_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("comment_id", "user_id", name=constraint),
        )
        op.create_index(f"ix_{table}_comment_id", table, ["comment_id"])
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])

    op.create_table(
        "votes",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("user_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("complaint_id", _uuid(), sa.ForeignKey("complaints.id", ondelete="CASCADE"), nullable=False),
        sa.Column("vote_type", sa.String(length=8), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "complaint_id", name="uq_votes_user_complaint"),
    )
    op.create_index("ix_votes_user_id", "votes", ["user_id"])
    op.create_index("ix_votes_complaint_id", "votes", ["complaint_id"])
    op.create_index("ix_votes_created_at", "votes", ["created_at"])

    op.create_table(
        "admin_logs",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("user_id", _uuid(), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_admin_logs_user_id", "admin_logs", ["user_id"])
    op.create_index("ix_admin_logs_timestamp", "admin_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_table("admin_logs")
    op.drop_table("votes")
    op.drop_table("comment_dislikes")
    op.drop_table("comment_likes")
    op.drop_table("comments")
    op.drop_table("complaints")
    op.drop_table("users")
