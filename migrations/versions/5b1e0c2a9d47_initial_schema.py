"""initial schema

Revision ID: 5b1e0c2a9d47
Revises:
Create Date: 2026-10-18 09:12:44.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1e0c2a9d47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

privacy = sa.Enum("PUBLIC", "PRIVATE", "FRIENDS", name="privacy")
activity_type = sa.Enum(
    "profile_create",
    "blog_create",
    "star_star",
    "star_unstar",
    "follow_follow",
    name="activity_type",
)


def upgrade() -> None:
    """Create profiles, posts, social edges, the activity log and statistics."""
    op.create_table(
        "profile",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profile_created_at", "profile", ["created_at"])

    op.create_table(
        "post",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("content", sa.JSON(), nullable=True),
        sa.Column("content_text", sa.Text(), nullable=True),
        sa.Column("privacy", privacy, nullable=False),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column("profile_id", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("ix_post_created_at", "post", ["created_at"])
    op.create_index("ix_post_profile_created", "post", ["profile_id", "created_at"])

    op.create_table(
        "star",
        sa.Column("post_id", sa.String(length=36), nullable=False),
        sa.Column("profile_id", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "profile_id"),
    )
    op.create_index("ix_star_profile_created", "star", ["profile_id", "created_at"])
    op.create_index("ix_star_post_created", "star", ["post_id", "created_at"])

    op.create_table(
        "follow",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("follower_id", sa.String(length=128), nullable=False),
        sa.Column("followed_id", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["follower_id"], ["profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["followed_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "followed_id", name="uq_follow_pair"),
    )
    op.create_index("ix_follow_followed_created", "follow", ["followed_id", "created_at"])

    op.create_table(
        "activity",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.String(length=128), nullable=False),
        sa.Column("type", activity_type, nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=True),
        sa.Column("follow_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_activity_profile_group",
        "activity",
        ["profile_id", "type", "post_id", "follow_id"],
    )

    op.create_table(
        "post_statistic",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("post_views", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "day", name="uq_post_statistic_day"),
    )
    op.create_table(
        "profile_statistic",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("profile_id", sa.String(length=128), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("profile_views", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["profile.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("profile_id", "day", name="uq_profile_statistic_day"),
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_table("profile_statistic")
    op.drop_table("post_statistic")
    op.drop_index("ix_activity_profile_group", table_name="activity")
    op.drop_table("activity")
    op.drop_index("ix_follow_followed_created", table_name="follow")
    op.drop_table("follow")
    op.drop_index("ix_star_post_created", table_name="star")
    op.drop_index("ix_star_profile_created", table_name="star")
    op.drop_table("star")
    op.drop_index("ix_post_profile_created", table_name="post")
    op.drop_index("ix_post_created_at", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_profile_created_at", table_name="profile")
    op.drop_table("profile")
    bind = op.get_bind()
    activity_type.drop(bind, checkfirst=True)
    privacy.drop(bind, checkfirst=True)
