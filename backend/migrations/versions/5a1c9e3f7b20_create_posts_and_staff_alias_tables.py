"""Create users, posts, post revisions, and staff alias marker/audit tables.

Revision ID: 5a1c9e3f7b20
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "5a1c9e3f7b20"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("username", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("admin", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("moderator", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_users_username", "users", ["username"], unique=True)

    if not inspector.has_table("posts"):
        op.create_table(
            "posts",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("user_id", sa.Uuid(), nullable=False),
            sa.Column("topic_id", sa.Uuid(), nullable=False),
            sa.Column("post_number", sa.Integer(), nullable=False),
            sa.Column("reply_to_post_number", sa.Integer(), nullable=True),
            sa.Column("raw", sa.Text(), nullable=False),
            sa.Column("whisper", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
            sa.Column("last_editor_id", sa.Uuid(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["last_editor_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_posts_user_id", "posts", ["user_id"])
        op.create_index("ix_posts_topic_id", "posts", ["topic_id"])

    if not inspector.has_table("post_revisions"):
        op.create_table(
            "post_revisions",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("post_id", sa.Uuid(), nullable=False),
            sa.Column("number", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Uuid(), nullable=False),
            sa.Column("previous_raw", sa.Text(), nullable=False),
            sa.Column("raw", sa.Text(), nullable=False),
            sa.Column("edit_reason", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["post_id"], ["posts.id"]),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_post_revisions_post_id", "post_revisions", ["post_id"])
        op.create_index("ix_post_revisions_user_id", "post_revisions", ["user_id"])

    if not inspector.has_table("staff_alias_post_markers"):
        op.create_table(
            "staff_alias_post_markers",
            sa.Column("post_id", sa.Uuid(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["post_id"], ["posts.id"]),
            sa.PrimaryKeyConstraint("post_id"),
        )

    if not inspector.has_table("staff_alias_audit_entries"):
        op.create_table(
            "staff_alias_audit_entries",
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("user_id", sa.Uuid(), nullable=False),
            sa.Column("post_id", sa.Uuid(), nullable=False),
            sa.Column("action", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["post_id"], ["posts.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(
            "ix_staff_alias_audit_entries_user_id", "staff_alias_audit_entries", ["user_id"]
        )
        op.create_index(
            "ix_staff_alias_audit_entries_post_id", "staff_alias_audit_entries", ["post_id"]
        )
        op.create_index(
            "ix_staff_alias_audit_entries_action", "staff_alias_audit_entries", ["action"]
        )
        op.create_index(
            "ix_staff_alias_audit_entries_created_at",
            "staff_alias_audit_entries",
            ["created_at"],
        )


def downgrade() -> None:
    op.drop_table("staff_alias_audit_entries")
    op.drop_table("staff_alias_post_markers")
    op.drop_table("post_revisions")
    op.drop_table("posts")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
