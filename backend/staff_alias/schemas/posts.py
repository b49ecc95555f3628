"""Schemas for post create/update payloads and responses."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

RUNTIME_ANNOTATION_TYPES = (datetime, UUID)


class PostCreate(SQLModel):
    """Payload for replying to a topic, optionally as the staff alias."""

    raw: str
    topic_id: UUID
    reply_to_post_number: int | None = Field(default=None, ge=1)
    whisper: bool = False
    as_staff_alias: bool = False


class PostEdit(SQLModel):
    """Editable post fields."""

    raw: str
    edit_reason: str | None = None
    expected_version: int | None = Field(
        default=None,
        ge=1,
        description="Reject the edit with 409 if the post has moved past this version.",
    )


class PostUpdate(SQLModel):
    """Envelope for editing a post, optionally as the staff alias."""

    post: PostEdit
    as_staff_alias: bool = False


class PostRead(SQLModel):
    """Post payload returned by create/update endpoints."""

    id: UUID
    user_id: UUID
    topic_id: UUID
    post_number: int
    reply_to_post_number: int | None = None
    raw: str
    whisper: bool
    version: int
    last_editor_id: UUID | None = None
    authored_as_alias: bool = False
    created_at: datetime
    updated_at: datetime
