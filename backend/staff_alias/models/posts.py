"""Post and post revision models owned by the content engine."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, Text
from sqlmodel import Field

from staff_alias.core.time import utcnow
from staff_alias.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class Post(QueryModel, table=True):
    """A topic reply with its current body and revision counter."""

    __tablename__ = "posts"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    topic_id: UUID = Field(index=True)
    post_number: int = Field(default=1)
    reply_to_post_number: int | None = None
    raw: str = Field(sa_column=Column(Text, nullable=False))
    whisper: bool = Field(default=False)
    # Starts at 1; each revision bumps it by one.
    version: int = Field(default=1)
    last_editor_id: UUID | None = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PostRevision(QueryModel, table=True):
    """Edit history row recording who changed a post and how."""

    __tablename__ = "post_revisions"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    post_id: UUID = Field(foreign_key="posts.id", index=True)
    number: int
    user_id: UUID = Field(foreign_key="users.id", index=True)
    previous_raw: str = Field(sa_column=Column(Text, nullable=False))
    raw: str = Field(sa_column=Column(Text, nullable=False))
    edit_reason: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
