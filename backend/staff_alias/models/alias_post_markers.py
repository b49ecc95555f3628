"""Durable marker for posts authored through the staff alias."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlmodel import Field

from staff_alias.core.time import utcnow
from staff_alias.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class AliasPostMarker(QueryModel, table=True):
    """Presence of a row means the post was created as the alias."""

    __tablename__ = "staff_alias_post_markers"  # pyright: ignore[reportAssignmentType]

    post_id: UUID = Field(foreign_key="posts.id", primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
