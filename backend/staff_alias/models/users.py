"""User model for forum members, staff, and the alias account."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field

from staff_alias.core.time import utcnow
from staff_alias.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class User(QueryModel, table=True):
    """Directory entry for a person or shared account."""

    __tablename__ = "users"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(index=True, unique=True)
    name: str | None = None
    admin: bool = Field(default=False)
    moderator: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def staff(self) -> bool:
        return self.admin or self.moderator
