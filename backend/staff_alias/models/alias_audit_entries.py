"""Append-only ledger linking aliased actions to the real staff member."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field

from staff_alias.core.time import utcnow
from staff_alias.models.base import QueryModel

RUNTIME_ANNOTATION_TYPES = (datetime,)


class AliasAction(str, Enum):
    """Operations that can be performed as the alias."""

    CREATE = "create"
    UPDATE = "update"


class AliasAuditEntry(QueryModel, table=True):
    """One row per successful aliased operation; never updated or deleted."""

    __tablename__ = "staff_alias_audit_entries"  # pyright: ignore[reportAssignmentType]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    post_id: UUID = Field(foreign_key="posts.id", index=True)
    action: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
