"""Schemas for staff alias status and audit query endpoints."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlmodel import SQLModel

RUNTIME_ANNOTATION_TYPES = (datetime, UUID)


class AliasStatusRead(SQLModel):
    enabled: bool
    username: str | None = None


class AliasAuditEntryRead(SQLModel):
    """Audit entry payload returned by read endpoints."""

    id: UUID
    user_id: UUID
    post_id: UUID
    action: str
    created_at: datetime
