"""Staff alias status and accountability (audit) endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from staff_alias.api.deps import require_staff_auth
from staff_alias.core.auth import get_auth_context
from staff_alias.db.session import get_session
from staff_alias.schemas.staff_alias import AliasAuditEntryRead, AliasStatusRead
from staff_alias.services.alias_audit import entries_by_actor, entries_for_post
from staff_alias.services.alias_registry import get_alias_registry

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.core.auth import AuthContext
    from staff_alias.services.alias_registry import AliasRegistry

router = APIRouter(prefix="/staff-alias", tags=["staff-alias"])
SESSION_DEP = Depends(get_session)
AUTH_DEP = Depends(get_auth_context)
STAFF_DEP = Depends(require_staff_auth)
REGISTRY_DEP = Depends(get_alias_registry)


@router.get("/status", response_model=AliasStatusRead)
async def get_alias_status(
    _auth: AuthContext = AUTH_DEP,
    registry: AliasRegistry = REGISTRY_DEP,
) -> AliasStatusRead:
    """Report whether posting as the alias is available."""
    enabled = registry.is_enabled()
    return AliasStatusRead(
        enabled=enabled,
        username=registry.config.normalized_username if enabled else None,
    )


@router.get("/posts/{post_id}/audit", response_model=list[AliasAuditEntryRead])
async def list_post_audit_entries(
    post_id: UUID,
    session: AsyncSession = SESSION_DEP,
    _auth: AuthContext = STAFF_DEP,
) -> list[AliasAuditEntryRead]:
    """Full accountability history of one alias post, oldest first."""
    return [
        AliasAuditEntryRead.model_validate(entry, from_attributes=True)
        async for entry in entries_for_post(session, post_id)
    ]


@router.get("/actors/{user_id}/audit", response_model=list[AliasAuditEntryRead])
async def list_actor_audit_entries(
    user_id: UUID,
    session: AsyncSession = SESSION_DEP,
    _auth: AuthContext = STAFF_DEP,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> list[AliasAuditEntryRead]:
    """Aliased actions performed by one staff member, newest first."""
    entries = await entries_by_actor(session, user_id, limit=limit, offset=offset)
    return [AliasAuditEntryRead.model_validate(e, from_attributes=True) for e in entries]
