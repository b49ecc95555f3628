"""Audit ledger recording which staff member performed each aliased action."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import col

from staff_alias.core.time import utcnow
from staff_alias.models.alias_audit_entries import AliasAction, AliasAuditEntry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession


async def record_alias_action(
    session: AsyncSession,
    *,
    user_id: UUID,
    post_id: UUID,
    action: AliasAction,
    commit: bool = True,
) -> AliasAuditEntry:
    """Append an audit entry. Call only after the post change has committed."""
    entry = AliasAuditEntry(
        user_id=user_id,
        post_id=post_id,
        action=action.value,
        created_at=utcnow(),
    )
    session.add(entry)
    if commit:
        await session.commit()
        await session.refresh(entry)
    return entry


async def alias_action_exists(
    session: AsyncSession,
    *,
    user_id: UUID,
    post_id: UUID,
    action: AliasAction,
) -> bool:
    return await AliasAuditEntry.objects.filter_by(
        user_id=user_id,
        post_id=post_id,
        action=action.value,
    ).exists(session)


async def entries_for_post(
    session: AsyncSession,
    post_id: UUID,
) -> AsyncIterator[AliasAuditEntry]:
    """Yield a post's audit history, oldest first, streaming from the database."""
    stmt = (
        AliasAuditEntry.objects.filter_by(post_id=post_id)
        .order_by(col(AliasAuditEntry.created_at).asc())
        .statement()
    )
    result = await session.stream_scalars(stmt)
    async for entry in result:
        yield entry


async def entries_by_actor(
    session: AsyncSession,
    user_id: UUID,
    *,
    limit: int = 50,
    offset: int = 0,
) -> list[AliasAuditEntry]:
    """Most recent aliased actions performed by one staff member."""
    return await (
        AliasAuditEntry.objects.filter_by(user_id=user_id)
        .order_by(col(AliasAuditEntry.created_at).desc())
        .offset(offset)
        .limit(limit)
        .all(session)
    )
