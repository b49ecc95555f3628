"""Swapping the real actor for the alias and marking alias-authored posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from staff_alias.core.time import utcnow
from staff_alias.models.alias_post_markers import AliasPostMarker

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.models.posts import Post
    from staff_alias.models.users import User
    from staff_alias.services.alias_policy import PolicyDecision
    from staff_alias.services.alias_registry import AliasIdentity


def prepare_author(decision: PolicyDecision, alias_identity: AliasIdentity) -> User:
    """Return the user the content engine should record as author or editor."""
    if not decision.allowed or not decision.aliased:
        msg = "prepare_author requires an allowed alias decision"
        raise ValueError(msg)
    return alias_identity.user


def mark_as_alias_authored(session: AsyncSession, post: Post) -> AliasPostMarker:
    """Stage the marker in the session; it commits with the post."""
    marker = AliasPostMarker(post_id=post.id, created_at=utcnow())
    session.add(marker)
    return marker


async def is_alias_authored(session: AsyncSession, post_id: UUID) -> bool:
    return await AliasPostMarker.objects.filter_by(post_id=post_id).exists(session)
