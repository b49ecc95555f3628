"""Single entry point for creating and editing posts, optionally as the staff alias.

Each request runs the same sequence:

1. Ask the registry whether aliasing is enabled and evaluate the policy.
2. On deny, raise `AliasActionDenied` before anything is written.
3. On allow, hand the alias identity to the content engine as author/editor.
4. Once the post change has committed, append an audit entry naming the real
   staff member. A failed audit write is logged and does not undo the post.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from staff_alias.core.logging import get_logger
from staff_alias.models.alias_audit_entries import AliasAction
from staff_alias.services.alias_audit import record_alias_action
from staff_alias.services.alias_policy import (
    AliasActionDenied,
    CreateContext,
    DenyReason,
    PolicyDecision,
    UpdateContext,
    evaluate_alias_policy,
)
from staff_alias.services.alias_registry import AliasIdentity, AliasNotConfiguredError
from staff_alias.services.identity_substitution import (
    is_alias_authored,
    mark_as_alias_authored,
    prepare_author,
)

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.models.posts import Post
    from staff_alias.models.users import User
    from staff_alias.schemas.posts import PostCreate, PostUpdate
    from staff_alias.services.alias_registry import AliasRegistry
    from staff_alias.services.content_engine import ContentEngine

logger = get_logger(__name__)


def _denied(reason: DenyReason, *, actor: User, action: AliasAction) -> AliasActionDenied:
    logger.info(
        "staff_alias.policy.denied",
        extra={"actor_id": str(actor.id), "action": action.value, "reason": reason.value},
    )
    return AliasActionDenied(reason)


@dataclass
class MediatedPost:
    """Outcome of a successful create or update."""

    post: Post
    authored_as_alias: bool
    audit_recorded: bool = False


class AliasRequestMediator:
    """Orchestrates policy, identity substitution, content mutation, and audit."""

    def __init__(self, *, registry: AliasRegistry, content_engine: ContentEngine) -> None:
        self.registry = registry
        self.content_engine = content_engine

    async def handle_create(
        self,
        session: AsyncSession,
        *,
        actor: User,
        payload: PostCreate,
    ) -> MediatedPost:
        """Create a post, as the alias when `payload.as_staff_alias` is set."""
        decision = evaluate_alias_policy(
            actor=actor,
            action=AliasAction.CREATE,
            requested_as_alias=payload.as_staff_alias,
            alias_enabled=self.registry.is_enabled(),
            context=CreateContext(is_whisper=payload.whisper),
        )
        self._raise_if_denied(decision, actor=actor, action=AliasAction.CREATE)

        if not decision.aliased:
            post = await self.content_engine.create_post(
                session,
                author=actor,
                payload=payload,
            )
            return MediatedPost(post=post, authored_as_alias=False)

        identity = await self._resolve_identity(session, actor=actor, action=AliasAction.CREATE)
        post = await self.content_engine.create_post(
            session,
            author=prepare_author(decision, identity),
            payload=payload,
            commit=False,
        )
        mark_as_alias_authored(session, post)
        await session.commit()
        await session.refresh(post)
        logger.info(
            "staff_alias.post.created",
            extra={"post_id": str(post.id), "actor_id": str(actor.id)},
        )

        recorded = await self._record(
            session,
            actor=actor,
            post=post,
            action=AliasAction.CREATE,
        )
        return MediatedPost(post=post, authored_as_alias=True, audit_recorded=recorded)

    async def handle_update(
        self,
        session: AsyncSession,
        *,
        actor: User,
        post_id: UUID,
        payload: PostUpdate,
    ) -> MediatedPost:
        """Edit a post, as the alias when `payload.as_staff_alias` is set."""
        post = await self.content_engine.get_post(session, post_id)
        alias_authored = await is_alias_authored(session, post.id)
        decision = evaluate_alias_policy(
            actor=actor,
            action=AliasAction.UPDATE,
            requested_as_alias=payload.as_staff_alias,
            alias_enabled=self.registry.is_enabled(),
            context=UpdateContext(target_is_alias_authored=alias_authored),
        )
        self._raise_if_denied(decision, actor=actor, action=AliasAction.UPDATE)

        if not decision.aliased:
            post = await self.content_engine.revise_post(
                session,
                post,
                editor=actor,
                payload=payload.post,
            )
            return MediatedPost(post=post, authored_as_alias=alias_authored)

        identity = await self._resolve_identity(session, actor=actor, action=AliasAction.UPDATE)
        post = await self.content_engine.revise_post(
            session,
            post,
            editor=prepare_author(decision, identity),
            payload=payload.post,
            editor_authorized=True,
        )
        logger.info(
            "staff_alias.post.revised",
            extra={"post_id": str(post.id), "actor_id": str(actor.id)},
        )

        recorded = await self._record(
            session,
            actor=actor,
            post=post,
            action=AliasAction.UPDATE,
        )
        return MediatedPost(post=post, authored_as_alias=True, audit_recorded=recorded)

    def _raise_if_denied(
        self,
        decision: PolicyDecision,
        *,
        actor: User,
        action: AliasAction,
    ) -> None:
        if decision.allowed:
            return
        raise _denied(decision.reason or DenyReason.FEATURE_DISABLED, actor=actor, action=action)

    async def _resolve_identity(
        self,
        session: AsyncSession,
        *,
        actor: User,
        action: AliasAction,
    ) -> AliasIdentity:
        # A missing alias account is reported to the caller as a disabled feature;
        # the registry logs the operational warning.
        try:
            return await self.registry.resolve_identity(session)
        except AliasNotConfiguredError as exc:
            raise _denied(DenyReason.FEATURE_DISABLED, actor=actor, action=action) from exc

    async def _record(
        self,
        session: AsyncSession,
        *,
        actor: User,
        post: Post,
        action: AliasAction,
    ) -> bool:
        # The post change is already committed. A SAVEPOINT scopes any failure to
        # the audit row so the caller's instances stay loaded.
        try:
            async with session.begin_nested():
                await record_alias_action(
                    session,
                    user_id=actor.id,
                    post_id=post.id,
                    action=action,
                    commit=False,
                )
            await session.commit()
        except SQLAlchemyError:
            logger.exception(
                "staff_alias.audit.write_failed",
                extra={
                    "post_id": str(post.id),
                    "actor_id": str(actor.id),
                    "action": action.value,
                },
            )
            return False
        return True
