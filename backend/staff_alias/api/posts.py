"""Post create and edit endpoints, with optional staff alias authorship."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends

from staff_alias.api.deps import get_alias_mediator
from staff_alias.core.auth import get_auth_context
from staff_alias.db.session import get_session
from staff_alias.schemas.posts import PostCreate, PostRead, PostUpdate

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.core.auth import AuthContext
    from staff_alias.services.alias_mediator import AliasRequestMediator, MediatedPost

router = APIRouter(prefix="/posts", tags=["posts"])
SESSION_DEP = Depends(get_session)
AUTH_DEP = Depends(get_auth_context)
MEDIATOR_DEP = Depends(get_alias_mediator)


def _to_read(result: MediatedPost) -> PostRead:
    return PostRead.model_validate(
        {
            **result.post.model_dump(),
            "authored_as_alias": result.authored_as_alias,
        },
    )


@router.post("", response_model=PostRead)
async def create_post(
    payload: PostCreate,
    session: AsyncSession = SESSION_DEP,
    auth: AuthContext = AUTH_DEP,
    mediator: AliasRequestMediator = MEDIATOR_DEP,
) -> PostRead:
    """Reply to a topic. Set `as_staff_alias` to post as the staff alias."""
    result = await mediator.handle_create(session, actor=auth.user, payload=payload)
    return _to_read(result)


@router.put("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: UUID,
    payload: PostUpdate,
    session: AsyncSession = SESSION_DEP,
    auth: AuthContext = AUTH_DEP,
    mediator: AliasRequestMediator = MEDIATOR_DEP,
) -> PostRead:
    """Edit a post. Set `as_staff_alias` to edit an alias post as the alias."""
    result = await mediator.handle_update(
        session,
        actor=auth.user,
        post_id=post_id,
        payload=payload,
    )
    return _to_read(result)
