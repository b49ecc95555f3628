"""Post storage: creating replies, revising them, and loading them by id."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlmodel import col, select

from staff_alias.core.logging import get_logger
from staff_alias.core.time import utcnow
from staff_alias.models.posts import Post, PostRevision

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.models.users import User
    from staff_alias.schemas.posts import PostCreate, PostEdit

logger = get_logger(__name__)


class ContentEngine(Protocol):
    """Operations the alias mediator needs from post storage."""

    async def get_post(self, session: AsyncSession, post_id: UUID) -> Post: ...

    async def create_post(
        self,
        session: AsyncSession,
        *,
        author: User,
        payload: PostCreate,
        commit: bool = True,
    ) -> Post: ...

    async def revise_post(
        self,
        session: AsyncSession,
        post: Post,
        *,
        editor: User,
        payload: PostEdit,
        commit: bool = True,
        editor_authorized: bool = False,
    ) -> Post: ...


def _require_raw(raw: str) -> str:
    if not raw.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Post body cannot be empty.",
        )
    return raw


class SqlContentEngine:
    """Content engine backed by the `posts` and `post_revisions` tables."""

    async def get_post(self, session: AsyncSession, post_id: UUID) -> Post:
        post = await Post.objects.by_id(post_id).first(session)
        if post is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return post

    async def _next_post_number(self, session: AsyncSession, topic_id: UUID) -> int:
        result = await session.exec(
            select(func.max(col(Post.post_number))).where(col(Post.topic_id) == topic_id),
        )
        current = result.first()
        return (current or 0) + 1

    async def create_post(
        self,
        session: AsyncSession,
        *,
        author: User,
        payload: PostCreate,
        commit: bool = True,
    ) -> Post:
        """Append a reply to a topic; `commit=False` leaves the post flushed but open."""
        raw = _require_raw(payload.raw)
        if payload.reply_to_post_number is not None:
            parent_exists = await Post.objects.filter_by(
                topic_id=payload.topic_id,
                post_number=payload.reply_to_post_number,
            ).exists(session)
            if not parent_exists:
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail="reply_to_post_number does not exist in this topic.",
                )

        now = utcnow()
        post = Post(
            user_id=author.id,
            topic_id=payload.topic_id,
            post_number=await self._next_post_number(session, payload.topic_id),
            reply_to_post_number=payload.reply_to_post_number,
            raw=raw,
            whisper=payload.whisper,
            created_at=now,
            updated_at=now,
        )
        session.add(post)
        await session.flush()
        if commit:
            await session.commit()
            await session.refresh(post)
        logger.info(
            "content.post.created",
            extra={"post_id": str(post.id), "topic_id": str(post.topic_id)},
        )
        return post

    async def revise_post(
        self,
        session: AsyncSession,
        post: Post,
        *,
        editor: User,
        payload: PostEdit,
        commit: bool = True,
        editor_authorized: bool = False,
    ) -> Post:
        """Replace the post body and record a revision attributed to `editor`.

        Only the author or staff may edit unless the caller has already
        authorized `editor` (`editor_authorized=True`).
        """
        if not editor_authorized and editor.id != post.user_id and not editor.staff:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
        raw = _require_raw(payload.raw)
        if payload.expected_version is not None and payload.expected_version != post.version:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Post was edited by someone else; reload and try again.",
            )
        if raw == post.raw:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Post body is unchanged.",
            )

        now = utcnow()
        revision = PostRevision(
            post_id=post.id,
            number=post.version + 1,
            user_id=editor.id,
            previous_raw=post.raw,
            raw=raw,
            edit_reason=payload.edit_reason,
            created_at=now,
        )
        post.raw = raw
        post.version += 1
        post.last_editor_id = editor.id
        post.updated_at = now
        session.add(revision)
        session.add(post)
        await session.flush()
        if commit:
            await session.commit()
            await session.refresh(post)
        logger.info(
            "content.post.revised",
            extra={"post_id": str(post.id), "version": post.version},
        )
        return post


async def list_revisions(session: AsyncSession, post_id: UUID) -> list[PostRevision]:
    """Return a post's revisions, oldest first."""
    return await (
        PostRevision.objects.filter_by(post_id=post_id)
        .order_by(col(PostRevision.number).asc())
        .all(session)
    )
