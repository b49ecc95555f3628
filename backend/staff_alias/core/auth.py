"""Bearer-token authentication for requests forwarded by the session layer.

The forum's session service authenticates end users and forwards each request
with the shared `LOCAL_AUTH_TOKEN` and the acting user's id in `X-Actor-Id`.
"""

from __future__ import annotations

from dataclasses import dataclass
from hmac import compare_digest
from typing import TYPE_CHECKING, Literal
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from staff_alias.core.config import settings
from staff_alias.core.logging import get_logger
from staff_alias.db.session import get_session
from staff_alias.models.users import User

if TYPE_CHECKING:
    from sqlmodel.ext.asyncio.session import AsyncSession

logger = get_logger(__name__)
SESSION_DEP = Depends(get_session)
ACTOR_ID_HEADER = "X-Actor-Id"


@dataclass
class AuthContext:
    """Authenticated user context resolved from inbound auth headers."""

    actor_type: Literal["user"]
    user: User


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if not value:
        return None
    if not value.lower().startswith("bearer "):
        return None
    token = value.split(" ", maxsplit=1)[1].strip()
    return token or None


def _parse_actor_id(raw: str | None) -> UUID | None:
    if raw is None:
        return None
    try:
        return UUID(raw.strip())
    except ValueError:
        return None


async def get_auth_context(
    request: Request,
    session: AsyncSession = SESSION_DEP,
) -> AuthContext:
    """Resolve the acting user or raise 401."""
    token = _extract_bearer_token(request.headers.get("Authorization"))
    expected = settings.local_auth_token.strip()
    if token is None or not expected or not compare_digest(token, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    actor_id = _parse_actor_id(request.headers.get(ACTOR_ID_HEADER))
    if actor_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    user = await User.objects.by_id(actor_id).first(session)
    if user is None:
        logger.info("auth.actor.unknown", extra={"actor_id": str(actor_id)})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return AuthContext(actor_type="user", user=user)
