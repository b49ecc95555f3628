"""Reusable FastAPI dependencies for auth and the alias mediator."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status

from staff_alias.core.auth import AuthContext, get_auth_context
from staff_alias.services.alias_mediator import AliasRequestMediator
from staff_alias.services.alias_registry import AliasRegistry, get_alias_registry
from staff_alias.services.content_engine import SqlContentEngine

AUTH_DEP = Depends(get_auth_context)
REGISTRY_DEP = Depends(get_alias_registry)

_content_engine = SqlContentEngine()


def get_alias_mediator(registry: AliasRegistry = REGISTRY_DEP) -> AliasRequestMediator:
    return AliasRequestMediator(registry=registry, content_engine=_content_engine)


def require_staff_auth(auth: AuthContext = AUTH_DEP) -> AuthContext:
    """Require an authenticated admin or moderator."""
    if not auth.user.staff:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return auth
