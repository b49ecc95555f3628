"""Resolution and caching of the configured staff alias account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from staff_alias.core.config import settings
from staff_alias.core.logging import get_logger
from staff_alias.models.users import User

if TYPE_CHECKING:
    from uuid import UUID

    from sqlmodel.ext.asyncio.session import AsyncSession

    from staff_alias.core.config import AliasConfig

logger = get_logger(__name__)


class AliasNotConfiguredError(LookupError):
    """Raised when the alias feature is off or no user matches the username."""


@dataclass(frozen=True)
class AliasIdentity:
    """The resolved alias account and the username it was resolved from."""

    user: User
    username: str

    @property
    def id(self) -> UUID:
        return self.user.id


class AliasRegistry:
    """Holds the alias configuration and a per-process identity cache.

    The cache is keyed by the configured username and re-validated against the
    user directory on each use, so a renamed or deleted alias account is picked
    up without a restart. Concurrent refreshes are harmless: they resolve the
    same username and the last writer wins.
    """

    def __init__(self, config: AliasConfig) -> None:
        self._config = config
        self._cached: AliasIdentity | None = None
        self._warned_for: str | None = None

    @property
    def config(self) -> AliasConfig:
        return self._config

    def reconfigure(self, config: AliasConfig) -> None:
        """Swap in new settings; the cached identity is dropped if the name changed."""
        if config.normalized_username != self._config.normalized_username:
            self._cached = None
            self._warned_for = None
        self._config = config

    def is_enabled(self) -> bool:
        return self._config.enabled and bool(self._config.normalized_username)

    async def resolve_identity(self, session: AsyncSession) -> AliasIdentity:
        """Return the alias identity, raising `AliasNotConfiguredError` when absent."""
        username = self._config.normalized_username
        if not username:
            raise AliasNotConfiguredError("No staff alias username is configured.")

        cached = self._cached
        if cached is not None and cached.username == username:
            current = await User.objects.by_id(cached.id).first(session)
            if current is not None and current.username == username:
                # Rebind to this session's instance of the same account.
                self._cached = AliasIdentity(user=current, username=username)
                return self._cached
            logger.info(
                "staff_alias.registry.cache_stale",
                extra={"alias_username": username, "cached_user_id": str(cached.id)},
            )
            self._cached = None

        user = await User.objects.filter_by(username=username).first(session)
        if user is None:
            self._warn_not_configured(username)
            raise AliasNotConfiguredError(
                f"Staff alias user '{username}' does not exist.",
            )
        identity = AliasIdentity(user=user, username=username)
        self._cached = identity
        self._warned_for = None
        return identity

    def _warn_not_configured(self, username: str) -> None:
        if self._warned_for == username:
            return
        self._warned_for = username
        logger.warning(
            "staff_alias.registry.user_missing",
            extra={"alias_username": username},
        )


_registry: AliasRegistry | None = None


def get_alias_registry() -> AliasRegistry:
    """Process-wide registry built from application settings."""
    global _registry
    config = settings.alias_config()
    if _registry is None:
        _registry = AliasRegistry(config)
    elif _registry.config != config:
        _registry.reconfigure(config)
    return _registry
