# ruff: noqa

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pytest

from staff_alias.core.config import AliasConfig
from staff_alias.models.users import User
from staff_alias.services import alias_registry
from staff_alias.services.alias_registry import AliasNotConfiguredError, AliasRegistry


@dataclass
class _FakeExecResult:
    first_value: Any = None

    def first(self) -> Any:
        return self.first_value


@dataclass
class _FakeSession:
    exec_results: list[Any] = field(default_factory=list)
    executed: int = 0

    async def exec(self, _statement: Any) -> Any:
        self.executed += 1
        if not self.exec_results:
            return _FakeExecResult()
        return self.exec_results.pop(0)


def test_is_enabled_requires_toggle_and_username() -> None:
    assert AliasRegistry(AliasConfig(enabled=True, username="team")).is_enabled() is True
    assert AliasRegistry(AliasConfig(enabled=False, username="team")).is_enabled() is False
    assert AliasRegistry(AliasConfig(enabled=True, username="")).is_enabled() is False
    assert AliasRegistry(AliasConfig(enabled=True, username="   ")).is_enabled() is False


@pytest.mark.asyncio
async def test_resolve_twice_returns_same_identity() -> None:
    alias_user = User(username="team")
    registry = AliasRegistry(AliasConfig(enabled=True, username="team"))
    session = _FakeSession(
        exec_results=[_FakeExecResult(alias_user), _FakeExecResult(alias_user)],
    )

    first = await registry.resolve_identity(session)
    second = await registry.resolve_identity(session)

    assert first.id == second.id == alias_user.id


@pytest.mark.asyncio
async def test_resolve_missing_user_raises_not_configured() -> None:
    registry = AliasRegistry(AliasConfig(enabled=True, username="ghost"))
    with pytest.raises(AliasNotConfiguredError):
        await registry.resolve_identity(_FakeSession())


@pytest.mark.asyncio
async def test_resolve_without_username_does_not_query() -> None:
    registry = AliasRegistry(AliasConfig(enabled=True, username=""))
    session = _FakeSession()
    with pytest.raises(AliasNotConfiguredError):
        await registry.resolve_identity(session)
    assert session.executed == 0


@pytest.mark.asyncio
async def test_missing_user_warning_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    registry = AliasRegistry(AliasConfig(enabled=True, username="ghost"))
    with caplog.at_level(logging.WARNING, logger=alias_registry.__name__):
        for _ in range(3):
            with pytest.raises(AliasNotConfiguredError):
                await registry.resolve_identity(_FakeSession())

    warnings = [r for r in caplog.records if r.getMessage() == "staff_alias.registry.user_missing"]
    assert len(warnings) == 1


@pytest.mark.asyncio
async def test_stale_cache_re_resolves_after_rename() -> None:
    old = User(username="team")
    replacement = User(username="team")
    registry = AliasRegistry(AliasConfig(enabled=True, username="team"))
    await registry.resolve_identity(_FakeSession(exec_results=[_FakeExecResult(old)]))

    # Old account renamed away: cached lookup sees a different username.
    renamed = User(id=old.id, username="former-team")
    session = _FakeSession(
        exec_results=[_FakeExecResult(renamed), _FakeExecResult(replacement)],
    )
    identity = await registry.resolve_identity(session)

    assert identity.id == replacement.id
    assert session.executed == 2


@pytest.mark.asyncio
async def test_stale_cache_for_deleted_user_raises_instead_of_crashing() -> None:
    alias_user = User(username="team")
    registry = AliasRegistry(AliasConfig(enabled=True, username="team"))
    await registry.resolve_identity(_FakeSession(exec_results=[_FakeExecResult(alias_user)]))

    with pytest.raises(AliasNotConfiguredError):
        await registry.resolve_identity(_FakeSession())


@pytest.mark.asyncio
async def test_reconfigure_drops_cache_when_username_changes() -> None:
    first_user = User(username="team")
    second_user = User(username="staff")
    registry = AliasRegistry(AliasConfig(enabled=True, username="team"))
    await registry.resolve_identity(_FakeSession(exec_results=[_FakeExecResult(first_user)]))

    registry.reconfigure(AliasConfig(enabled=True, username="staff"))
    session = _FakeSession(exec_results=[_FakeExecResult(second_user)])
    identity = await registry.resolve_identity(session)

    assert identity.id == second_user.id
    assert identity.username == "staff"
    assert session.executed == 1


def test_get_alias_registry_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(alias_registry, "_registry", None)
    monkeypatch.setattr(alias_registry.settings, "staff_alias_enabled", True)
    monkeypatch.setattr(alias_registry.settings, "staff_alias_username", "team")

    registry = alias_registry.get_alias_registry()
    assert registry.is_enabled() is True
    assert alias_registry.get_alias_registry() is registry

    monkeypatch.setattr(alias_registry.settings, "staff_alias_enabled", False)
    assert alias_registry.get_alias_registry().is_enabled() is False
