# ruff: noqa: INP001

from __future__ import annotations

import pytest
from pydantic import ValidationError

from staff_alias.core.config import AliasConfig, Settings

VALID_TOKEN = "test-local-token-0123456789-0123456789-0123456789x"


def test_alias_config_snapshot_reflects_settings() -> None:
    settings = Settings(
        _env_file=None,
        local_auth_token=VALID_TOKEN,
        staff_alias_enabled=True,
        staff_alias_username="  some_alias ",
    )
    config = settings.alias_config()
    assert config == AliasConfig(enabled=True, username="  some_alias ")
    assert config.normalized_username == "some_alias"


def test_alias_defaults_are_disabled() -> None:
    settings = Settings(
        _env_file=None,
        local_auth_token=VALID_TOKEN,
        staff_alias_enabled=False,
        staff_alias_username="",
    )
    assert settings.alias_config() == AliasConfig()


@pytest.mark.parametrize("token", ["short-token", "change-me"])
def test_weak_local_auth_token_is_rejected(token: str) -> None:
    with pytest.raises(ValidationError, match="LOCAL_AUTH_TOKEN"):
        Settings(_env_file=None, local_auth_token=token)


def test_dev_environment_defaults_to_auto_migrate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DB_AUTO_MIGRATE", raising=False)
    settings = Settings(_env_file=None, environment="dev", local_auth_token=VALID_TOKEN)
    assert settings.db_auto_migrate is True

    prod = Settings(_env_file=None, environment="prod", local_auth_token=VALID_TOKEN)
    assert prod.db_auto_migrate is False
