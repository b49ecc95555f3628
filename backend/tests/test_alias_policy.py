# ruff: noqa

from __future__ import annotations

import pytest

from staff_alias.models.alias_audit_entries import AliasAction
from staff_alias.models.users import User
from staff_alias.services.alias_policy import (
    AliasActionDenied,
    CreateContext,
    DenyReason,
    PolicyDecision,
    UpdateContext,
    evaluate_alias_policy,
)


def _user(*, admin: bool = False, moderator: bool = False) -> User:
    return User(username="someone", admin=admin, moderator=moderator)


def test_non_alias_request_is_allowed_without_checks() -> None:
    decision = evaluate_alias_policy(
        actor=_user(),
        action=AliasAction.CREATE,
        requested_as_alias=False,
        alias_enabled=False,
        context=CreateContext(is_whisper=True),
    )
    assert decision == PolicyDecision(allowed=True, aliased=False)


def test_disabled_feature_is_checked_before_staff() -> None:
    decision = evaluate_alias_policy(
        actor=_user(),
        action=AliasAction.CREATE,
        requested_as_alias=True,
        alias_enabled=False,
        context=CreateContext(),
    )
    assert decision.allowed is False
    assert decision.reason == DenyReason.FEATURE_DISABLED


@pytest.mark.parametrize(
    ("action", "context"),
    [
        (AliasAction.CREATE, CreateContext()),
        (AliasAction.UPDATE, UpdateContext(target_is_alias_authored=True)),
    ],
)
def test_non_staff_denied_for_every_action(
    action: AliasAction,
    context: CreateContext | UpdateContext,
) -> None:
    decision = evaluate_alias_policy(
        actor=_user(),
        action=action,
        requested_as_alias=True,
        alias_enabled=True,
        context=context,
    )
    assert decision.reason == DenyReason.NOT_STAFF


def test_moderator_and_admin_count_as_staff() -> None:
    for actor in (_user(moderator=True), _user(admin=True)):
        decision = evaluate_alias_policy(
            actor=actor,
            action=AliasAction.CREATE,
            requested_as_alias=True,
            alias_enabled=True,
            context=CreateContext(),
        )
        assert decision == PolicyDecision(allowed=True, aliased=True)


def test_whisper_create_denied() -> None:
    decision = evaluate_alias_policy(
        actor=_user(moderator=True),
        action=AliasAction.CREATE,
        requested_as_alias=True,
        alias_enabled=True,
        context=CreateContext(is_whisper=True),
    )
    assert decision.reason == DenyReason.WHISPER_NOT_ALLOWED


def test_update_of_normal_post_denied() -> None:
    decision = evaluate_alias_policy(
        actor=_user(moderator=True),
        action=AliasAction.UPDATE,
        requested_as_alias=True,
        alias_enabled=True,
        context=UpdateContext(target_is_alias_authored=False),
    )
    assert decision.reason == DenyReason.NOT_ALIAS_AUTHORED


def test_update_of_alias_post_allowed() -> None:
    decision = evaluate_alias_policy(
        actor=_user(admin=True),
        action=AliasAction.UPDATE,
        requested_as_alias=True,
        alias_enabled=True,
        context=UpdateContext(target_is_alias_authored=True),
    )
    assert decision.allowed is True
    assert decision.aliased is True


def test_mismatched_context_raises() -> None:
    with pytest.raises(TypeError):
        evaluate_alias_policy(
            actor=_user(admin=True),
            action=AliasAction.UPDATE,
            requested_as_alias=True,
            alias_enabled=True,
            context=CreateContext(),
        )


def test_denied_exception_carries_reason_code() -> None:
    exc = AliasActionDenied(DenyReason.WHISPER_NOT_ALLOWED)
    assert exc.status_code == 403
    assert exc.reason == DenyReason.WHISPER_NOT_ALLOWED
    assert exc.detail["code"] == "whisper_not_allowed"
    assert exc.detail["message"]
