# ruff: noqa

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import pytest

from staff_alias.models.alias_post_markers import AliasPostMarker
from staff_alias.models.posts import Post
from staff_alias.models.users import User
from staff_alias.services.alias_policy import DenyReason, PolicyDecision
from staff_alias.services.alias_registry import AliasIdentity
from staff_alias.services.identity_substitution import (
    mark_as_alias_authored,
    prepare_author,
)


@dataclass
class _FakeSession:
    added: list[Any] = field(default_factory=list)

    def add(self, value: Any) -> None:
        self.added.append(value)


def _identity() -> AliasIdentity:
    return AliasIdentity(user=User(username="team"), username="team")


def test_prepare_author_returns_alias_user() -> None:
    identity = _identity()
    author = prepare_author(PolicyDecision.allow(aliased=True), identity)
    assert author is identity.user


@pytest.mark.parametrize(
    "decision",
    [
        PolicyDecision.allow(aliased=False),
        PolicyDecision.deny(DenyReason.NOT_STAFF),
    ],
)
def test_prepare_author_rejects_non_alias_decisions(decision: PolicyDecision) -> None:
    with pytest.raises(ValueError):
        prepare_author(decision, _identity())


def test_mark_as_alias_authored_stages_marker() -> None:
    session = _FakeSession()
    post = Post(user_id=uuid4(), topic_id=uuid4(), raw="hello")

    marker = mark_as_alias_authored(session, post)

    assert isinstance(marker, AliasPostMarker)
    assert marker.post_id == post.id
    assert session.added == [marker]
