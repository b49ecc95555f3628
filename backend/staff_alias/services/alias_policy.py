"""Decision rules for acting as the staff alias."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from fastapi import HTTPException, status

from staff_alias.models.alias_audit_entries import AliasAction

if TYPE_CHECKING:
    from staff_alias.models.users import User


class DenyReason(str, Enum):
    """Machine-readable reasons an aliased request is refused."""

    FEATURE_DISABLED = "feature_disabled"
    NOT_STAFF = "not_staff"
    WHISPER_NOT_ALLOWED = "whisper_not_allowed"
    NOT_ALIAS_AUTHORED = "not_alias_authored"


DENY_MESSAGES: dict[DenyReason, str] = {
    DenyReason.FEATURE_DISABLED: "Posting as the staff alias is not enabled.",
    DenyReason.NOT_STAFF: "Only staff members can act as the staff alias.",
    DenyReason.WHISPER_NOT_ALLOWED: "Whispers cannot be posted as the staff alias.",
    DenyReason.NOT_ALIAS_AUTHORED: (
        "Only posts created as the staff alias can be edited as the staff alias."
    ),
}


@dataclass(frozen=True)
class CreateContext:
    is_whisper: bool = False


@dataclass(frozen=True)
class UpdateContext:
    target_is_alias_authored: bool = False


@dataclass(frozen=True)
class PolicyDecision:
    """Allow, or deny with a reason. `aliased` is True only for allowed alias requests."""

    allowed: bool
    aliased: bool = False
    reason: DenyReason | None = None

    @classmethod
    def allow(cls, *, aliased: bool) -> PolicyDecision:
        return cls(allowed=True, aliased=aliased)

    @classmethod
    def deny(cls, reason: DenyReason) -> PolicyDecision:
        return cls(allowed=False, reason=reason)


class AliasActionDenied(HTTPException):
    """403 carrying the specific deny reason as `detail.code`."""

    def __init__(self, reason: DenyReason) -> None:
        self.reason = reason
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": reason.value, "message": DENY_MESSAGES[reason]},
        )


def evaluate_alias_policy(
    *,
    actor: User,
    action: AliasAction,
    requested_as_alias: bool,
    alias_enabled: bool,
    context: CreateContext | UpdateContext,
) -> PolicyDecision:
    """Decide whether `actor` may perform `action` as the alias.

    Rules are checked in order and the first failing rule wins:
    1. Requests that do not ask for the alias are always allowed.
    2. The feature must be enabled.
    3. The actor must be staff.
    4. Creates must not be whispers.
    5. Updates must target a post that was itself created as the alias.
    """
    if not requested_as_alias:
        return PolicyDecision.allow(aliased=False)
    if not alias_enabled:
        return PolicyDecision.deny(DenyReason.FEATURE_DISABLED)
    if not actor.staff:
        return PolicyDecision.deny(DenyReason.NOT_STAFF)

    if action == AliasAction.CREATE:
        if not isinstance(context, CreateContext):
            msg = "create decisions require a CreateContext"
            raise TypeError(msg)
        if context.is_whisper:
            return PolicyDecision.deny(DenyReason.WHISPER_NOT_ALLOWED)
        return PolicyDecision.allow(aliased=True)

    if action == AliasAction.UPDATE:
        if not isinstance(context, UpdateContext):
            msg = "update decisions require an UpdateContext"
            raise TypeError(msg)
        if not context.target_is_alias_authored:
            return PolicyDecision.deny(DenyReason.NOT_ALIAS_AUTHORED)
        return PolicyDecision.allow(aliased=True)

    msg = f"Unsupported alias action: {action}"
    raise ValueError(msg)
