"""Resolved audit log entries and the shapes they carry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from guildaudit.domain.model.entities import (
    Channel,
    Emoji,
    Guild,
    Integration,
    Invite,
    Member,
    Projection,
    Role,
    User,
    Webhook,
)
from guildaudit.domain.model.snowflake import snowflake_timestamp, timestamp_to_datetime

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from guildaudit.domain.model.enums import ActionFamily, ActionVerb


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """A single property change: ``key`` went from ``old`` to ``new``."""

    key: str
    old: object | None = None
    new: object | None = None


def flatten_changes(
    changes: Iterable[ChangeRecord] | None,
    *,
    base: dict[str, object] | None = None,
) -> dict[str, object]:
    """Project changes onto a flat mapping of key to the new value, else the old one.

    Keys from ``changes`` overwrite keys in ``base``.
    """

    flattened: dict[str, object] = dict(base or {})
    for change in changes or ():
        flattened[change.key] = change.new if change.new is not None else change.old
    return flattened


@dataclass(frozen=True, slots=True)
class PruneExtra:
    removed: int | None
    days: int | None


@dataclass(frozen=True, slots=True)
class ChannelCountExtra:
    channel: Channel | Projection
    count: int | None


@dataclass(frozen=True, slots=True)
class PinExtra:
    channel: Channel | Projection
    message_id: str | None


@dataclass(frozen=True, slots=True)
class DisconnectExtra:
    count: int | None


@dataclass(frozen=True, slots=True)
class DeferredTarget:
    """Placeholder for a target that an out-of-band lookup must supply."""

    family: ActionFamily
    target_id: str


type AuditLogExtra = (
    PruneExtra | ChannelCountExtra | PinExtra | DisconnectExtra | Member | Role | Projection
)
type AuditLogTarget = (
    Guild
    | Channel
    | User
    | Role
    | Emoji
    | Webhook
    | Invite
    | Integration
    | Projection
    | DeferredTarget
)


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditLogEntry:
    """One resolved audit log record."""

    id: str
    action_type: int | None
    action: str | None
    action_verb: ActionVerb
    target_family: ActionFamily
    target_id: str | None = None
    reason: str | None = None
    executor: User | None = None
    changes: tuple[ChangeRecord, ...] | None = None
    extra: AuditLogExtra | None = None
    target: AuditLogTarget | None = None

    def __hash__(self) -> int:
        # Targets and extras may be mutable cache entities; the id identifies the entry.
        return hash(self.id)

    @property
    def created_timestamp(self) -> int:
        """Creation time in epoch milliseconds, decoded from the entry id."""
        return snowflake_timestamp(self.id)

    @property
    def created_at(self) -> datetime:
        return timestamp_to_datetime(self.created_timestamp)

    @property
    def is_deferred(self) -> bool:
        return isinstance(self.target, DeferredTarget)

    def change_for(self, key: str) -> ChangeRecord | None:
        for change in self.changes or ():
            if change.key == key:
                return change
        return None
