"""Public domain model surface."""

from __future__ import annotations

from guildaudit.domain.model.audit import (
    AuditLogEntry,
    AuditLogExtra,
    AuditLogTarget,
    ChangeRecord,
    ChannelCountExtra,
    DeferredTarget,
    DisconnectExtra,
    PinExtra,
    PruneExtra,
    flatten_changes,
)
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
from guildaudit.domain.model.enums import (
    ActionFamily,
    ActionVerb,
    AuditAction,
    TargetFailurePolicy,
)
from guildaudit.domain.model.snowflake import (
    DISCORD_EPOCH_MS,
    Snowflake,
    deconstruct_snowflake,
    snowflake_timestamp,
    timestamp_to_datetime,
)

__all__ = [  # noqa: RUF022
    # enums
    "ActionFamily",
    "ActionVerb",
    "AuditAction",
    "TargetFailurePolicy",
    # snowflakes
    "DISCORD_EPOCH_MS",
    "Snowflake",
    "deconstruct_snowflake",
    "snowflake_timestamp",
    "timestamp_to_datetime",
    # cached entities
    "User",
    "Guild",
    "Channel",
    "Role",
    "Member",
    "Emoji",
    # batch entities
    "Webhook",
    "Integration",
    "Invite",
    "Projection",
    # audit log
    "AuditLogEntry",
    "AuditLogExtra",
    "AuditLogTarget",
    "ChangeRecord",
    "ChannelCountExtra",
    "DeferredTarget",
    "DisconnectExtra",
    "PinExtra",
    "PruneExtra",
    "flatten_changes",
]
