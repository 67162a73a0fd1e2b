"""Translate raw audit log records into resolved domain entries.

Each record is classified by its action code, then its ``extra`` payload and its
``target`` are resolved against, in order: the batch's own webhook and integration
lookups, the long-lived caches of the guild context, and finally a stand-in
synthesized from the record's changes.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final, Protocol

from pydantic import ValidationError

from guildaudit.domain.classification import (
    action_name_from_action_code,
    action_verb_from_action_code,
    target_family_from_action_code,
)
from guildaudit.domain.model import (
    ActionFamily,
    AuditAction,
    AuditLogEntry,
    ChangeRecord,
    ChannelCountExtra,
    DeferredTarget,
    DisconnectExtra,
    Integration,
    Invite,
    PinExtra,
    Projection,
    PruneExtra,
    User,
    Webhook,
    flatten_changes,
)

from .errors import AuditLogPayloadError
from .schema import (
    AuditLogEntryPayload,
    AuditLogEntryPayloadInput,
    IntegrationPayload,
    InvitePayload,
    WebhookPayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from guildaudit.domain.model import AuditLogExtra, AuditLogTarget
    from guildaudit.domain.ports import EntityCache, GuildContext

    from .schema import AuditLogOptionsPayload, ChangePayload, UserPayload


log = getLogger(__name__)

_CHANNEL_COUNT_ACTIONS: Final[frozenset[int]] = frozenset(
    {AuditAction.MEMBER_MOVE, AuditAction.MESSAGE_DELETE, AuditAction.MESSAGE_BULK_DELETE}
)
_PIN_ACTIONS: Final[frozenset[int]] = frozenset(
    {AuditAction.MESSAGE_PIN, AuditAction.MESSAGE_UNPIN}
)
_OVERWRITE_ACTIONS: Final[frozenset[int]] = frozenset(
    {
        AuditAction.CHANNEL_OVERWRITE_CREATE,
        AuditAction.CHANNEL_OVERWRITE_UPDATE,
        AuditAction.CHANNEL_OVERWRITE_DELETE,
    }
)
_OPTION_ACTIONS: Final[frozenset[int]] = frozenset(
    {
        AuditAction.MEMBER_PRUNE,
        AuditAction.MEMBER_DISCONNECT,
        *_CHANNEL_COUNT_ACTIONS,
        *_PIN_ACTIONS,
        *_OVERWRITE_ACTIONS,
    }
)


class BatchLookups(Protocol):
    """Per-batch lookups an entry may resolve its target from."""

    @property
    def webhooks(self) -> Mapping[str, Webhook]: ...

    @property
    def integrations(self) -> Mapping[str, Integration]: ...


def translate_user(payload: UserPayload) -> User:
    return User(
        id=payload.id,
        username=payload.username,
        discriminator=payload.discriminator,
        avatar=payload.avatar,
        bot=payload.bot,
    )


def translate_webhook(payload: WebhookPayload) -> Webhook:
    return Webhook(
        id=payload.id,
        guild_id=payload.guild_id,
        channel_id=payload.channel_id,
        name=payload.name,
        avatar=payload.avatar,
        token=payload.token,
        type=payload.type,
        owner=translate_user(payload.user) if payload.user is not None else None,
    )


def translate_integration(payload: IntegrationPayload, *, guild_id: str) -> Integration:
    account = payload.account
    return Integration(
        id=payload.id,
        guild_id=guild_id,
        name=payload.name,
        type=payload.type,
        enabled=payload.enabled,
        syncing=payload.syncing,
        role_id=payload.role_id,
        expire_behavior=payload.expire_behavior,
        expire_grace_period=payload.expire_grace_period,
        account_id=account.id if account is not None else None,
        account_name=account.name if account is not None else None,
        user=translate_user(payload.user) if payload.user is not None else None,
    )


def translate_invite(payload: InvitePayload, *, guild_id: str) -> Invite:
    return Invite(
        id=payload.id,
        guild_id=guild_id,
        code=payload.code,
        channel=Projection(id=payload.channel_id),
        inviter_id=payload.inviter_id,
        max_age=payload.max_age,
        max_uses=payload.max_uses,
        uses=payload.uses,
        temporary=payload.temporary,
    )


def normalize_changes(changes: Sequence[ChangePayload] | None) -> tuple[ChangeRecord, ...] | None:
    if changes is None:
        return None
    return tuple(
        ChangeRecord(key=change.key, old=change.old_value, new=change.new_value)
        for change in changes
    )


def _ensure_entry_payload(item: AuditLogEntryPayloadInput) -> AuditLogEntryPayload:
    if isinstance(item, AuditLogEntryPayload):
        return item
    try:
        return AuditLogEntryPayload.model_validate(item)
    except ValidationError as exc:
        raise AuditLogPayloadError(f"Invalid audit log entry: {exc}") from exc


def resolve_entry(
    batch: BatchLookups,
    guild: GuildContext,
    item: AuditLogEntryPayloadInput,
    *,
    defer_missing: bool = False,
) -> AuditLogEntry:
    """Resolve a single raw audit log record.

    With ``defer_missing`` set, user and guild targets missing from the caches are
    left as ``DeferredTarget`` placeholders for an asynchronous lookup instead of
    resolving to ``None``.
    """

    payload = _ensure_entry_payload(item)
    action_type = payload.action_type
    family = target_family_from_action_code(action_type)
    if family is None:
        log.debug("Entry %s has unmapped action code %s", payload.id, action_type)
        family = ActionFamily.UNKNOWN

    changes = normalize_changes(payload.changes)
    return AuditLogEntry(
        id=payload.id,
        action_type=action_type,
        action=action_name_from_action_code(action_type),
        action_verb=action_verb_from_action_code(action_type),
        target_family=family,
        target_id=payload.target_id,
        reason=payload.reason or None,
        executor=guild.client.users.get(payload.user_id) if payload.user_id else None,
        changes=changes,
        extra=_resolve_extra(payload, guild),
        target=_resolve_target(
            family,
            payload,
            changes,
            batch=batch,
            guild=guild,
            defer_missing=defer_missing,
        ),
    )


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        number = None
    if number is not None and number.is_integer():
        return int(number)
    log.debug("Ignoring non-numeric option value %r", value)
    return None


def _resolve_extra(payload: AuditLogEntryPayload, guild: GuildContext) -> AuditLogExtra | None:
    action_type = payload.action_type
    if action_type not in _OPTION_ACTIONS:
        return None
    options = payload.options
    if options is None:
        log.debug("Entry %s (action %s) carries no options", payload.id, action_type)
        return None

    if action_type == AuditAction.MEMBER_PRUNE:
        return PruneExtra(
            removed=_to_int(options.members_removed),
            days=_to_int(options.delete_member_days),
        )
    if action_type in _CHANNEL_COUNT_ACTIONS:
        return ChannelCountExtra(
            channel=_channel_or_projection(guild.channels, options.channel_id),
            count=_to_int(options.count),
        )
    if action_type in _PIN_ACTIONS:
        return PinExtra(
            channel=_channel_or_projection(guild.client.channels, options.channel_id),
            message_id=options.message_id,
        )
    if action_type == AuditAction.MEMBER_DISCONNECT:
        return DisconnectExtra(count=_to_int(options.count))
    return _overwrite_extra(options, guild)


def _overwrite_extra(options: AuditLogOptionsPayload, guild: GuildContext) -> AuditLogExtra | None:
    overwrite_id = options.id
    if options.type == "member":
        member = guild.members.get(overwrite_id) if overwrite_id else None
        return member or Projection(id=overwrite_id, fields={"type": "member"})
    if options.type == "role":
        role = guild.roles.get(overwrite_id) if overwrite_id else None
        return role or Projection(
            id=overwrite_id, fields={"name": options.role_name, "type": "role"}
        )
    return None


def _channel_or_projection[TEntity](
    cache: EntityCache[TEntity], channel_id: str | None
) -> TEntity | Projection:
    channel = cache.get(channel_id) if channel_id else None
    if channel is not None:
        return channel
    return Projection(id=channel_id)


def _cached_or_deferred[TEntity](
    cache: EntityCache[TEntity],
    family: ActionFamily,
    target_id: str | None,
    *,
    defer_missing: bool,
) -> TEntity | DeferredTarget | None:
    if not target_id:
        return None
    cached = cache.get(target_id)
    if cached is None and defer_missing:
        return DeferredTarget(family=family, target_id=target_id)
    return cached


def _resolve_target(  # noqa: PLR0911
    family: ActionFamily,
    payload: AuditLogEntryPayload,
    changes: tuple[ChangeRecord, ...] | None,
    *,
    batch: BatchLookups,
    guild: GuildContext,
    defer_missing: bool,
) -> AuditLogTarget | None:
    target_id = payload.target_id
    client = guild.client

    if family is ActionFamily.UNKNOWN:
        if target_id is None and changes is None:
            return None
        return Projection(id=target_id, fields=flatten_changes(changes))
    if family is ActionFamily.USER and target_id:
        return _cached_or_deferred(client.users, family, target_id, defer_missing=defer_missing)
    if family is ActionFamily.GUILD:
        return _cached_or_deferred(client.guilds, family, target_id, defer_missing=defer_missing)
    if family is ActionFamily.WEBHOOK:
        cached_webhook = batch.webhooks.get(target_id) if target_id else None
        return cached_webhook or _webhook_stand_in(target_id, changes, guild=guild)
    if family is ActionFamily.INVITE:
        return _invite_stand_in(target_id, changes, guild=guild)
    if family is ActionFamily.MESSAGE:
        # Bulk deletes report the channel as their target.
        if payload.action_type == AuditAction.MESSAGE_BULK_DELETE:
            return _channel_or_projection(guild.channels, target_id)
        return _cached_or_deferred(
            client.users, ActionFamily.USER, target_id, defer_missing=defer_missing
        )
    if family is ActionFamily.INTEGRATION:
        cached_integration = batch.integrations.get(target_id) if target_id else None
        return cached_integration or _integration_stand_in(target_id, changes, guild=guild)
    if target_id:
        collection: EntityCache[AuditLogTarget] = getattr(guild, f"{family.lower()}s")
        return collection.get(target_id) or Projection(id=target_id)
    return None


def _webhook_stand_in(
    target_id: str | None,
    changes: tuple[ChangeRecord, ...] | None,
    *,
    guild: GuildContext,
) -> Webhook | Projection:
    fields = flatten_changes(changes, base={"id": target_id, "guild_id": guild.id})
    try:
        return translate_webhook(WebhookPayload.model_validate(fields))
    except ValidationError:
        log.warning("Could not synthesize webhook %s from its changes", target_id, exc_info=True)
        return Projection(id=target_id, fields=fields)


def _invite_stand_in(
    target_id: str | None,
    changes: tuple[ChangeRecord, ...] | None,
    *,
    guild: GuildContext,
) -> Invite | Projection:
    fields = flatten_changes(changes, base={"id": target_id})
    try:
        return translate_invite(InvitePayload.model_validate(fields), guild_id=guild.id)
    except ValidationError:
        log.warning("Could not synthesize invite %s from its changes", target_id, exc_info=True)
        return Projection(id=target_id, fields=fields)


def _integration_stand_in(
    target_id: str | None,
    changes: tuple[ChangeRecord, ...] | None,
    *,
    guild: GuildContext,
) -> Integration | Projection:
    fields = flatten_changes(changes, base={"id": target_id})
    try:
        return translate_integration(IntegrationPayload.model_validate(fields), guild_id=guild.id)
    except ValidationError:
        log.warning(
            "Could not synthesize integration %s from its changes", target_id, exc_info=True
        )
        return Projection(id=target_id, fields=fields)
