"""The audit log batch: per-batch lookups plus the ordered resolved entries."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from guildaudit.config import get_resolution_config
from guildaudit.domain.classification import (
    action_verb_from_action_code,
    target_family_from_action_code,
)
from guildaudit.domain.model import (
    ActionFamily,
    ActionVerb,
    AuditAction,
    AuditLogEntry,
    DeferredTarget,
    Integration,
    TargetFailurePolicy,
    Webhook,
)

from .errors import AuditLogPayloadError, TargetResolutionError
from .schema import AuditLogPayload, AuditLogPayloadInput
from .translator import resolve_entry, translate_integration, translate_webhook

if TYPE_CHECKING:
    from collections.abc import Iterator

    from guildaudit.config import ResolutionConfig
    from guildaudit.domain.model import AuditLogTarget
    from guildaudit.domain.ports import GuildContext, TargetFetcher


log = getLogger(__name__)


def parse_audit_log_payload(payload: AuditLogPayloadInput) -> AuditLogPayload:
    """Validate a raw batch, failing loudly when its shape is wrong."""

    if isinstance(payload, AuditLogPayload):
        return payload
    if not isinstance(payload, Mapping):
        raise AuditLogPayloadError(
            f"Audit log payload must be a mapping, got {type(payload).__name__}"
        )
    if "audit_log_entries" not in payload:
        raise AuditLogPayloadError("Audit log payload is missing 'audit_log_entries'")
    try:
        return AuditLogPayload.model_validate(payload)
    except ValidationError as exc:
        raise AuditLogPayloadError(f"Invalid audit log payload: {exc}") from exc


@dataclass(slots=True, eq=False)
class AuditLogBatch:
    """Resolved entries of one audit log batch, in source order.

    ``webhooks`` and ``integrations`` are built from the batch's own arrays and
    are never extended by entry resolution. The guild context is only read.
    """

    guild: GuildContext = field(repr=False)
    webhooks: dict[str, Webhook] = field(default_factory=dict[str, Webhook])
    integrations: dict[str, Integration] = field(default_factory=dict[str, Integration])
    entries: dict[str, AuditLogEntry] = field(default_factory=dict[str, AuditLogEntry])

    target_family_from_action_code = staticmethod(target_family_from_action_code)
    action_verb_from_action_code = staticmethod(action_verb_from_action_code)

    @classmethod
    def from_payload(
        cls,
        payload: AuditLogPayloadInput,
        guild: GuildContext,
        *,
        defer_missing: bool = False,
    ) -> AuditLogBatch:
        """Resolve a batch synchronously from the caches alone."""

        validated = parse_audit_log_payload(payload)

        for user in validated.users:
            guild.client.users.upsert(user)

        batch = cls(guild=guild)
        for hook in validated.webhooks:
            if hook.id is None:
                log.debug("Skipping webhook without an id")
                continue
            batch.webhooks[hook.id] = translate_webhook(hook)
        for integration in validated.integrations:
            if integration.id is None:
                log.debug("Skipping integration without an id")
                continue
            batch.integrations[integration.id] = translate_integration(
                integration, guild_id=guild.id
            )

        for item in validated.audit_log_entries:
            entry = resolve_entry(batch, guild, item, defer_missing=defer_missing)
            batch.entries[entry.id] = entry

        log.info(
            "Resolved %d audit log entries for guild %s (%d webhooks, %d integrations)",
            len(batch.entries),
            guild.id,
            len(batch.webhooks),
            len(batch.integrations),
        )
        return batch

    @classmethod
    async def build(
        cls,
        payload: AuditLogPayloadInput,
        guild: GuildContext,
        *,
        fetcher: TargetFetcher | None = None,
        config: ResolutionConfig | None = None,
    ) -> AuditLogBatch:
        """Resolve a batch and wait for every out-of-band target lookup to settle.

        Without a ``fetcher`` nothing is deferred and this matches ``from_payload``.
        """

        batch = cls.from_payload(payload, guild, defer_missing=fetcher is not None)
        if fetcher is not None:
            active_config = config or get_resolution_config()
            await batch._settle_targets(fetcher, policy=active_config.target_failure_policy)
        return batch

    async def _settle_targets(
        self, fetcher: TargetFetcher, *, policy: TargetFailurePolicy
    ) -> None:
        pending = [entry for entry in self.entries.values() if entry.is_deferred]
        if not pending:
            return

        log.debug("Settling %d deferred audit log targets", len(pending))
        results = await asyncio.gather(
            *(self._fetch_target(fetcher, entry) for entry in pending),
            return_exceptions=True,
        )

        resolved: list[tuple[AuditLogEntry, AuditLogTarget | None]] = []
        for entry, result in zip(pending, results, strict=True):
            if isinstance(result, Exception):
                deferred = _deferred(entry)
                if policy is TargetFailurePolicy.PROPAGATE:
                    raise TargetResolutionError(
                        f"Failed to resolve target {deferred.target_id} of entry {entry.id}",
                        entry_id=entry.id,
                        target_id=deferred.target_id,
                    ) from result
                log.warning(
                    "Failed to resolve target %s of entry %s: %s",
                    deferred.target_id,
                    entry.id,
                    result,
                )
                resolved.append((entry, None))
            elif isinstance(result, BaseException):
                raise result
            else:
                resolved.append((entry, result))

        for entry, target in resolved:
            self.entries[entry.id] = replace(entry, target=target)

    @staticmethod
    async def _fetch_target(
        fetcher: TargetFetcher, entry: AuditLogEntry
    ) -> AuditLogTarget | None:
        deferred = _deferred(entry)
        return await fetcher(deferred.family, deferred.target_id)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[AuditLogEntry]:
        return iter(self.entries.values())

    def get(self, entry_id: str) -> AuditLogEntry | None:
        return self.entries.get(entry_id)

    def filter(
        self,
        *,
        action: AuditAction | None = None,
        family: ActionFamily = ActionFamily.ALL,
        verb: ActionVerb = ActionVerb.ALL,
        executor_id: str | None = None,
    ) -> list[AuditLogEntry]:
        """Return entries matching every given criterion; ``ALL`` matches anything."""

        matches: list[AuditLogEntry] = []
        for entry in self.entries.values():
            if action is not None and entry.action_type != action:
                continue
            if family != ActionFamily.ALL and entry.target_family != family:
                continue
            if verb != ActionVerb.ALL and entry.action_verb != verb:
                continue
            if executor_id is not None and (
                entry.executor is None or entry.executor.id != executor_id
            ):
                continue
            matches.append(entry)
        return matches


def _deferred(entry: AuditLogEntry) -> DeferredTarget:
    target = entry.target
    if not isinstance(target, DeferredTarget):
        raise TypeError(f"Entry {entry.id} has no deferred target")
    return target
