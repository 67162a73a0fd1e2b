"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING, cast

from guildaudit.adapters.audit_log import AuditLogBatch, AuditLogPayloadError

if TYPE_CHECKING:
    from pathlib import Path

    from guildaudit.adapters.audit_log import AuditLogPayloadInput
    from guildaudit.config import ResolutionConfig
    from guildaudit.domain.model import AuditLogEntry
    from guildaudit.domain.ports import GuildContext, TargetFetcher


log = getLogger(__name__)


def read_audit_log_file(path: Path) -> object:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise AuditLogPayloadError(f"{path} is not valid JSON: {exc}") from exc


def load_audit_log(
    path: Path,
    *,
    guild: GuildContext,
    fetcher: TargetFetcher | None = None,
    config: ResolutionConfig | None = None,
) -> AuditLogBatch:
    """Read a batch from ``path`` and resolve it against ``guild``."""

    payload = read_audit_log_file(path)
    log.debug("Loaded audit log batch from %s", path)
    return asyncio.run(
        AuditLogBatch.build(
            cast("AuditLogPayloadInput", payload), guild, fetcher=fetcher, config=config
        )
    )


def describe_target(target: object) -> str | None:
    if target is None:
        return None
    target_id = getattr(target, "id", None)
    return f"{type(target).__name__}:{target_id}"


def summarize_entry(entry: AuditLogEntry) -> dict[str, object]:
    executor = entry.executor
    return {
        "id": entry.id,
        "created_at": entry.created_at.isoformat(),
        "action": entry.action,
        "action_type": entry.action_type,
        "verb": entry.action_verb.value,
        "family": entry.target_family.value,
        "executor": (executor.tag or executor.id) if executor is not None else None,
        "target": describe_target(entry.target),
        "reason": entry.reason,
        "changes": [
            {"key": change.key, "old": change.old, "new": change.new}
            for change in entry.changes or ()
        ],
    }
