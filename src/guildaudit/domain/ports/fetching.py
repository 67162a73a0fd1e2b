"""Port for resolving audit log targets that no cache holds."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from guildaudit.domain.model import ActionFamily, AuditLogTarget


@runtime_checkable
class TargetFetcher(Protocol):
    """Async lookup performed by a collaborator outside this package.

    Returning ``None`` means the target does not exist; raising marks the lookup
    as failed and is handled per the batch's failure policy.
    """

    async def __call__(self, family: ActionFamily, target_id: str) -> AuditLogTarget | None: ...


__all__ = ["TargetFetcher"]
