"""Read-only views of the long-lived entity caches an audit log resolves against."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from guildaudit.adapters.audit_log.schema import UserPayload
    from guildaudit.domain.model import Channel, Emoji, Guild, Member, Role, User


@runtime_checkable
class EntityCache[TEntity](Protocol):
    """Lookup by id. Implementations must not fetch on a miss."""

    def get(self, entity_id: str) -> TEntity | None: ...


class UserDirectory(EntityCache["User"], Protocol):
    """Client-wide user cache.

    ``upsert`` is the one write this package performs: repeated ids merge into the
    existing user instead of creating a duplicate.
    """

    def upsert(self, payload: UserPayload) -> User: ...


class ClientContext(Protocol):
    @property
    def users(self) -> UserDirectory: ...

    @property
    def guilds(self) -> EntityCache[Guild]: ...

    @property
    def channels(self) -> EntityCache[Channel]: ...


class GuildContext(Protocol):
    """The guild an audit log belongs to, with its own entity caches."""

    @property
    def id(self) -> str: ...

    @property
    def client(self) -> ClientContext: ...

    @property
    def channels(self) -> EntityCache[Channel]: ...

    @property
    def roles(self) -> EntityCache[Role]: ...

    @property
    def members(self) -> EntityCache[Member]: ...

    @property
    def emojis(self) -> EntityCache[Emoji]: ...
