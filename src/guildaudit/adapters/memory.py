"""In-memory entity caches implementing the lookup ports.

Used by the command line entry point, where no live client exists, and by tests.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from guildaudit.adapters.audit_log.translator import translate_user
from guildaudit.domain.model import Channel, Emoji, Guild, Member, Role, User

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from guildaudit.adapters.audit_log.schema import UserPayload
    from guildaudit.domain.ports import ClientContext, GuildContext, UserDirectory


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


@dataclass
class InMemoryCache[TEntity: _Identified]:
    _items: dict[str, TEntity] = field(default_factory=dict)

    @classmethod
    def of(cls, entities: Iterable[TEntity]) -> InMemoryCache[TEntity]:
        cache = cls()
        for entity in entities:
            cache.add(entity)
        return cache

    def get(self, entity_id: str) -> TEntity | None:
        return self._items.get(entity_id)

    def add(self, entity: TEntity) -> TEntity:
        self._items[entity.id] = entity
        return entity

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def __iter__(self) -> Iterator[TEntity]:
        return iter(self._items.values())


@dataclass
class InMemoryUserDirectory:
    """User cache whose upsert merges repeated ids into one instance."""

    _users: InMemoryCache[User] = field(default_factory=InMemoryCache[User])
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, entity_id: str) -> User | None:
        return self._users.get(entity_id)

    def add(self, user: User) -> User:
        with self._lock:
            return self._users.add(user)

    def upsert(self, payload: UserPayload) -> User:
        with self._lock:
            existing = self._users.get(payload.id)
            if existing is None:
                return self._users.add(translate_user(payload))
            # Only fields present in the payload overwrite; the latest write wins.
            for name in payload.model_fields_set - {"id"}:
                setattr(existing, name, getattr(payload, name))
            return existing

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users)


@dataclass
class InMemoryClient:
    users: InMemoryUserDirectory = field(default_factory=InMemoryUserDirectory)
    guilds: InMemoryCache[Guild] = field(default_factory=InMemoryCache[Guild])
    channels: InMemoryCache[Channel] = field(default_factory=InMemoryCache[Channel])


@dataclass
class InMemoryGuild:
    id: str
    client: InMemoryClient = field(default_factory=InMemoryClient, repr=False)
    name: str | None = None
    channels: InMemoryCache[Channel] = field(default_factory=InMemoryCache[Channel])
    roles: InMemoryCache[Role] = field(default_factory=InMemoryCache[Role])
    members: InMemoryCache[Member] = field(default_factory=InMemoryCache[Member])
    emojis: InMemoryCache[Emoji] = field(default_factory=InMemoryCache[Emoji])

    @classmethod
    def create(
        cls,
        guild_id: str,
        *,
        name: str | None = None,
        client: InMemoryClient | None = None,
    ) -> InMemoryGuild:
        """Create a guild context and register its entity with the client."""

        active_client = client or InMemoryClient()
        active_client.guilds.add(Guild(id=guild_id, name=name))
        return cls(id=guild_id, client=active_client, name=name)

    def add_channel(self, channel: Channel) -> Channel:
        self.client.channels.add(channel)
        return self.channels.add(channel)


if TYPE_CHECKING:
    _users_check: UserDirectory = InMemoryUserDirectory()
    _client_check: ClientContext = InMemoryClient()
    _guild_check: GuildContext = InMemoryGuild(id="0")
