"""Entities an audit log entry can point at.

The long-lived types (``User``, ``Guild``, ``Channel``, ``Role``, ``Member``,
``Emoji``) are owned by caches outside this package and only ever read here.
``Webhook``, ``Integration`` and ``Invite`` are built per batch, either from the
batch's own arrays or as stand-ins synthesized from an entry's changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

from guildaudit.domain.model.enums import ActionFamily

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(kw_only=True)
class User:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.USER

    id: str
    username: str | None = None
    discriminator: str | None = None
    avatar: str | None = None
    bot: bool = False

    @property
    def tag(self) -> str | None:
        if self.username is None:
            return None
        if not self.discriminator or self.discriminator == "0":
            return self.username
        return f"{self.username}#{self.discriminator}"


@dataclass(kw_only=True)
class Guild:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.GUILD

    id: str
    name: str | None = None


@dataclass(kw_only=True)
class Channel:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.CHANNEL

    id: str
    name: str | None = None
    type: int | None = None


@dataclass(kw_only=True)
class Role:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.ROLE

    id: str
    name: str | None = None


@dataclass(kw_only=True)
class Member:
    id: str
    user: User | None = None
    nick: str | None = None

    @property
    def display_name(self) -> str | None:
        if self.nick:
            return self.nick
        return self.user.username if self.user is not None else None


@dataclass(kw_only=True)
class Emoji:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.EMOJI

    id: str
    name: str | None = None


@dataclass(frozen=True)
class Projection:
    """Minimal stand-in: an id plus whatever plain fields were known.

    Used when the real entity is not cached, for example a deleted channel.
    ``fields`` is read-only. Hashing uses the id alone.
    """

    id: str | None
    fields: Mapping[str, object] = field(default_factory=dict[str, object])

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(self.id)

    def __getitem__(self, key: str) -> object:
        if key == "id":
            return self.id
        return self.fields[key]

    def get(self, key: str, default: object = None) -> object:
        if key == "id":
            return self.id
        return self.fields.get(key, default)


@dataclass(kw_only=True)
class Webhook:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.WEBHOOK

    id: str | None
    guild_id: str | None = None
    channel_id: str | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None
    type: int | None = None
    owner: User | None = None


@dataclass(kw_only=True)
class Integration:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.INTEGRATION

    id: str | None
    guild_id: str
    name: str | None = None
    type: str | None = None
    enabled: bool | None = None
    syncing: bool | None = None
    role_id: str | None = None
    expire_behavior: int | None = None
    expire_grace_period: int | None = None
    account_id: str | None = None
    account_name: str | None = None
    user: User | None = None


@dataclass(kw_only=True)
class Invite:
    FAMILY: ClassVar[ActionFamily] = ActionFamily.INVITE

    id: str | None
    guild_id: str
    code: str | None = None
    channel: Channel | Projection | None = None
    inviter_id: str | None = None
    max_age: int | None = None
    max_uses: int | None = None
    uses: int | None = None
    temporary: bool | None = None
