from __future__ import annotations

from guildaudit.adapters.audit_log import UserPayload
from guildaudit.adapters.memory import (
    InMemoryCache,
    InMemoryClient,
    InMemoryGuild,
    InMemoryUserDirectory,
)
from guildaudit.domain.model import Channel, Guild, Role, User
from guildaudit.domain.ports import EntityCache


def test_cache_lookup_by_id() -> None:
    cache = InMemoryCache.of([Role(id="R1", name="Mods"), Role(id="R2", name="Admins")])

    role = cache.get("R2")
    assert role is not None
    assert role.name == "Admins"
    assert cache.get("R3") is None
    assert "R1" in cache
    assert len(cache) == 2
    assert [role.id for role in cache] == ["R1", "R2"]


def test_cache_add_replaces_same_id() -> None:
    cache = InMemoryCache[Role]()
    cache.add(Role(id="R1", name="Old"))
    cache.add(Role(id="R1", name="New"))

    assert len(cache) == 1
    role = cache.get("R1")
    assert role is not None
    assert role.name == "New"


def test_upsert_creates_then_merges_into_the_same_instance() -> None:
    directory = InMemoryUserDirectory()

    created = directory.upsert(
        UserPayload.model_validate({"id": "1", "username": "first", "discriminator": "0001"})
    )
    merged = directory.upsert(UserPayload.model_validate({"id": "1", "username": "second"}))

    assert merged is created
    assert len(directory) == 1
    assert created.username == "second"
    assert created.discriminator == "0001"


def test_upsert_keeps_users_added_directly() -> None:
    directory = InMemoryUserDirectory()
    existing = directory.add(User(id="1", username="cached", bot=True))

    result = directory.upsert(UserPayload.model_validate({"id": "1", "avatar": "hash"}))

    assert result is existing
    assert existing.username == "cached"
    assert existing.avatar == "hash"
    assert existing.bot is True
    assert list(directory) == [existing]


def test_create_registers_guild_with_client() -> None:
    client = InMemoryClient()

    context = InMemoryGuild.create("G1", name="Test Guild", client=client)

    assert context.client is client
    assert client.guilds.get("G1") == Guild(id="G1", name="Test Guild")


def test_add_channel_fills_both_channel_caches() -> None:
    context = InMemoryGuild.create("G1")
    channel = Channel(id="C1", name="general")

    context.add_channel(channel)

    assert context.channels.get("C1") is channel
    assert context.client.channels.get("C1") is channel


def test_in_memory_caches_satisfy_the_lookup_port() -> None:
    context = InMemoryGuild.create("G1")

    for cache in (context.roles, context.channels, context.client.users, context.client.guilds):
        assert isinstance(cache, EntityCache)
