from __future__ import annotations

import json
from pathlib import Path

import pytest

from guildaudit.adapters.memory import InMemoryGuild
from guildaudit.config import TARGET_FAILURE_POLICY_ENV
from guildaudit.domain.model import Channel, Emoji, Member, Role, User

DATA_DIR = Path(__file__).resolve().parent / "data"
GUILD_ID = "G1"


@pytest.fixture(autouse=True)
def _clear_resolution_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(TARGET_FAILURE_POLICY_ENV, raising=False)


@pytest.fixture
def batch_path() -> Path:
    return DATA_DIR / "audit_log_batch.json"


@pytest.fixture
def batch_payload(batch_path: Path) -> dict[str, object]:
    with batch_path.open() as handle:
        return json.load(handle)


@pytest.fixture
def guild() -> InMemoryGuild:
    context = InMemoryGuild.create(GUILD_ID, name="Test Guild")
    context.client.users.add(User(id="100", username="moderator", discriminator="0001"))
    context.add_channel(Channel(id="C1", name="general", type=0))
    context.roles.add(Role(id="R1", name="Mods"))
    context.members.add(Member(id="M1", user=User(id="M1", username="member-one")))
    context.emojis.add(Emoji(id="E1", name="blobwave"))
    return context
