from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from guildaudit import main as main_module
from guildaudit.app import describe_target, load_audit_log, summarize_entry
from guildaudit.domain.model import Projection, User

if TYPE_CHECKING:
    from pathlib import Path

    from guildaudit.adapters.memory import InMemoryGuild


@pytest.fixture(autouse=True)
def _keep_root_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "configure_logging", lambda **_: None)


def test_main_cli_lists_every_entry(batch_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_module.main([str(batch_path), "--guild-id", "G1"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 7
    assert lines[0].split("\t") == [
        "175928847299117063",
        "2016-04-30T11:18:25.796000+00:00",
        "GUILD_UPDATE",
        "UPDATE",
        "GUILD",
        "moderator#0001",
        "Guild:G1",
    ]
    assert lines[-1].split("\t")[2:] == [
        "UNMAPPED(9999)",
        "ALL",
        "UNKNOWN",
        "moderator#0001",
        "Projection:X9",
    ]


def test_main_cli_filters_by_family_and_verb(
    batch_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main_module.main([str(batch_path), "--guild-id", "G1", "--family", "user", "--verb", "delete"])

    ids = [line.split("\t")[0] for line in capsys.readouterr().out.splitlines()]
    assert ids == ["175928847299117071", "175928847299117072"]


def test_main_cli_emits_json(batch_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main_module.main([str(batch_path), "--guild-id", "G1", "--action", "MEMBER_KICK", "--json"])

    summaries = json.loads(capsys.readouterr().out)
    assert summaries == [
        {
            "id": "175928847299117072",
            "created_at": summaries[0]["created_at"],
            "action": "MEMBER_KICK",
            "action_type": 20,
            "verb": "DELETE",
            "family": "USER",
            "executor": "moderator#0001",
            "target": "User:101",
            "reason": "spam",
            "changes": [],
        }
    ]


def test_main_cli_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_main_cli_invalid_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path)])

    assert excinfo.value.code == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_main_cli_malformed_batch(tmp_path: Path) -> None:
    path = tmp_path / "batch.json"
    path.write_text(json.dumps({"users": []}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path)])

    assert excinfo.value.code == 2


def test_main_cli_rejects_unknown_family(batch_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(batch_path), "--family", "planet"])

    assert excinfo.value.code == 2


def test_load_audit_log_uses_given_guild(batch_path: Path, guild: InMemoryGuild) -> None:
    batch = load_audit_log(batch_path, guild=guild)

    assert batch.guild is guild
    assert len(batch) == 7
    assert guild.client.users.get("101") is not None


def test_summarize_entry_records_changes(batch_path: Path, guild: InMemoryGuild) -> None:
    batch = load_audit_log(batch_path, guild=guild)
    entry = batch.entries["175928847299117063"]

    summary = summarize_entry(entry)

    assert summary["created_at"] == "2016-04-30T11:18:25.796000+00:00"
    assert summary["changes"] == [{"key": "name", "old": "Old Guild", "new": "Test Guild"}]


def test_describe_target() -> None:
    assert describe_target(None) is None
    assert describe_target(User(id="1")) == "User:1"
    assert describe_target(Projection(id=None)) == "Projection:None"


def test_main_cli_rejects_non_snowflake_ids(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "batch.json"
    path.write_text(
        json.dumps({"audit_log_entries": [{"id": "abc", "action_type": 1}]}), encoding="utf-8"
    )

    with pytest.raises(SystemExit) as excinfo:
        main_module.main([str(path)])

    assert excinfo.value.code == 2
    assert "Invalid snowflake" in capsys.readouterr().err
