#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from guildaudit.adapters.memory import InMemoryGuild
from guildaudit.app import load_audit_log, summarize_entry
from guildaudit.common import configure_logging
from guildaudit.config import ConfigurationError
from guildaudit.domain.model import ActionFamily, ActionVerb, AuditAction

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from guildaudit.adapters.audit_log import AuditLogBatch
    from guildaudit.domain.model import AuditLogEntry


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve and list an audit log batch")
    parser.add_argument("path", type=Path, help="JSON file holding one audit log batch")
    parser.add_argument(
        "--guild-id",
        default="0",
        help="Id of the guild the batch belongs to (default: %(default)s)",
    )
    parser.add_argument(
        "--action",
        choices=[action.name for action in AuditAction],
        help="Only list entries with this action",
    )
    parser.add_argument(
        "--family",
        type=str.upper,
        choices=[family.value for family in ActionFamily],
        default=ActionFamily.ALL.value,
        help="Only list entries targeting this family (default: %(default)s)",
    )
    parser.add_argument(
        "--verb",
        type=str.upper,
        choices=[verb.value for verb in ActionVerb],
        default=ActionVerb.ALL.value,
        help="Only list entries with this verb (default: %(default)s)",
    )
    parser.add_argument("--json", action="store_true", help="Emit entries as JSON")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level written to stderr (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def _select_entries(batch: AuditLogBatch, args: argparse.Namespace) -> list[AuditLogEntry]:
    return batch.filter(
        action=AuditAction[args.action] if args.action else None,
        family=ActionFamily(args.family),
        verb=ActionVerb(args.verb),
    )


def _format_line(summary: dict[str, object]) -> str:
    columns = (
        summary["id"],
        summary["created_at"],
        summary["action"] or f"UNMAPPED({summary['action_type']})",
        summary["verb"],
        summary["family"],
        summary["executor"] or "-",
        summary["target"] or "-",
    )
    return "\t".join(str(column) for column in columns)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
        configure_logging(level=parsed_args.log_level, force=True)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    guild = InMemoryGuild.create(parsed_args.guild_id)
    try:
        batch = load_audit_log(parsed_args.path, guild=guild)
        summaries = [summarize_entry(entry) for entry in _select_entries(batch, parsed_args)]
    except (OSError, ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if parsed_args.json:
        print(json.dumps(summaries, indent=2, default=str))
        return
    for summary in summaries:
        print(_format_line(summary))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
