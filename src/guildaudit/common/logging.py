"""Shared logging helpers for guildaudit."""

from __future__ import annotations

import logging
import sys


def resolve_log_level(level: int | str) -> int:
    """Accept a numeric level or a level name such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(*, level: int | str = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger once, writing to stderr.

    Stdout is left to command output. Pass ``force=True`` to reconfigure during
    tests.
    """

    logging.basicConfig(
        level=resolve_log_level(level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
