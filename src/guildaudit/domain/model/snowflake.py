"""Decoding of sortable snowflake identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final

DISCORD_EPOCH_MS: Final[int] = 1_420_070_400_000

_TIMESTAMP_SHIFT: Final[int] = 22
_WORKER_MASK: Final[int] = 0x3E0000
_PROCESS_MASK: Final[int] = 0x1F000
_INCREMENT_MASK: Final[int] = 0xFFF
_UNIX_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)


def timestamp_to_datetime(timestamp_ms: int) -> datetime:
    return _UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)


@dataclass(frozen=True, slots=True)
class Snowflake:
    """Fields embedded in a snowflake id."""

    timestamp: int
    worker_id: int
    process_id: int
    increment: int
    binary: str

    @property
    def date(self) -> datetime:
        return timestamp_to_datetime(self.timestamp)


def _as_int(snowflake: str | int) -> int:
    try:
        value = int(snowflake)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid snowflake: {snowflake!r}") from exc
    if value < 0:
        raise ValueError(f"Invalid snowflake: {snowflake!r}")
    return value


def snowflake_timestamp(snowflake: str | int, *, epoch: int = DISCORD_EPOCH_MS) -> int:
    """Return the creation time embedded in ``snowflake`` as epoch milliseconds."""

    return (_as_int(snowflake) >> _TIMESTAMP_SHIFT) + epoch


def deconstruct_snowflake(snowflake: str | int, *, epoch: int = DISCORD_EPOCH_MS) -> Snowflake:
    value = _as_int(snowflake)
    return Snowflake(
        timestamp=(value >> _TIMESTAMP_SHIFT) + epoch,
        worker_id=(value & _WORKER_MASK) >> 17,
        process_id=(value & _PROCESS_MASK) >> 12,
        increment=value & _INCREMENT_MASK,
        binary=format(value, "064b"),
    )


__all__ = ["DISCORD_EPOCH_MS", "Snowflake", "deconstruct_snowflake", "snowflake_timestamp"]
