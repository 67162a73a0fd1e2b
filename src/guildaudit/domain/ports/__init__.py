"""Domain port definitions for adapters."""

from __future__ import annotations

from .caches import ClientContext, EntityCache, GuildContext, UserDirectory
from .fetching import TargetFetcher

__all__ = [
    "ClientContext",
    "EntityCache",
    "GuildContext",
    "TargetFetcher",
    "UserDirectory",
]
