from __future__ import annotations

from .logging import configure_logging, resolve_log_level

__all__ = ["configure_logging", "resolve_log_level"]
