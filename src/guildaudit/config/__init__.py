"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .resolution import (
    DEFAULT_TARGET_FAILURE_POLICY,
    TARGET_FAILURE_POLICY_ENV,
    ResolutionConfig,
    get_resolution_config,
)

__all__ = [
    "DEFAULT_TARGET_FAILURE_POLICY",
    "TARGET_FAILURE_POLICY_ENV",
    "ConfigurationError",
    "ResolutionConfig",
    "get_resolution_config",
    "optional_env_var",
]
