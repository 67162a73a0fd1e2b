"""Settings for resolving audit log batches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from guildaudit.domain.model.enums import TargetFailurePolicy

from .env import optional_env_var
from .errors import ConfigurationError

TARGET_FAILURE_POLICY_ENV: Final[str] = "GUILDAUDIT_TARGET_FAILURE_POLICY"
DEFAULT_TARGET_FAILURE_POLICY: Final[TargetFailurePolicy] = TargetFailurePolicy.ISOLATE


@dataclass(frozen=True, slots=True)
class ResolutionConfig:
    target_failure_policy: TargetFailurePolicy = DEFAULT_TARGET_FAILURE_POLICY


def _parse_failure_policy(value: str) -> TargetFailurePolicy:
    try:
        return TargetFailurePolicy(value.lower())
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in TargetFailurePolicy)
        raise ConfigurationError(
            f"Invalid {TARGET_FAILURE_POLICY_ENV} {value!r}; expected one of: {choices}"
        ) from exc


def get_resolution_config() -> ResolutionConfig:
    raw_policy = optional_env_var(TARGET_FAILURE_POLICY_ENV)
    if raw_policy is None:
        return ResolutionConfig()
    return ResolutionConfig(target_failure_policy=_parse_failure_policy(raw_policy))
