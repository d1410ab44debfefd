"""Environment-driven settings for the key sequence processor."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000
DEFAULT_MAX_REMAP_DEPTH = 10
# Each nested remap costs interpreter stack frames.
MAX_REMAP_DEPTH_LIMIT = 100


def _env_int(
    env: Mapping[str, str], name: str, fallback: int, *, ceiling: Optional[int] = None
) -> int:
    value = env.get(f"{ENV_PREFIX}{name}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    if parsed <= 0:
        return fallback
    return min(parsed, ceiling) if ceiling is not None else parsed


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Processor tuning. ``max_remap_depth`` is capped at ``MAX_REMAP_DEPTH_LIMIT``."""

    sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    max_remap_depth: int = DEFAULT_MAX_REMAP_DEPTH

    def __post_init__(self) -> None:
        if self.max_remap_depth < 1:
            raise ValueError("max_remap_depth must be positive")
        if self.max_remap_depth > MAX_REMAP_DEPTH_LIMIT:
            object.__setattr__(self, "max_remap_depth", MAX_REMAP_DEPTH_LIMIT)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        source = os.environ if env is None else env
        return cls(
            sequence_timeout_ms=_env_int(
                source, "SEQUENCE_TIMEOUT_MS", DEFAULT_SEQUENCE_TIMEOUT_MS
            ),
            max_remap_depth=_env_int(
                source,
                "MAX_REMAP_DEPTH",
                DEFAULT_MAX_REMAP_DEPTH,
                ceiling=MAX_REMAP_DEPTH_LIMIT,
            ),
        )


__all__ = [
    "EngineSettings",
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "DEFAULT_MAX_REMAP_DEPTH",
    "MAX_REMAP_DEPTH_LIMIT",
]
