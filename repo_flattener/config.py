"""
Runtime settings, read from the environment by the entry points.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

MAX_DEFAULT_BYTES = 50 * 1024
DEFAULT_BRANCH = "main"
DEFAULT_TIMEOUT = 60.0
DEFAULT_PORT = 5000


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    max_bytes: int = MAX_DEFAULT_BYTES
    branch: str = DEFAULT_BRANCH
    timeout: float = DEFAULT_TIMEOUT
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            max_bytes=_int_env(env, "REPO_FLATTENER_MAX_BYTES", MAX_DEFAULT_BYTES),
            branch=env.get("REPO_FLATTENER_BRANCH") or DEFAULT_BRANCH,
            timeout=_float_env(env, "REPO_FLATTENER_TIMEOUT", DEFAULT_TIMEOUT),
            port=_int_env(env, "PORT", DEFAULT_PORT),
            log_level=(env.get("REPO_FLATTENER_LOG_LEVEL") or "INFO").upper(),
        )
