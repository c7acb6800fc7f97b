from __future__ import annotations

import os
from dataclasses import dataclass, asdict

from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag (got {raw!r})")


def _env_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().upper()
    if value not in _LEVELS:
        raise ValueError(f"{name} must be a logging level name (got {raw!r})")
    return value


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from exc
    if value < 1:
        raise ValueError(f"{name} must be positive (got {value})")
    return value


@dataclass
class HubSettings:
    """Runtime knobs shared by a hub and its dispatcher."""

    log_level: str = "INFO"
    log_failures: bool = True  # default failure hook logs handler errors
    max_drain: int | None = None  # warn when one drain pass runs more tasks than this

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_env(cls, dotenv_path: str = ".env") -> "HubSettings":
        """Build settings from THEHUB_* variables, loading ``dotenv_path`` first.

        Values already present in the environment win over the dotenv file.
        """
        load_dotenv(dotenv_path, override=False)
        return cls(
            log_level=_env_level("THEHUB_LOG_LEVEL", "INFO"),
            log_failures=_env_flag("THEHUB_LOG_FAILURES", True),
            max_drain=_env_int("THEHUB_MAX_DRAIN"),
        )
