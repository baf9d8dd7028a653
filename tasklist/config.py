"""Settings for tasklist, read from environment variables.

Recognised variables:
- TASK_MAX_TEXT_LENGTH: cap on task text length (default 120)
- TASK_SEED: start with the demonstration tasks (default on)
- TASK_LOG_LEVEL: log level name for console logging (default WARNING)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tasklist.store import DEFAULT_MAX_TEXT_LENGTH

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        max_text_length: Cap on task text length, must be positive
        seed_starter_tasks: Whether the session starts with demonstration tasks
        log_level: Level name for console logging
    """

    max_text_length: int = DEFAULT_MAX_TEXT_LENGTH
    seed_starter_tasks: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.max_text_length <= 0:
            raise ValueError(f"max_text_length must be positive, got {self.max_text_length}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from. If None, uses os.environ.

    Returns:
        Settings instance

    Raises:
        ValueError: If TASK_MAX_TEXT_LENGTH is not positive
    """
    if env is None:
        env = os.environ

    return Settings(
        max_text_length=_env_int(env, "TASK_MAX_TEXT_LENGTH", DEFAULT_MAX_TEXT_LENGTH),
        seed_starter_tasks=_env_bool(env, "TASK_SEED", True),
        log_level=env.get("TASK_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )
