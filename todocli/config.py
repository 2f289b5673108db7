from __future__ import annotations

import logging
import os
from pathlib import Path

DEFAULT_FILE_NAME = "todo.json"


def default_store_path() -> Path:
    """
    Default task file:
      ./todo.json (relative to the current directory)

    Override with TODO_FILE env var or --file CLI option.
    """
    env = os.getenv("TODO_FILE")
    if env:
        return Path(env).expanduser().resolve()

    return Path(DEFAULT_FILE_NAME)


def default_log_level() -> int:
    """Level name from TODO_LOG_LEVEL, WARNING when unset or unknown."""
    raw = (os.getenv("TODO_LOG_LEVEL") or "").strip().upper()
    if not raw:
        return logging.WARNING
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING
