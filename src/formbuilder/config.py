from __future__ import annotations

import os

FIELD_TYPES = ("text", "textarea", "email", "number", "select", "checkbox", "radio", "date")
CHOICE_TYPES = {"select", "checkbox", "radio"}
DEFAULT_OPTIONS = ["Option 1", "Option 2"]
DEFAULT_HISTORY_SIZE = 50


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


class Settings:
    def __init__(self) -> None:
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = _int_env("PORT", 8000)
        history_max_size = _int_env("HISTORY_MAX_SIZE", DEFAULT_HISTORY_SIZE)
        self.history_max_size = history_max_size if history_max_size > 0 else DEFAULT_HISTORY_SIZE
        self.log_level = os.getenv("LOG_LEVEL", "info").lower()
