from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/notes.db"


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    # Simulated backend latency applied to every delete, not a timeout.
    delete_delay_seconds: float = 2.0
    delete_failure_rate: float = 0.5
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        database_url=_getenv_str("NOTES_DATABASE_URL", DEFAULT_DATABASE_URL),
        sql_echo=_getenv_bool("NOTES_SQL_ECHO", False),
        delete_delay_seconds=_getenv_float("NOTES_DELETE_DELAY_SECONDS", 2.0),
        delete_failure_rate=_getenv_float("NOTES_DELETE_FAILURE_RATE", 0.5),
        cors_origins=_getenv_list("NOTES_CORS_ORIGINS", ["http://localhost:5173"]),
        log_level=_getenv_str("NOTES_LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
