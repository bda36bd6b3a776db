# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a local-dev default.
- Settings stay injectable: code receives a Settings (or any object with the same
  attributes) instead of reading os.environ directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

ENVIRONMENT_DEVELOPMENT = "development"
ENVIRONMENT_PRODUCTION = "production"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    environment: str
    log_level: str
    log_dir: Path

    # ---- HTTP server ----
    host: str
    port: int
    cors_origins: List[str]

    # ---- Client ----
    api_base_url: str
    client_timeout_seconds: float

    # ---- Data ----
    seed_sample_tasks: bool

    @property
    def is_development(self) -> bool:
        return self.environment == ENVIRONMENT_DEVELOPMENT

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        environment = _env(_k("ENVIRONMENT"), ENVIRONMENT_PRODUCTION).strip().lower()
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskboard"))

        host = _env(_k("HOST"), "127.0.0.1")
        port = _env_int(_k("PORT"), 5082)
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["*"])

        # Default client target matches the default server bind.
        api_base_url = _env(_k("API_BASE_URL"), f"http://localhost:{port}").rstrip("/")
        client_timeout_seconds = max(0.5, _env_float(_k("CLIENT_TIMEOUT_SECONDS"), 10.0))

        seed_sample_tasks = _env_bool(_k("SEED_SAMPLE_TASKS"), False)

        return Settings(
            app_name=app_name,
            environment=environment or ENVIRONMENT_PRODUCTION,
            log_level=log_level,
            log_dir=log_dir,
            host=host,
            port=port,
            cors_origins=cors_origins,
            api_base_url=api_base_url,
            client_timeout_seconds=client_timeout_seconds,
            seed_sample_tasks=seed_sample_tasks,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    load_dotenv(override=False)
    return Settings.from_env()
