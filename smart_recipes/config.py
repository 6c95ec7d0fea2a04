from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw) if raw else None


@dataclass(frozen=True)
class AppConfig:
    """
    Deployment profile for the HTTP service.

    ``standalone`` serves the JSON API with suggestions enabled.
    ``spa`` additionally serves a bundled single-page app from
    ``static_dir`` and leaves the suggestions route out.
    """

    title: str = "Smart Recipe Finder API"
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    enable_suggestions: bool = _env_flag("ENABLE_SUGGESTIONS", True)
    static_dir: Path | None = _env_path("STATIC_DIR")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    match_limit: int = 10
    suggestion_limit: int = 5


DEFAULT_APP_CONFIG = AppConfig()


def spa_profile(static_dir: Path, api_prefix: str = "/api") -> AppConfig:
    return AppConfig(
        api_prefix=api_prefix,
        enable_suggestions=False,
        static_dir=static_dir,
    )
