"""Runtime settings sourced from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_SLEEPER_BASE_URL = "https://api.sleeper.app/v1"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    catalog_path: Optional[Path]
    resolve_workers: int
    sleeper_base_url: str


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        return min_value
    return value


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw).expanduser()


def load_settings() -> Settings:
    """Read settings fresh from the environment."""

    return Settings(
        db_path=_env_path("ROSTERLINK_DB_PATH") or Path("rosterlink.sqlite"),
        catalog_path=_env_path("ROSTERLINK_CATALOG_PATH"),
        resolve_workers=_env_int("ROSTERLINK_RESOLVE_WORKERS", 1, min_value=1),
        sleeper_base_url=os.getenv("ROSTERLINK_SLEEPER_BASE_URL") or DEFAULT_SLEEPER_BASE_URL,
    )
