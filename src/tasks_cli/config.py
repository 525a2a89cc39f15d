# src/tasks_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per CLI invocation.
- Only the data directory is platform dependent; everything else has a plain default.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_store import DEFAULT_DB_FILENAME

ENV_PREFIX = "TASKS"
APP_NAME = "tasks"


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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir(app_name: str = APP_NAME) -> Path:
    """
    Per-user data directory:
    - Windows: %LOCALAPPDATA%/<app>
    - macOS:   ~/Library/Application Support/<app>
    - other:   $XDG_DATA_HOME/<app> or ~/.local/share/<app>
    Falls back to the home directory when none of the above can be derived.
    """
    home = Path.home()
    if sys.platform.startswith("win"):
        base = os.getenv("LOCALAPPDATA")
        return Path(base) / app_name if base else home
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app_name

    xdg = os.getenv("XDG_DATA_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg) / app_name
    return home / ".local" / "share" / app_name


def ensure_data_dir(path: Path) -> Path:
    path.mkdir(mode=0o770, parents=True, exist_ok=True)
    return path


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    data_dir: Path
    db_filename: str
    db_timeout: float

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    @property
    def log_path(self) -> Path:
        return self.data_dir / f"{self.app_name}.log"

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(override=False)

        return Settings(
            app_name=APP_NAME,
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_to_file=_env_bool(_k("LOG_FILE"), True),
            data_dir=_env_path(_k("DATA_DIR"), default_data_dir()),
            db_filename=_env(_k("DB_FILENAME"), DEFAULT_DB_FILENAME) or DEFAULT_DB_FILENAME,
            db_timeout=_env_float(_k("DB_TIMEOUT"), 5.0),
        )
