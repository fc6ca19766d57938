"""Runtime settings from environment variables (and a .env file, if present)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATA_PATH = "data/addressbook.json"
DEFAULT_PHONE_REGION = "US"
DEFAULT_LOG_LEVEL = "INFO"


def _repo_root() -> Path:
    """Return repo root (parent of src)."""
    return Path(__file__).resolve().parent.parent.parent.parent


def load_env_file() -> Path | None:
    """Load .env from repo root or current dir. Returns the file used, if any."""
    for path in (_repo_root() / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            return path
    return None


@dataclass(frozen=True)
class Settings:
    data_path: Path
    phone_region: str | None
    log_level: str


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read DDD_DATA_PATH, DDD_PHONE_REGION and DDD_LOG_LEVEL (defaults apply when unset)."""
    if env is None:
        env = os.environ
    data_path = env.get("DDD_DATA_PATH", "").strip() or DEFAULT_DATA_PATH
    region = env.get("DDD_PHONE_REGION", DEFAULT_PHONE_REGION).strip().upper()
    log_level = env.get("DDD_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
    return Settings(
        data_path=Path(data_path),
        phone_region=region or None,
        log_level=log_level,
    )
