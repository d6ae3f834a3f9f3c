import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from platformdirs import user_data_dir

APP_NAME = "careplan-records"
APP_AUTHOR = "careplan-records"

LateResultPolicy = Literal["notify", "discard"]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_late_result_policy(name: str, default: LateResultPolicy) -> LateResultPolicy:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in {"notify", "discard"}:
        return cast(LateResultPolicy, raw)
    return default


def _env_non_negative_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(0, value)


def _resolve_data_dir() -> Path:
    env_dir = os.getenv("CAREPLAN_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


DATA_DIR = _resolve_data_dir()
LOG_DIR = DATA_DIR / "logs"
DB_FILE = Path(os.getenv("CAREPLAN_DB_FILE") or (DATA_DIR / "careplan.db"))

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOG_DIR.mkdir(parents=True, exist_ok=True)
DB_FILE.parent.mkdir(parents=True, exist_ok=True)


def default_database_url() -> str:
    # SQLite URL uses forward slashes; as_posix() keeps it cross-platform.
    return f"sqlite:///{DB_FILE.as_posix()}"


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("DATABASE_URL", default_database_url())
    echo_sql: bool = _env_bool("SQL_ECHO", False)
    late_result_policy: LateResultPolicy = _env_late_result_policy("CAREPLAN_LATE_RESULT_POLICY", "notify")
    transient_retry_attempts: int = _env_non_negative_int("CAREPLAN_TRANSIENT_RETRIES", 0)
    default_note_author: str = os.getenv("CAREPLAN_NOTE_AUTHOR", "Admin")


settings = Settings()
