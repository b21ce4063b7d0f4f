import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from platformdirs import user_data_dir

APP_NAME = "facility-console"
APP_AUTHOR = "facility-console"

UiDensity = Literal["compact", "normal"]
UserRole = Literal["admin", "support"]

PAGE_SIZE = 10
REFERENCE_PAGE_SIZE = 1000
SEARCH_DELAY_MS = 1000
NAME_LENGTH_WARNING = 30


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_ui_density(name: str, default: UiDensity) -> UiDensity:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in {"compact", "normal"}:
        return cast(UiDensity, raw)
    return default


def _env_user_role(name: str, default: UserRole) -> UserRole:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in {"admin", "support"}:
        return cast(UserRole, raw)
    return default


def _resolve_data_dir() -> Path:
    env_dir = os.getenv("FACILITY_CONSOLE_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


DATA_DIR = _resolve_data_dir()
LOG_DIR = DATA_DIR / "logs"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOG_DIR.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class Settings:
    api_base_url: str = os.getenv("FACILITY_CONSOLE_API_URL", "http://localhost:44311")
    api_token: str = os.getenv("FACILITY_CONSOLE_API_TOKEN", "")
    user_login: str = os.getenv("FACILITY_CONSOLE_USER", "admin")
    user_role: UserRole = _env_user_role("FACILITY_CONSOLE_USER_ROLE", "admin")
    request_timeout_seconds: float = _env_float("FACILITY_CONSOLE_TIMEOUT", 10.0)
    search_delay_ms: int = _env_int("FACILITY_CONSOLE_SEARCH_DELAY_MS", SEARCH_DELAY_MS)
    page_size: int = _env_int("FACILITY_CONSOLE_PAGE_SIZE", PAGE_SIZE, minimum=1)
    verify_tls: bool = _env_bool("FACILITY_CONSOLE_VERIFY_TLS", True)
    ui_density: UiDensity = _env_ui_density("FACILITY_CONSOLE_UI_DENSITY", "normal")


settings = Settings()
