"""Module: config."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class WholeDayPolicy(StrEnum):
    # Individual time rows stay visible (and unblockable) under a whole-day block.
    COEXIST = "coexist"
    # A whole-day block hides individual time rows for that date.
    SUPERSEDE = "supersede"


# Bookable times shown on the slot management panel, AM first.
DEFAULT_SLOT_TIMES = [
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
    "18:00",
    "19:00",
    "20:00",
    "21:00",
]


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Root URL of the external admin backend (admin tables and FCM live under it).
    backend_base_url: str = "http://localhost:4000/api"
    # Path segment that prefixes every generic table endpoint.
    admin_path: str = "/admin"
    # Seconds before a backend call is abandoned.
    request_timeout: float = 10.0

    # Default page size for list screens.
    page_size: int = 10
    # Upper bound used when a screen needs "all" rows of a lookup table.
    fetch_all_limit: int = 1000

    # Precedence between whole-day and time-specific blocked slots.
    whole_day_policy: WholeDayPolicy = WholeDayPolicy.COEXIST
    slot_times: list[str] = DEFAULT_SLOT_TIMES

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    log_level: str = "INFO"

    # Configure pydantic-settings to also load values from local .env file.
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CLINIC_CONSOLE_")

    @property
    def admin_base_url(self) -> str:
        return self.backend_base_url.rstrip("/") + "/" + self.admin_path.strip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
