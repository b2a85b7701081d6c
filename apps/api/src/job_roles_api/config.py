from dataclasses import dataclass
from functools import lru_cache
import os


def _to_bool(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str | None, *, default: int, minimum: int) -> int:
    if value is None:
        return default
    parsed = int(value)
    return max(minimum, parsed)


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_echo: bool
    app_env: str
    log_level: str
    log_file: str | None
    api_host: str
    api_port: int

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("API_DATABASE_URL", "sqlite+pysqlite:///sqlite.db"),
        db_echo=_to_bool(os.getenv("API_DB_ECHO"), default=False),
        app_env=os.getenv("APP_ENV", "production").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        log_file=os.getenv("LOG_FILE") or None,
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=_to_int(os.getenv("API_PORT"), default=8000, minimum=1),
    )
