from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Banking Transfer API"
    database_url: str = "sqlite:///banking.db"
    log_level: str = "INFO"
    isolation_level: Optional[str] = None
    echo_sql: bool = False
    bootstrap_script: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BANKING_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
