from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bitcoin Tracking"
    database_url: str = "sqlite:///./bitcoin_tracking.db"
    display_timezone: str = "Europe/Prague"

    price_feed_base_url: str = "https://data-api.coindesk.com"
    price_feed_endpoint: str = "/index/cc/v1/latest/tick?market=cadli&instruments=BTC-EUR"
    fx_feed_base_url: str = "https://www.cnb.cz"
    fx_feed_endpoint: str = (
        "/cs/financni-trhy/devizovy-trh/kurzy-devizoveho-trhu/kurzy-devizoveho-trhu/denni_kurz.txt"
    )
    http_timeout_seconds: float = Field(30.0, gt=0)

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    log_level: str = "INFO"
    run_migrations_on_startup: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @field_validator("database_url", mode="before")
    def expand_sqlite_path(cls, v: str) -> str:
        if v.startswith("sqlite") and "///" in v and not v.startswith("sqlite:////"):
            path = v.split("///", 1)[1]
            if path and not path.startswith("/") and not path.startswith(":memory:"):
                abs_path = Path(os.getcwd()) / path
                return f"sqlite:///{abs_path}"
        return v

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v: str) -> str:
        return str(v).strip().upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
