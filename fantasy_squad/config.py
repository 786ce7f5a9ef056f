# fantasy_squad/config.py
from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

DEFAULT_API_URL = "http://localhost:8080"


class Settings(BaseModel):
    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the fantasy API (no trailing slash).")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout in seconds.")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=os.getenv("FANTASY_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=float(os.getenv("FANTASY_API_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    return logging.getLogger("fantasy_squad")
