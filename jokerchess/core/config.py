"""
Application settings, read from the environment (prefix JOKERCHESS_) or a .env file.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="JOKERCHESS_", env_file=".env", extra="ignore"
    )

    database_url: str = "sqlite:///jokerchess.db"
    database_echo: bool = False
    default_time_control_seconds: int = Field(default=600, gt=0)
    # one "simulated second" of the game clock, in real seconds
    clock_period_seconds: float = Field(default=1.0, ge=0)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Only called by applications embedding the engine. The library itself never configures logging."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
