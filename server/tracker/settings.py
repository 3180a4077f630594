"""Runtime settings loaded from the environment.

Every field can be overridden with a ``LIFETRACKER_`` prefixed environment
variable or a ``.env`` file in the working directory, e.g.::

    LIFETRACKER_HISTORY_CAPACITY=50
    LIFETRACKER_COMMANDER=false
    LIFETRACKER_PORT=8080
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import MAX_HISTORY, MAX_PLAYERS, MIN_PLAYERS


class Settings(BaseSettings):
    # Number of snapshots kept before the oldest is evicted
    HISTORY_CAPACITY: int = Field(default=MAX_HISTORY, ge=2)

    # Match started when the process boots
    DEFAULT_PLAYERS: int = Field(default=MAX_PLAYERS, ge=MIN_PLAYERS, le=MAX_PLAYERS)
    COMMANDER: bool = True

    # Web server bind
    HOST: str = "0.0.0.0"
    PORT: int = 7000

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="LIFETRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
