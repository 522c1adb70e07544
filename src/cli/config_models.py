"""Pydantic configuration models for Sicbo Oracle."""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_FEED_URL = "https://api.wsmt8g.cc/v2/history/getLastResult"


class FeedConfig(BaseModel):
    """Upstream round-history source."""

    base_url: str = DEFAULT_FEED_URL
    game_id: str = "ktrng_3932"
    table_id: str = "39321215743193"
    size: int = 120
    timeout: float = 30.0
    user_agent: str = "Sicbo-Oracle/1.0"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if v.startswith("${") and v.endswith("}"):
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Feed base_url must be http(s), got {v}")
        return v

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: int) -> int:
        if not 1 <= v <= 500:
            raise ValueError(f"Feed size must be 1-500, got {v}")
        return v

    def params(self) -> dict:
        return {"gameId": self.game_id, "size": self.size, "tableId": self.table_id, "curPage": 1}


class RetryConfig(BaseModel):
    """Retry/backoff configuration."""

    max_attempts: int = 3
    min_wait: float = 2.0
    max_wait: float = 10.0


class EngineConfig(BaseModel):
    """Ensemble tuning."""

    min_history: int = 5
    lookback: int = 10
    seed: Optional[int] = None

    @field_validator("min_history", "lookback")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class SicboConfig(BaseModel):
    """Main configuration model."""

    feed: FeedConfig = Field(default_factory=FeedConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand a ${VAR} feed URL and let PORT override the server port."""
        url = self.feed.base_url
        if url.startswith("${") and url.endswith("}"):
            self.feed.base_url = os.getenv(url[2:-1], DEFAULT_FEED_URL)
        port = os.getenv("PORT")
        if port and port.isdigit():
            self.server.port = int(port)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "SicboConfig":
        return cls.model_validate(data)
