"""
Runtime configuration read from ``CONDUCTOR_*`` environment variables and ``.env``.
"""

from __future__ import annotations

import logging
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.conductor import DEFAULT_MAX_TURNS

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Server and conductor configuration. Build with ``from_env()`` or pass explicitly in tests."""

    model_config = SettingsConfigDict(
        env_prefix="CONDUCTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    llm_provider: str = "openai"
    default_model: str = "gpt-4o-mini"
    max_turns: int = DEFAULT_MAX_TURNS
    turn_timeout: float = 30.0
    # Retries after the first failed request; 0 disables the retry wrapper.
    llm_retries: int = 0
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"
    # Assistants demo polling.
    assistant_poll_interval: float = 1.0
    assistant_run_timeout: float = 60.0

    @field_validator("max_turns")
    @classmethod
    def _positive_turns(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be positive")
        return value

    @field_validator("llm_retries")
    @classmethod
    def _non_negative_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("assistant_poll_interval", "assistant_run_timeout")
    @classmethod
    def _positive_seconds(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_env(cls) -> "Settings":
        """Load ``.env`` into the process environment, then read settings from it."""
        # Provider API keys (OPENAI_API_KEY and friends) are read from os.environ.
        load_dotenv(find_dotenv(usecwd=True))
        return cls()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or "INFO").upper(), format=LOG_FORMAT)
