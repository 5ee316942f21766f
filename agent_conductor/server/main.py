"""
Entry point that wires settings, the provider and the app, then serves it.
"""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn

from ..config import Settings, configure_logging
from ..llm import (
    AssistantsClient,
    LLMClient,
    RetryingClient,
    create_assistants_client,
    create_chat_completion_client,
)
from .app import create_app

LOGGER = logging.getLogger(__name__)


def build_provider(settings: Settings) -> LLMClient:
    provider: LLMClient = create_chat_completion_client(
        settings.llm_provider,
        settings.default_model,
        timeout=settings.turn_timeout,
    )
    if settings.llm_retries:
        # RetryingClient counts attempts, the setting counts retries after the first one.
        provider = RetryingClient(provider, max_retries=settings.llm_retries + 1)
    return provider


def build_assistants(settings: Settings) -> Optional[AssistantsClient]:
    try:
        return create_assistants_client(
            timeout=settings.turn_timeout,
            poll_interval=settings.assistant_poll_interval,
            run_timeout=settings.assistant_run_timeout,
        )
    except ValueError as exc:
        LOGGER.warning("Assistant routes disabled: %s", exc)
        return None


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(
        provider=build_provider(settings),
        settings=settings,
        assistants=build_assistants(settings),
    )
    LOGGER.info("Server listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
