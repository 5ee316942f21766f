"""
Retry wrapper for completion providers.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from .base import LLMClient, LLMError, LLMResponse
from ..core.primitives.messages import ChatMessage

LOGGER = logging.getLogger(__name__)


class RetryingClient(LLMClient):
    """
    Wraps another client and retries failed requests with exponential backoff.

    Only ``LLMError`` is retried; after ``max_retries`` attempts the last error
    is re-raised unchanged.
    """

    def __init__(
        self,
        inner: LLMClient,
        *,
        max_retries: int = 3,
        initial_delay: float = 2.0,
        max_delay: float = 32.0,
        backoff_factor: float = 2.0,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        super().__init__(inner.model, temperature=inner.temperature, max_output_tokens=inner.max_output_tokens)
        self.inner = inner
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.backoff_factor = backoff_factor

    def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: Optional[str] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        call = functools.partial(
            self.inner.chat,
            messages,
            model=model,
            tools=tools,
            timeout=timeout,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            **kwargs,
        )
        delay = self.initial_delay
        for attempt in range(1, self.max_retries):
            try:
                return call()
            except LLMError as exc:
                LOGGER.warning(
                    "Attempt %d/%d failed: %s. Retrying in %.1f seconds.",
                    attempt,
                    self.max_retries,
                    exc,
                    delay,
                )
                time.sleep(delay)
                delay = min(delay * self.backoff_factor, self.max_delay)
        # Last attempt: errors propagate to the caller.
        return call()
