"""
Base interfaces for completion providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.errors import ProviderError
from ..core.primitives.messages import ChatMessage, ToolCall, coerce_messages


class LLMError(ProviderError):
    """Raised when an LLM request fails."""


@dataclass
class LLMResponse:
    content: str
    tool_calls: List[ToolCall] = field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
    raw: Optional[Dict[str, Any]] = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


class LLMClient(ABC):
    """
    Abstract base class for all chat-completion clients.

    ``model`` is the default model; callers may override it per request, which
    is how the conductor lets every agent pick its own backing model.
    """

    def __init__(
        self,
        model: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: Optional[int] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    @abstractmethod
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
        raise NotImplementedError

    def _resolve_kwargs(
        self,
        *,
        model: Optional[str],
        temperature: Optional[float],
        max_output_tokens: Optional[int],
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model or self.model,
            "temperature": temperature if temperature is not None else self.temperature,
        }
        final_max_tokens = max_output_tokens if max_output_tokens is not None else self.max_output_tokens
        if final_max_tokens is not None:
            payload["max_tokens"] = final_max_tokens
        return payload

    def chat_as_dicts(self, messages: Sequence[ChatMessage], **kwargs: Any) -> Dict[str, Any]:
        """
        Utility for subclasses that send HTTP requests with JSON bodies.
        """
        payload = self._resolve_kwargs(
            model=kwargs.pop("model", None),
            temperature=kwargs.pop("temperature", None),
            max_output_tokens=kwargs.pop("max_output_tokens", None),
        )
        tools = kwargs.pop("tools", None)
        if tools:
            payload["tools"] = tools
        payload.update(kwargs)
        payload["messages"] = coerce_messages(messages)
        return payload
