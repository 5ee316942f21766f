from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest

from agent_conductor.builtin_tools import default_tool_registry
from agent_conductor.core.primitives.agents import AgentRegistry
from agent_conductor.core.primitives.messages import ChatMessage
from agent_conductor.llm.base import LLMClient, LLMResponse


class ScriptedProvider(LLMClient):
    """Returns queued responses in order, then ``default`` forever."""

    def __init__(self, responses: Optional[List[Any]] = None, default: str = "ok") -> None:
        super().__init__("fake-model")
        self.responses = list(responses or [])
        self.default = default
        self.calls: List[Dict[str, Any]] = []

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
        self.calls.append({"messages": list(messages), "model": model, "tools": tools, "timeout": timeout})
        if self.responses:
            item = self.responses.pop(0)
            if isinstance(item, BaseException):
                raise item
            if isinstance(item, LLMResponse):
                return item
            return LLMResponse(content=item)
        return LLMResponse(content=self.default)


@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def agents() -> AgentRegistry:
    return AgentRegistry()


@pytest.fixture
def tools():
    return default_tool_registry()


class FakeResponse:
    """Minimal ``requests.Response`` double."""

    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body
