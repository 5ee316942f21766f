"""
Utilities for registering and invoking tools on behalf of agents.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ..errors import ConductorError, UnknownToolError

LOGGER = logging.getLogger(__name__)


class ToolExecutionError(ConductorError):
    """Raised when a tool invocation fails."""


@dataclass
class ToolResult:
    """Structured response produced by a tool."""

    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)


ToolCallable = Callable[[Mapping[str, Any]], ToolResult]


@dataclass
class Tool:
    name: str
    description: str
    func: ToolCallable
    schema: Optional[Dict[str, Any]] = None

    def __call__(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.func(arguments)

    def function_definition(self) -> Dict[str, Any]:
        """Return the OpenAI-style ``tools`` entry advertising this tool."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.schema or {"type": "object", "properties": {}},
            },
        }


class ToolRegistry:
    """In-memory registry responsible for resolving tool instances by name."""

    def __init__(self, tools: Optional[Iterable[Tool]] = None) -> None:
        self._tools: Dict[str, Tool] = {}
        self._lock = threading.Lock()
        if tools:
            self.update(tools)

    def register(self, tool: Tool) -> None:
        with self._lock:
            if tool.name in self._tools:
                raise ValueError(f"Tool named '{tool.name}' already registered.")
            self._tools[tool.name] = tool

    def update(self, tools: Iterable[Tool]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError as exc:
            raise UnknownToolError(name) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def invoke(self, name: str, params: Mapping[str, Any]) -> str:
        """Run a tool and return its textual result."""
        tool = self.get(name)
        try:
            result = tool(params)
        except Exception as exc:
            raise ToolExecutionError(f"Tool '{name}' failed: {exc}") from exc
        content = str(result.content) if isinstance(result, ToolResult) else str(result)
        LOGGER.debug("Tool %s returned %r", name, content)
        return content

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def schemas(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        """Function definitions for the registered subset of ``names``."""
        return [self._tools[name].function_definition() for name in names if name in self._tools]

