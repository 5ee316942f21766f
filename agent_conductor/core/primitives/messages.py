"""
Core message primitives shared across the conductor pipeline.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..errors import InvalidInputError


class MessageRole(str, Enum):
    """Canonical chat roles accepted by the framework."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolCall:
    """A single tool invocation requested by the completion provider."""

    id: str
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI-style ``tool_calls`` entry for this call."""
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(dict(self.arguments), ensure_ascii=False),
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ToolCall":
        function_block = data.get("function") or {}
        arguments_text = function_block.get("arguments") or ""
        try:
            arguments = json.loads(arguments_text) if arguments_text else {}
        except json.JSONDecodeError:
            arguments = {"__raw": arguments_text}
        if not isinstance(arguments, dict):
            arguments = {"value": arguments}
        return cls(
            id=str(data.get("id") or ""),
            name=str(function_block.get("name") or ""),
            arguments=arguments,
        )


@dataclass(frozen=True)
class ChatMessage:
    """
    Immutable representation of a chat message.

    The structure mirrors common OpenAI-compatible schemas and is easily
    serializable to JSON for prompt construction and transcript replay.
    """

    role: MessageRole
    content: str
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Sequence[ToolCall] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        payload: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.name:
            payload["name"] = self.name
        if self.tool_call_id:
            payload["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            payload["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload

    def to_provider_dict(self) -> Dict[str, Any]:
        """Like ``to_dict`` but without local-only metadata."""
        payload = self.to_dict()
        payload.pop("metadata", None)
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        try:
            role = MessageRole(data["role"])
        except (KeyError, ValueError) as exc:
            raise InvalidInputError(f"Invalid message role in {dict(data)!r}") from exc
        content = data.get("content")
        return cls(
            role=role,
            content="" if content is None else str(content),
            name=data.get("name"),
            tool_call_id=data.get("tool_call_id"),
            tool_calls=tuple(ToolCall.from_dict(call) for call in data.get("tool_calls") or ()),
            metadata=dict(data.get("metadata") or {}),
        )


def system_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.SYSTEM, content=content)


def user_message(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.USER, content=content)


def assistant_message(
    content: str = "",
    *,
    name: Optional[str] = None,
    tool_calls: Optional[Sequence[ToolCall]] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> ChatMessage:
    return ChatMessage(
        role=MessageRole.ASSISTANT,
        content=content,
        name=name,
        tool_calls=tuple(tool_calls or ()),
        metadata=metadata or {},
    )


def tool_message(
    content: str,
    name: str,
    *,
    tool_call_id: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> ChatMessage:
    return ChatMessage(
        role=MessageRole.TOOL,
        content=content,
        name=name,
        tool_call_id=tool_call_id,
        metadata=metadata or {},
    )


def coerce_messages(messages: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Convert a list of message objects into provider request dictionaries."""
    return [message.to_provider_dict() for message in messages]
