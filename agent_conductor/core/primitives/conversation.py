"""
Append-only transcript storage for a single conductor run.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..errors import InvalidInputError
from .messages import ChatMessage, MessageRole, user_message


class Conversation:
    """
    Ordered record of every message exchanged during a run, including tool
    results and system notes.

    Messages can only be appended; the transcript order is what gets replayed
    to the completion provider on every turn.
    """

    def __init__(self, messages: Optional[Iterable[ChatMessage]] = None) -> None:
        self._messages: List[ChatMessage] = list(messages or [])

    @classmethod
    def seeded(cls, user_input: Optional[str]) -> "Conversation":
        """Start a conversation from a single user message."""
        return cls([user_message(user_input or "")])

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def extend(self, new_messages: Iterable[ChatMessage]) -> None:
        for message in new_messages:
            self.append(message)

    def snapshot(self) -> List[ChatMessage]:
        """Return a shallow copy so callers cannot reorder the transcript."""
        return list(self._messages)

    def count(self, role: MessageRole) -> int:
        return sum(1 for message in self._messages if message.role is role)

    def validate_seed(self) -> None:
        if not self._messages or self._messages[0].role is not MessageRole.USER:
            raise InvalidInputError("Conversation must start with a user message.")
        if self.count(MessageRole.USER) != 1:
            raise InvalidInputError("Conversation must be seeded with exactly one user message.")

    def to_dict(self) -> Dict[str, Any]:
        return {"messages": [message.to_dict() for message in self._messages]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Conversation":
        return cls(ChatMessage.from_dict(item) for item in data.get("messages") or ())

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._messages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conversation):
            return NotImplemented
        return self._messages == other._messages

    def __repr__(self) -> str:
        return f"Conversation(messages={self._messages!r})"
