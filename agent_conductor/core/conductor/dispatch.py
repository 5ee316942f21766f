"""
Resolution of provider-requested tool calls into transcript messages.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional, Tuple

from ..errors import UnknownToolError
from ..primitives.agents import Agent
from ..primitives.messages import ChatMessage, ToolCall, tool_message
from ..primitives.tools import ToolExecutionError, ToolRegistry
from .prompts import tool_failure_note, unknown_tool_note, unregistered_tool_note

LOGGER = logging.getLogger(__name__)


class ToolDispatcher:
    """
    Executes tool calls on behalf of an agent.

    Every outcome, including failures, becomes a message; ``dispatch`` never
    raises for a bad call so a single broken tool cannot end a run.
    """

    def __init__(self, tools: ToolRegistry) -> None:
        self.tools = tools

    def dispatch(self, agent: Agent, calls: Iterable[ToolCall]) -> List[ChatMessage]:
        """
        Answer every call with a ``tool`` message carrying its ``tool_call_id``.

        Failed calls are answered with the failure text; the matching system
        notes follow after all tool replies so the replies stay contiguous
        with the assistant message that requested them.
        """
        replies: List[ChatMessage] = []
        notes: List[ChatMessage] = []
        for call in calls:
            content, note = self._dispatch_one(agent, call)
            replies.append(tool_message(content, name=call.name, tool_call_id=call.id))
            if note is not None:
                notes.append(note)
        return replies + notes

    def _dispatch_one(self, agent: Agent, call: ToolCall) -> Tuple[str, Optional[ChatMessage]]:
        if not agent.has_tool(call.name):
            LOGGER.warning("Agent %s requested tool %s which is not attached", agent.name, call.name)
            note = unknown_tool_note(agent.name, call.name)
            return note.content, note
        try:
            content = self.tools.invoke(call.name, call.arguments)
        except UnknownToolError:
            LOGGER.warning("Agent %s requested unregistered tool %s", agent.name, call.name)
            note = unregistered_tool_note(agent.name, call.name)
            return note.content, note
        except ToolExecutionError as exc:
            LOGGER.warning("Tool %s failed for agent %s: %s", call.name, agent.name, exc)
            note = tool_failure_note(call.name, exc.__cause__ or exc)
            return note.content, note
        LOGGER.info(
            "\n%s\n[TOOL RESULT] %s\nInput: %s\n%s\n%s",
            "-" * 80,
            call.name,
            json.dumps(dict(call.arguments), ensure_ascii=False, default=str),
            content.strip(),
            "-" * 80,
        )
        return content, None
