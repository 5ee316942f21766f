"""
Helpers that pull structured data out of OpenAI-style chat completion bodies.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping
from uuid import uuid4

from ..core.primitives.messages import ToolCall

LOGGER = logging.getLogger(__name__)


def parse_tool_calls(message: Mapping[str, Any]) -> List[ToolCall]:
    """
    Extract the ``tool_calls`` array of an assistant message.

    Entries that are not function calls or carry no function name are dropped.
    Arguments that are not valid JSON are preserved under ``__raw``.
    """
    raw_calls = message.get("tool_calls") or []
    calls: List[ToolCall] = []
    for entry in raw_calls:
        if not isinstance(entry, Mapping) or entry.get("type", "function") != "function":
            LOGGER.info("Skipping non-function tool call entry: %s", entry)
            continue
        call = ToolCall.from_dict(entry)
        if not call.name:
            LOGGER.info("Skipping tool call without a function name: %s", entry)
            continue
        if not call.id:
            call = ToolCall(id=f"tool_call_{uuid4().hex}", name=call.name, arguments=call.arguments)
        calls.append(call)
    return calls
