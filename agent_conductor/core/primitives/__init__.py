"""
Foundational data structures shared across the framework.
"""

from .agents import Agent, AgentRegistry
from .conversation import Conversation
from .messages import (
    ChatMessage,
    MessageRole,
    ToolCall,
    assistant_message,
    coerce_messages,
    system_message,
    tool_message,
    user_message,
)
from .tools import Tool, ToolCallable, ToolExecutionError, ToolRegistry, ToolResult

__all__ = [
    "Agent",
    "AgentRegistry",
    "Conversation",
    "ChatMessage",
    "MessageRole",
    "ToolCall",
    "assistant_message",
    "coerce_messages",
    "system_message",
    "tool_message",
    "user_message",
    "Tool",
    "ToolCallable",
    "ToolExecutionError",
    "ToolRegistry",
    "ToolResult",
]
