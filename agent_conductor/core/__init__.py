"""
Core primitives and the conductor loop that composes them.
"""

from .errors import (
    AgentNotFoundError,
    ConductorError,
    DuplicateToolError,
    InvalidInputError,
    ProviderError,
    UnknownToolError,
)
from .primitives import (
    Agent,
    AgentRegistry,
    ChatMessage,
    Conversation,
    MessageRole,
    Tool,
    ToolCall,
    ToolExecutionError,
    ToolRegistry,
    ToolResult,
)
from .conductor import CancellationToken, Conductor, ConductorConfig, ConductorRunResult, RunStatus

__all__ = [
    "Agent",
    "AgentNotFoundError",
    "AgentRegistry",
    "CancellationToken",
    "ChatMessage",
    "Conductor",
    "ConductorConfig",
    "ConductorError",
    "ConductorRunResult",
    "Conversation",
    "DuplicateToolError",
    "InvalidInputError",
    "MessageRole",
    "ProviderError",
    "RunStatus",
    "Tool",
    "ToolCall",
    "ToolExecutionError",
    "ToolRegistry",
    "ToolResult",
    "UnknownToolError",
]
