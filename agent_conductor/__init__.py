"""
High-level exports for the multi-agent conductor.

The package exposes the agent and tool registries, the round-robin
conductor, and the completion-provider clients it talks to.
"""

__version__ = "0.1.0"

from .builtin_tools import default_tool_registry
from .core.conductor import CancellationToken, Conductor, ConductorConfig, ConductorRunResult, RunStatus
from .core.errors import (
    AgentNotFoundError,
    ConductorError,
    DuplicateToolError,
    InvalidInputError,
    ProviderError,
    UnknownToolError,
)
from .core.primitives import (
    Agent,
    AgentRegistry,
    ChatMessage,
    Conversation,
    MessageRole,
    Tool,
    ToolCall,
    ToolRegistry,
    ToolResult,
)
from .llm import LLMClient, LLMResponse

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
    "LLMClient",
    "LLMResponse",
    "MessageRole",
    "ProviderError",
    "RunStatus",
    "Tool",
    "ToolCall",
    "ToolRegistry",
    "ToolResult",
    "UnknownToolError",
    "default_tool_registry",
]
