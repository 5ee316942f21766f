"""
Convenience exports for built-in completion providers.
"""

from .assistants import AssistantsClient, create_assistants_client
from .base import LLMClient, LLMError, LLMResponse
from .parsers import parse_tool_calls
from .providers import (
    OpenAICompatibleClient,
    ProviderSpec,
    create_chat_completion_client,
    get_provider_spec,
    list_providers,
    register_provider,
)
from .retry import RetryingClient

__all__ = [
    "AssistantsClient",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "OpenAICompatibleClient",
    "ProviderSpec",
    "RetryingClient",
    "create_assistants_client",
    "create_chat_completion_client",
    "get_provider_spec",
    "list_providers",
    "parse_tool_calls",
    "register_provider",
]
