"""
Exception taxonomy shared by the registries, the conductor and the HTTP layer.
"""

from __future__ import annotations


class ConductorError(Exception):
    """Base class for all errors raised by the framework."""


class InvalidInputError(ConductorError):
    """Raised when required fields are missing or malformed."""


class AgentNotFoundError(ConductorError):
    """Raised when an agent id does not resolve to a registered agent."""

    def __init__(self, agent_id: object) -> None:
        super().__init__(f"Agent with id={agent_id} not found.")
        self.agent_id = agent_id


class DuplicateToolError(ConductorError):
    """Raised when a tool is attached to an agent that already has it."""

    def __init__(self, agent_id: int, tool_name: str) -> None:
        super().__init__("Tool already assigned to this agent")
        self.agent_id = agent_id
        self.tool_name = tool_name


class UnknownToolError(ConductorError):
    """Raised when a tool name is not present in the tool registry."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool '{tool_name}'.")
        self.tool_name = tool_name


class ProviderError(ConductorError):
    """Raised when the completion provider fails to produce a response."""
