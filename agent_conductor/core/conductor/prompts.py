"""
Fixed texts the conductor injects into requests and transcripts.
"""

from __future__ import annotations

from typing import Optional

from ..primitives.agents import Agent
from ..primitives.messages import ChatMessage, system_message

DEFAULT_INSTRUCTIONS = "You are a helpful agent."


def build_agent_system_message(agent: Agent) -> ChatMessage:
    return system_message(agent.instructions or DEFAULT_INSTRUCTIONS)


def missing_agent_note(agent_id: object) -> ChatMessage:
    return system_message(f"Agent with id={agent_id} not found. Stopping.")


def unknown_tool_note(agent_name: str, tool_name: str) -> ChatMessage:
    return system_message(f"Agent {agent_name} tried to call unknown tool: {tool_name}")


def unregistered_tool_note(agent_name: str, tool_name: str) -> ChatMessage:
    return system_message(f"Agent {agent_name} tried to call unregistered tool: {tool_name}")


def tool_failure_note(tool_name: str, error: Optional[BaseException]) -> ChatMessage:
    return system_message(f"Tool {tool_name} failed: {error}")
