"""
Agent definitions and the registry that owns them for the process lifetime.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import AgentNotFoundError, DuplicateToolError, InvalidInputError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Agent:
    """A named (model, instructions, tool-set) configuration the conductor can address."""

    id: int
    name: str
    model: str
    instructions: Optional[str] = None
    tools: Tuple[str, ...] = ()

    def has_tool(self, tool_name: str) -> bool:
        return tool_name in self.tools

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "model": self.model,
            "instructions": self.instructions,
            "tools": [{"name": tool_name} for tool_name in self.tools],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Agent":
        tools = []
        for entry in data.get("tools") or ():
            tools.append(entry["name"] if isinstance(entry, Mapping) else str(entry))
        return cls(
            id=int(data["id"]),
            name=data["name"],
            model=data["model"],
            instructions=data.get("instructions"),
            tools=tuple(tools),
        )


def _require(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(message)
    return str(value)


class AgentRegistry:
    """
    Thread-safe in-memory store of agents.

    Ids come from a monotonically increasing counter so two registrations can
    never collide, however close together they happen.
    """

    def __init__(self, *, first_id: int = 1) -> None:
        self._agents: Dict[int, Agent] = {}
        self._ids = itertools.count(first_id)
        self._lock = threading.Lock()

    def register(self, name: Optional[str], model: Optional[str], instructions: Optional[str] = None) -> Agent:
        name = _require(name, "name and model are required")
        model = _require(model, "name and model are required")
        with self._lock:
            agent = Agent(id=next(self._ids), name=name, model=model, instructions=instructions or None)
            self._agents[agent.id] = agent
        LOGGER.info("Registered agent id=%d name=%s model=%s", agent.id, agent.name, agent.model)
        return agent

    def attach_tool(self, agent_id: int, tool_name: Optional[str]) -> Agent:
        tool_name = _require(tool_name, "agentId and toolName are required")
        with self._lock:
            agent = self._agents.get(agent_id)
            if agent is None:
                raise AgentNotFoundError(agent_id)
            if agent.has_tool(tool_name):
                raise DuplicateToolError(agent_id, tool_name)
            updated = replace(agent, tools=agent.tools + (tool_name,))
            self._agents[agent_id] = updated
        LOGGER.info("Attached tool %s to agent id=%d", tool_name, agent_id)
        return updated

    def get(self, agent_id: int) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def list(self) -> List[Agent]:
        with self._lock:
            return list(self._agents.values())

    def __len__(self) -> int:
        return len(self._agents)
