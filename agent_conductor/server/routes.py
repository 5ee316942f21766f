"""
Routes mapping HTTP requests onto the registries and the conductor.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from ..core.conductor import Conductor
from ..core.errors import InvalidInputError
from ..core.primitives.agents import AgentRegistry
from ..core.primitives.tools import ToolRegistry
from .schemas import AddToolRequest, CreateAgentRequest, StartConversationRequest

router = APIRouter(tags=["conductor"])


def get_agents(request: Request) -> AgentRegistry:
    return request.app.state.agents


def get_tools(request: Request) -> ToolRegistry:
    return request.app.state.tools


def get_conductor(request: Request) -> Conductor:
    return request.app.state.conductor


@router.get("/agents")
def list_agents(agents: AgentRegistry = Depends(get_agents)) -> List[Dict[str, Any]]:
    return [agent.to_dict() for agent in agents.list()]


@router.get("/tools")
def list_tools(tools: ToolRegistry = Depends(get_tools)) -> List[str]:
    return tools.names()


@router.post("/create-agent")
def create_agent(body: CreateAgentRequest, agents: AgentRegistry = Depends(get_agents)) -> Dict[str, Any]:
    agent = agents.register(body.name, body.model, body.instructions)
    return agent.to_dict()


@router.post("/add-tool")
def add_tool(body: AddToolRequest, agents: AgentRegistry = Depends(get_agents)) -> Dict[str, Any]:
    if not body.agentId or not body.toolName:
        raise InvalidInputError("agentId and toolName are required")
    agent = agents.attach_tool(body.agentId, body.toolName)
    return {"success": True, "agent": agent.to_dict()}


@router.post("/start-conversation")
def start_conversation(
    body: StartConversationRequest,
    conductor: Conductor = Depends(get_conductor),
) -> Dict[str, Any]:
    if not body.agentIds:
        raise InvalidInputError("agentIds must be a non-empty array")
    result = conductor.run_conversation(
        body.agentIds,
        body.userInput,
        # 0 and null both mean "use the configured default"
        max_turns=body.maxTurns or None,
    )
    return result.to_dict()
