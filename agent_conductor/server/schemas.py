"""
Request bodies accepted by the HTTP surface.

Fields are optional at the schema level so that missing values reach the
registries and come back as the same 400 errors the core raises.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class CreateAgentRequest(BaseModel):
    name: Optional[str] = None
    model: Optional[str] = None
    instructions: Optional[str] = None


class AddToolRequest(BaseModel):
    agentId: Optional[int] = None
    toolName: Optional[str] = None


class StartConversationRequest(BaseModel):
    agentIds: Optional[List[int]] = None
    userInput: Optional[str] = None
    maxTurns: Optional[int] = None


class CreateAssistantRequest(BaseModel):
    assistantName: Optional[str] = None
    systemMessage: Optional[str] = None
    model: Optional[str] = None


class RunAssistantRequest(BaseModel):
    threadId: Optional[str] = None
    userPrompt: Optional[str] = None
