"""
Routes for the single-assistant demo backed by the Assistants API.

The app remembers the most recently found or created assistant; ``/run``
talks to that one.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.errors import InvalidInputError, ProviderError
from ..llm.assistants import AssistantsClient
from ..llm.base import LLMError
from .schemas import CreateAssistantRequest, RunAssistantRequest

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["assistants"])


def get_assistants(request: Request) -> AssistantsClient:
    client = request.app.state.assistants
    if client is None:
        raise ProviderError("Assistants client is not configured")
    return client


def _failure(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@router.post("/assistant")
def get_or_create_assistant(
    body: CreateAssistantRequest,
    request: Request,
    client: AssistantsClient = Depends(get_assistants),
) -> Any:
    if not body.assistantName:
        raise InvalidInputError("assistantName is required")
    model = body.model or request.app.state.settings.default_model
    try:
        assistant_id, created = client.get_or_create_assistant(body.assistantName, body.systemMessage, model)
    except LLMError:
        LOGGER.exception("Error creating/getting assistant %s", body.assistantName)
        return _failure("Failed to create assistant")
    request.app.state.assistant_id = assistant_id
    status = "Assistant created successfully" if created else "Assistant found"
    return {"assistantId": assistant_id, "status": status}


@router.post("/thread")
def create_thread(client: AssistantsClient = Depends(get_assistants)) -> Any:
    try:
        thread_id = client.create_thread()
    except LLMError:
        LOGGER.exception("Error creating thread")
        return _failure("Failed to create thread")
    return {"threadId": thread_id, "status": "New thread created"}


@router.post("/run")
def run_assistant(
    body: RunAssistantRequest,
    request: Request,
    client: AssistantsClient = Depends(get_assistants),
) -> Any:
    assistant_id = request.app.state.assistant_id
    if not assistant_id:
        raise InvalidInputError("No Assistant has been created yet.")
    if not body.threadId or not body.userPrompt:
        raise InvalidInputError("threadId and userPrompt are required")
    try:
        messages = client.run_and_wait(body.threadId, assistant_id, body.userPrompt)
    except LLMError:
        LOGGER.exception("Error running assistant %s on thread %s", assistant_id, body.threadId)
        return _failure("Failed to run Assistant")
    return {"messages": messages, "status": "Response received from Assistant"}
