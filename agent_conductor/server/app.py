"""
FastAPI application factory for the conductor HTTP surface.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .. import __version__
from ..builtin_tools import default_tool_registry
from ..config import Settings
from ..core.conductor import Conductor, ConductorConfig
from ..core.errors import (
    AgentNotFoundError,
    ConductorError,
    DuplicateToolError,
    InvalidInputError,
    ProviderError,
)
from ..core.primitives.agents import AgentRegistry
from ..core.primitives.tools import ToolRegistry
from ..llm.assistants import AssistantsClient
from ..llm.base import LLMClient
from .assistant_routes import router as assistant_router
from .routes import router

LOGGER = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (InvalidInputError, 400),
    (DuplicateToolError, 400),
    (AgentNotFoundError, 404),
    (ProviderError, 500),
)


def _status_for(exc: ConductorError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app(
    *,
    provider: LLMClient,
    agents: Optional[AgentRegistry] = None,
    tools: Optional[ToolRegistry] = None,
    settings: Optional[Settings] = None,
    assistants: Optional[AssistantsClient] = None,
) -> FastAPI:
    """
    Build the application. Registries are created here unless injected, so
    every app owns its own state and tests can pass fixtures in. The assistant
    routes answer 500 until an ``assistants`` client is supplied.
    """
    settings = settings if settings is not None else Settings()
    agents = agents if agents is not None else AgentRegistry()
    tools = tools if tools is not None else default_tool_registry()

    app = FastAPI(title="agent-conductor", version=__version__)
    app.state.settings = settings
    app.state.agents = agents
    app.state.tools = tools
    app.state.assistants = assistants
    app.state.assistant_id = None
    app.state.conductor = Conductor(
        provider,
        agents,
        tools,
        config=ConductorConfig(max_turns=settings.max_turns, turn_timeout=settings.turn_timeout),
    )

    @app.exception_handler(ConductorError)
    async def conductor_error_handler(request: Request, exc: ConductorError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=status_code, content={"error": "Something went wrong."})
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Something went wrong."})

    app.include_router(router)
    app.include_router(assistant_router)
    return app
