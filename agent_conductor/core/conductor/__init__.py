"""
Turn-taking orchestration over registered agents.
"""

from .conductor import (
    DEFAULT_MAX_TURNS,
    CancellationToken,
    Conductor,
    ConductorConfig,
    ConductorRunResult,
    RunStatus,
)
from .dispatch import ToolDispatcher
from .prompts import DEFAULT_INSTRUCTIONS

__all__ = [
    "DEFAULT_INSTRUCTIONS",
    "DEFAULT_MAX_TURNS",
    "CancellationToken",
    "Conductor",
    "ConductorConfig",
    "ConductorRunResult",
    "RunStatus",
    "ToolDispatcher",
]
