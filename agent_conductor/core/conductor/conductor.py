"""
Round-robin conductor that drives a bounded multi-agent conversation.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..errors import InvalidInputError, ProviderError
from ..primitives.agents import Agent, AgentRegistry
from ..primitives.conversation import Conversation
from ..primitives.messages import ChatMessage, assistant_message
from ..primitives.tools import ToolRegistry
from ...llm.base import LLMClient, LLMResponse
from .dispatch import ToolDispatcher
from .prompts import build_agent_system_message, missing_agent_note

DEFAULT_MAX_TURNS = 6


class RunStatus(str, Enum):
    COMPLETED = "completed"
    STOPPED_MISSING_AGENT = "stoppedMissingAgent"
    STOPPED_NO_FURTHER_ACTION = "stoppedNoFurtherAction"
    CANCELLED = "cancelled"


class CancellationToken:
    """Flag a caller can set from another thread to stop a run between turns."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class ConductorConfig:
    max_turns: int = DEFAULT_MAX_TURNS
    # Passed to the provider on every turn; None keeps the provider's own default.
    turn_timeout: Optional[float] = None
    # Stop as soon as an agent answers without requesting any tool.
    stop_when_idle: bool = False


@dataclass
class ConductorRunResult:
    messages: List[ChatMessage]
    status: RunStatus
    turns: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": [message.to_dict() for message in self.messages],
            "status": self.status.value,
            "turns": self.turns,
        }


class Conductor:
    """
    Lets a fixed, ordered list of agents take turns answering a conversation.

    Each turn resolves the next agent id, sends the agent's instructions plus
    the whole transcript to the completion provider, and appends the reply.
    Provider failures abort the run; a missing agent ends it softly with a
    system note; tool problems only ever become transcript messages.
    """

    def __init__(
        self,
        provider: LLMClient,
        agents: AgentRegistry,
        tools: Optional[ToolRegistry] = None,
        *,
        config: Optional[ConductorConfig] = None,
    ) -> None:
        self.provider = provider
        self.agents = agents
        self.tools = tools if tools is not None else ToolRegistry()
        self.config = config or ConductorConfig()
        self.dispatcher = ToolDispatcher(self.tools)
        self._logger = logging.getLogger(__name__)

    def run_conversation(
        self,
        agent_ids: Sequence[int],
        user_input: Optional[str],
        *,
        max_turns: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ConductorRunResult:
        return self.run(
            agent_ids,
            Conversation.seeded(user_input),
            max_turns=max_turns,
            cancel_token=cancel_token,
        )

    def run(
        self,
        agent_ids: Sequence[int],
        conversation: Conversation,
        *,
        max_turns: Optional[int] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ConductorRunResult:
        agent_ids = list(agent_ids or [])
        if not agent_ids:
            raise InvalidInputError("agentIds must be a non-empty array")
        turn_limit = self.config.max_turns if max_turns is None else max_turns
        if isinstance(turn_limit, bool) or not isinstance(turn_limit, int) or turn_limit < 1:
            raise InvalidInputError("maxTurns must be a positive integer")
        conversation.validate_seed()

        self._logger.info(
            "\n%s\n[RUN START]\nAgents: %s\nMax turns: %d\n%s",
            "=" * 80,
            agent_ids,
            turn_limit,
            "=" * 80,
        )

        status = RunStatus.COMPLETED
        turns = 0
        index = 0
        while turns < turn_limit:
            if cancel_token is not None and cancel_token.cancelled:
                self._logger.warning("Run cancelled after %d turns", turns)
                status = RunStatus.CANCELLED
                break
            agent_id = agent_ids[index % len(agent_ids)]
            agent = self.agents.get(agent_id)
            if agent is None:
                self._logger.warning("Agent id=%s not found on turn %d, stopping run", agent_id, turns + 1)
                conversation.append(missing_agent_note(agent_id))
                status = RunStatus.STOPPED_MISSING_AGENT
                break

            response = self._take_turn(agent, conversation, turns + 1)
            index = (index + 1) % len(agent_ids)
            turns += 1
            if self.config.stop_when_idle and not response.has_tool_calls:
                status = RunStatus.STOPPED_NO_FURTHER_ACTION
                break

        self._logger.info(
            "\n%s\n[RUN END] status=%s turns=%d messages=%d\n%s",
            "=" * 80,
            status.value,
            turns,
            len(conversation),
            "=" * 80,
        )
        return ConductorRunResult(messages=conversation.snapshot(), status=status, turns=turns)

    def _take_turn(self, agent: Agent, conversation: Conversation, turn: int) -> LLMResponse:
        request = [build_agent_system_message(agent)] + conversation.snapshot()
        response = self._complete(agent, request)
        self._logger.info(
            "\n%s\n[TURN %d] %s (%s)\n%s\n%s",
            "-" * 80,
            turn,
            agent.name,
            agent.model,
            (response.content or "").strip(),
            "-" * 80,
        )
        conversation.append(
            assistant_message(
                response.content or "",
                name=agent.name,
                tool_calls=response.tool_calls,
            )
        )
        if response.has_tool_calls:
            conversation.extend(self.dispatcher.dispatch(agent, response.tool_calls))
        return response

    def _complete(self, agent: Agent, request: List[ChatMessage]) -> LLMResponse:
        try:
            return self.provider.chat(
                request,
                model=agent.model,
                tools=self.tools.schemas(agent.tools) or None,
                timeout=self.config.turn_timeout,
            )
        except ProviderError:
            self._logger.exception("Completion provider failed for agent %s", agent.name)
            raise
        except Exception as exc:
            self._logger.exception("Completion provider failed for agent %s", agent.name)
            raise ProviderError(f"Completion provider failed for agent {agent.name}: {exc}") from exc
