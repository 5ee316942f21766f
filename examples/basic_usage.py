"""
Basic usage example: two agents take turns discussing a question.
"""

import logging

from agent_conductor import AgentRegistry, Conductor, ConductorConfig, default_tool_registry
from agent_conductor.llm import create_chat_completion_client


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    llm = create_chat_completion_client("openai", model="gpt-4o-mini")
    agents = AgentRegistry()
    optimist = agents.register("Optimist", "gpt-4o-mini", "Argue for the idea in two sentences.")
    skeptic = agents.register("Skeptic", "gpt-4o-mini", "Argue against the idea in two sentences.")
    agents.attach_tool(skeptic.id, "add")

    conductor = Conductor(llm, agents, default_tool_registry(), config=ConductorConfig(max_turns=4))
    result = conductor.run_conversation(
        [optimist.id, skeptic.id],
        "Should every team write its own agent framework?",
    )
    print("Status:", result.status.value)
    for message in result.messages:
        speaker = message.name or message.role.value
        print(f"[{speaker}] {message.content}")


if __name__ == "__main__":
    main()
