"""Wiring for a complete agent run.

``run_agent`` seeds working memory with the system prompt and the user's
directive, registers the built-in capabilities, and drives steps until the
``done`` capability reports completion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolbot.capabilities import default_capabilities
from toolbot.memory import WorkingMemory
from toolbot.orchestrator import AgentStepper, Driver, TerminationSignal
from toolbot.prompts.system import AGENT_SYSTEM_PROMPT
from toolbot.protocols import system, user
from toolbot.toolkit.registry import CapabilityRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from toolbot.capabilities.done import DoneArgs
    from toolbot.llm.protocols import LLMClient
    from toolbot.orchestrator.models import StepResult

logger = logging.getLogger(__name__)


async def run_agent(
    directive: str,
    client: LLMClient,
    *,
    model: str | None = None,
    parallel_tool_calls: bool | None = None,
    max_steps: int | None = None,
    on_step: Callable[[StepResult], None] | None = None,
    system_prompt: str = AGENT_SYSTEM_PROMPT,
) -> DoneArgs:
    """Run the agent on ``directive`` until it calls ``done``.

    Args:
        directive: The user's goal, sent as the first user message.
        client: Model client; not closed here.
        model: Model identifier sent with each request.
        parallel_tool_calls: Forwarded to the backend when not None.
        max_steps: Give up after this many steps (None = no limit).
        on_step: Called with every committed step.
        system_prompt: Override for the default agent system prompt.

    Returns:
        The report the model passed to ``done``.
    """
    memory = WorkingMemory([system(system_prompt), user(directive)])

    signal: TerminationSignal[DoneArgs] = TerminationSignal()
    registry = CapabilityRegistry()
    for capability in default_capabilities(signal):
        registry.register(capability)

    stepper = AgentStepper(
        client,
        registry,
        model=model,
        parallel_tool_calls=parallel_tool_calls,
    )
    driver = Driver(stepper, memory, signal, max_steps=max_steps, on_step=on_step)
    logger.info("Starting agent with tools: %s", ", ".join(registry.names()))
    return await driver.run()
