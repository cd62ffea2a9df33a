"""One request/response/dispatch/commit cycle of the agent.

``AgentStepper.step()`` builds a request from the full working memory and
every registered tool, forces the model to call at least one tool, runs the
returned tool calls, and commits the assistant message plus every tool
result to memory in one batch.  Deciding when to stop is the driver's job.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING

from toolbot.exceptions import ProtocolError
from toolbot.formatting import display_usage
from toolbot.orchestrator.models import StepResult
from toolbot.protocols import ChatResponse, tool_result
from toolbot.toolkit.dispatcher import Dispatcher

if TYPE_CHECKING:
    from toolbot.llm.protocols import LLMClient
    from toolbot.memory import WorkingMemory
    from toolbot.protocols import Message, ToolCall
    from toolbot.toolkit.registry import CapabilityRegistry

logger = logging.getLogger(__name__)


class AgentStepper:
    """Runs agent steps against a model client and a capability registry.

    Usage::

        stepper = AgentStepper(client, registry, model="o1")
        result = await stepper.step(memory)
    """

    def __init__(
        self,
        client: LLMClient,
        registry: CapabilityRegistry,
        *,
        model: str | None = None,
        parallel_tool_calls: bool | None = None,
    ) -> None:
        self._client = client
        self._registry = registry
        self._dispatcher = Dispatcher(registry)
        self._model = model
        self._parallel_tool_calls = parallel_tool_calls

    async def step(self, memory: WorkingMemory) -> StepResult:
        """Execute one step and commit its messages to ``memory``.

        Raises:
            LLMClientError: If the request fails.
            ProtocolError: If the response has no choices or no
                ``tool_calls`` field.
        """
        response = await self._call_llm(memory.snapshot())

        if response.usage:
            logger.info("%s", display_usage(response.usage))

        if len(response.choices) != 1:
            logger.warning("Expected 1 choice, got %d", len(response.choices))
        if not response.choices:
            raise ProtocolError("No choices in response")
        message = response.choices[0]

        if message.tool_calls is None:
            raise ProtocolError("No tool calls in response")
        if not message.tool_calls:
            logger.warning("Empty tool call list in response")

        assistant = message.to_request_message()
        tool_messages = await self._run_tool_calls(message.tool_calls)

        result = StepResult(
            assistant_message=assistant,
            tool_messages=tuple(tool_messages),
            usage=response.usage,
        )
        memory.append(result.messages)
        return result

    def _build_request(self, history: list[Message]) -> dict:
        request: dict = {
            "messages": [m.to_openai() for m in history],
            "tools": [t.to_openai() for t in self._registry.list()],
            "tool_choice": "required",
        }
        if self._model is not None:
            request["model"] = self._model
        if self._parallel_tool_calls is not None:
            request["parallel_tool_calls"] = self._parallel_tool_calls
        return request

    async def _call_llm(self, history: list[Message]) -> ChatResponse:
        request = self._build_request(history)
        messages = request.pop("messages")
        raw = await self._client.chat(messages, **request)
        return ChatResponse.from_openai(raw)

    async def _run_tool_calls(self, tool_calls: tuple[ToolCall, ...]) -> list[Message]:
        """Dispatch every call concurrently; results keep call order."""
        results = await asyncio.gather(
            *(self._dispatcher.dispatch(tc.name, tc.arguments) for tc in tool_calls)
        )
        return [
            tool_result(tc.id, json.dumps(output))
            for tc, output in zip(tool_calls, results)
        ]
