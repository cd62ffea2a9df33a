"""Shared test fixtures for toolbot.

Provides a scripted LLM client, canned response builders, and a registry
holding a small ``add`` capability.
"""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from toolbot.exceptions import CapabilityError
from toolbot.memory import WorkingMemory
from toolbot.protocols import system, user
from toolbot.toolkit import Capability, CapabilityRegistry


# ------------------------------------------------------------------
# Canned responses
# ------------------------------------------------------------------

def tool_call(name: str, arguments: dict | str, call_id: str) -> dict:
    """One OpenAI-format tool call."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def tool_call_response(*calls: dict, text: str | None = None, usage: dict | None = None) -> dict:
    """Chat completion response carrying the given tool calls."""
    response = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": text,
                    "tool_calls": list(calls),
                },
                "finish_reason": "tool_calls",
            }
        ],
    }
    if usage is not None:
        response["usage"] = usage
    return response


def text_response(text: str = "Thinking...") -> dict:
    """Response without a ``tool_calls`` field."""
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class ScriptedLLMClient:
    """An LLM client that records calls and returns canned responses in order."""

    def __init__(self, responses: list[dict]):
        self.calls: list[dict] = []
        self._responses = list(responses)
        self.closed = False

    async def chat(self, messages, *, model=None, temperature=None, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "model": model, **kwargs})
        idx = min(len(self.calls) - 1, len(self._responses) - 1)
        return self._responses[idx]

    async def aclose(self) -> None:
        self.closed = True


# ------------------------------------------------------------------
# Capabilities
# ------------------------------------------------------------------

BLOCKED = 69


class AddArgs(BaseModel):
    a: int
    b: int


async def add(args: AddArgs) -> int:
    if BLOCKED in (args.a, args.b):
        raise CapabilityError("nice")
    return args.a + args.b


def add_capability(name: str = "add") -> Capability[AddArgs, int]:
    return Capability(
        name=name,
        description="Add two integers.",
        input_type=AddArgs,
        output_type=int,
        handler=add,
    )


@pytest.fixture
def registry() -> CapabilityRegistry:
    reg = CapabilityRegistry()
    reg.register(add_capability())
    return reg


@pytest.fixture
def memory() -> WorkingMemory:
    return WorkingMemory([system("You are a test agent."), user("Add some numbers.")])
