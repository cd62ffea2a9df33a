"""Tests for AgentStepper: request shape, dispatch, and history commits."""

from __future__ import annotations

import asyncio
import json
import logging

import pytest
from pydantic import BaseModel

from tests.conftest import (
    ScriptedLLMClient,
    text_response,
    tool_call,
    tool_call_response,
)
from toolbot.exceptions import ProtocolError
from toolbot.llm.errors import LLMTransportError
from toolbot.orchestrator import AgentStepper, StepResult
from toolbot.toolkit import Capability, CapabilityRegistry


def step(stepper, memory) -> StepResult:
    return asyncio.run(stepper.step(memory))


def tool_contents(result: StepResult) -> list[dict]:
    return [json.loads(m.content) for m in result.tool_messages]


# ===========================================================================
# Request
# ===========================================================================


class TestRequest:
    def test_request_carries_history_tools_and_required_choice(self, registry, memory):
        client = ScriptedLLMClient([tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1"))])
        step(AgentStepper(client, registry, model="o1"), memory)

        (call,) = client.calls
        assert call["messages"] == [
            {"role": "system", "content": "You are a test agent."},
            {"role": "user", "content": "Add some numbers."},
        ]
        assert call["tools"] == [t.to_openai() for t in registry.list()]
        assert call["tool_choice"] == "required"
        assert call["model"] == "o1"

    def test_parallel_tool_calls_omitted_by_default(self, registry, memory):
        client = ScriptedLLMClient([tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1"))])
        step(AgentStepper(client, registry), memory)
        assert "parallel_tool_calls" not in client.calls[0]

    @pytest.mark.parametrize("flag", [True, False])
    def test_parallel_tool_calls_forwarded(self, registry, memory, flag):
        client = ScriptedLLMClient([tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1"))])
        step(AgentStepper(client, registry, parallel_tool_calls=flag), memory)
        assert client.calls[0]["parallel_tool_calls"] is flag

    def test_second_step_replays_first(self, registry, memory):
        client = ScriptedLLMClient(
            [
                tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1")),
                tool_call_response(tool_call("add", {"a": 3, "b": 4}, "c2")),
            ]
        )
        stepper = AgentStepper(client, registry)
        step(stepper, memory)
        step(stepper, memory)

        replayed = client.calls[1]["messages"]
        assert len(replayed) == 4
        assert replayed[2]["role"] == "assistant"
        assert replayed[2]["tool_calls"][0]["id"] == "c1"
        assert replayed[3] == {"role": "tool", "content": '{"Ok": 3}', "tool_call_id": "c1"}


# ===========================================================================
# Dispatch and commit
# ===========================================================================


class TestStep:
    def test_two_calls_commit_three_messages(self, registry, memory):
        client = ScriptedLLMClient(
            [
                tool_call_response(
                    tool_call("add", {"a": 1, "b": 2}, "c1"),
                    tool_call("add", {"a": 69, "b": 1}, "c2"),
                )
            ]
        )
        result = step(AgentStepper(client, registry), memory)

        assert len(memory) == 5
        assert result.assistant_message.role == "assistant"
        assert [m.tool_call_id for m in result.tool_messages] == ["c1", "c2"]
        assert tool_contents(result) == [{"Ok": 3}, {"Err": "nice"}]
        assert list(memory)[2:] == result.messages

    def test_bad_arguments_do_not_block_other_calls(self, registry, memory):
        client = ScriptedLLMClient(
            [
                tool_call_response(
                    tool_call("add", "{not json", "c1"),
                    tool_call("add", {"a": 2, "b": 2}, "c2"),
                )
            ]
        )
        result = step(AgentStepper(client, registry), memory)
        bad, good = tool_contents(result)
        assert "Err" in bad
        assert good == {"Ok": 4}

    @pytest.mark.parametrize(
        "payload",
        ["[" * 100_000 + "]" * 100_000, '{"a": ' + "1" * 5000 + ', "b": 1}'],
        ids=["deep-nesting", "huge-integer"],
    )
    def test_undecodable_arguments_do_not_abort_step(self, registry, memory, payload):
        client = ScriptedLLMClient(
            [
                tool_call_response(
                    tool_call("add", payload, "c1"),
                    tool_call("add", {"a": 1, "b": 2}, "c2"),
                )
            ]
        )
        result = step(AgentStepper(client, registry), memory)
        bad, good = tool_contents(result)
        assert bad["Err"].startswith("Invalid JSON arguments")
        assert good == {"Ok": 3}
        assert len(memory) == 5

    def test_unknown_tool_reported_to_model(self, registry, memory):
        client = ScriptedLLMClient([tool_call_response(tool_call("mul", {"a": 2}, "c1"))])
        result = step(AgentStepper(client, registry), memory)
        (content,) = tool_contents(result)
        assert content == {"Err": "Tool not found: mul"}

    def test_assistant_text_kept(self, registry, memory):
        client = ScriptedLLMClient(
            [tool_call_response(tool_call("add", {"a": 1, "b": 1}, "c1"), text="Adding.")]
        )
        result = step(AgentStepper(client, registry), memory)
        assert result.assistant_message.content == "Adding."

    def test_calls_run_concurrently(self, memory):
        release = asyncio.Event()

        class Empty(BaseModel):
            pass

        async def wait(args: Empty) -> str:
            await release.wait()
            return "released"

        async def fire(args: Empty) -> str:
            release.set()
            return "fired"

        reg = CapabilityRegistry()
        reg.register(Capability("wait", "Wait.", Empty, str, wait))
        reg.register(Capability("fire", "Fire.", Empty, str, fire))
        client = ScriptedLLMClient(
            [tool_call_response(tool_call("wait", {}, "c1"), tool_call("fire", {}, "c2"))]
        )

        async def go():
            return await asyncio.wait_for(AgentStepper(client, reg).step(memory), timeout=5)

        result = asyncio.run(go())
        assert tool_contents(result) == [{"Ok": "released"}, {"Ok": "fired"}]


# ===========================================================================
# Protocol violations
# ===========================================================================


class TestProtocolViolations:
    def test_missing_tool_calls(self, registry, memory):
        client = ScriptedLLMClient([text_response("I refuse to use tools.")])
        with pytest.raises(ProtocolError, match="No tool calls"):
            step(AgentStepper(client, registry), memory)
        assert len(memory) == 2

    def test_zero_choices(self, registry, memory, caplog):
        client = ScriptedLLMClient([{"choices": []}])
        with caplog.at_level(logging.WARNING, logger="toolbot.orchestrator.stepper"):
            with pytest.raises(ProtocolError, match="No choices"):
                step(AgentStepper(client, registry), memory)
        assert "Expected 1 choice, got 0" in caplog.text
        assert len(memory) == 2

    def test_malformed_response(self, registry, memory):
        client = ScriptedLLMClient([{"nope": True}])
        with pytest.raises(ProtocolError):
            step(AgentStepper(client, registry), memory)
        assert len(memory) == 2

    def test_multiple_choices_uses_first(self, registry, memory, caplog):
        first = tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1"))
        second = tool_call_response(tool_call("add", {"a": 5, "b": 5}, "c2"))
        response = {"choices": first["choices"] + second["choices"]}
        client = ScriptedLLMClient([response])

        with caplog.at_level(logging.WARNING, logger="toolbot.orchestrator.stepper"):
            result = step(AgentStepper(client, registry), memory)

        assert "Expected 1 choice, got 2" in caplog.text
        assert tool_contents(result) == [{"Ok": 3}]

    def test_empty_tool_call_list(self, registry, memory, caplog):
        client = ScriptedLLMClient([tool_call_response(text="nothing to do")])
        with caplog.at_level(logging.WARNING, logger="toolbot.orchestrator.stepper"):
            result = step(AgentStepper(client, registry), memory)

        assert "Empty tool call list" in caplog.text
        assert result.tool_messages == ()
        assert len(memory) == 3
        assert memory.to_openai()[-1]["tool_calls"] == []

    def test_client_error_propagates(self, registry, memory):
        class FailingClient(ScriptedLLMClient):
            async def chat(self, messages, **kwargs):
                raise LLMTransportError("connection reset")

        with pytest.raises(LLMTransportError):
            step(AgentStepper(FailingClient([]), registry), memory)
        assert len(memory) == 2


# ===========================================================================
# Logging
# ===========================================================================


class TestUsageLogging:
    def test_usage_logged_without_zeros(self, registry, memory, caplog):
        usage = {
            "prompt_tokens": 12,
            "completion_tokens": 3,
            "completion_tokens_details": {"audio_tokens": 0, "reasoning_tokens": 0},
        }
        client = ScriptedLLMClient(
            [tool_call_response(tool_call("add", {"a": 1, "b": 2}, "c1"), usage=usage)]
        )
        with caplog.at_level(logging.INFO, logger="toolbot.orchestrator.stepper"):
            result = step(AgentStepper(client, registry), memory)

        assert '{"prompt_tokens":12,"completion_tokens":3}' in caplog.text
        assert result.usage == usage
