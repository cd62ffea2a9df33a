"""Conversation data model for toolbot.

Frozen dataclasses for messages and tool calls, in two shapes: the
``Message`` replayed to the backend as request history, and the
``ResponseMessage`` received from it.  The two are not identical (audio,
refusal, role handling), so ``ResponseMessage.to_request_message()`` is
the one place the conversion happens.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import Any, Literal, TypedDict

from toolbot.exceptions import ProtocolError

Role = Literal["system", "user", "assistant", "tool"]


class _ToolCallOpenAIFunction(TypedDict):
    """OpenAI function sub-object."""

    name: str
    arguments: str


class ToolCallOpenAIDict(TypedDict):
    """OpenAI wire format for a single tool call."""

    id: str
    type: str
    function: _ToolCallOpenAIFunction


@dataclass(frozen=True)
class ToolCall:
    """A tool/function invocation requested by the model.

    ``arguments`` is the raw JSON string exactly as the backend sent it;
    decoding happens at dispatch so that a malformed payload becomes a
    tool error rather than a protocol failure.
    """

    id: str
    name: str
    arguments: str
    type: str = "function"

    @classmethod
    def from_openai(cls, tc: dict) -> ToolCall:
        """Parse from OpenAI/compatible format.

        Some providers send arguments as an object instead of a string;
        those are re-encoded so replay stays byte-compatible with OpenAI.
        """
        try:
            function = tc["function"]
            raw_args = function.get("arguments", "")
            if not isinstance(raw_args, str):
                raw_args = _json.dumps(raw_args)
            return cls(
                id=tc["id"],
                name=function["name"],
                arguments=raw_args,
                type=tc.get("type", "function"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ProtocolError(f"Malformed tool call: {tc!r}") from exc

    def to_openai(self) -> ToolCallOpenAIDict:
        """Serialize to OpenAI wire format."""
        return {
            "id": self.id,
            "type": self.type,
            "function": {
                "name": self.name,
                "arguments": self.arguments,
            },
        }


@dataclass(frozen=True)
class Message:
    """A single message of request history."""

    role: Role
    content: str | None = None
    tool_calls: tuple[ToolCall, ...] | None = None
    tool_call_id: str | None = None
    name: str | None = None
    refusal: str | None = None
    audio_id: str | None = None
    function_call: dict | None = None

    def to_openai(self) -> dict:
        """Serialize for the ``messages`` array of a chat request."""
        d: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            d["name"] = self.name
        if self.tool_calls is not None:
            d["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            d["tool_call_id"] = self.tool_call_id
        if self.refusal is not None:
            d["refusal"] = self.refusal
        if self.audio_id is not None:
            d["audio"] = {"id": self.audio_id}
        if self.function_call is not None:
            d["function_call"] = dict(self.function_call)
        return d


def system(text: str) -> Message:
    return Message(role="system", content=text)


def user(text: str) -> Message:
    return Message(role="user", content=text)


def tool_result(tool_call_id: str, content: str) -> Message:
    return Message(role="tool", content=content, tool_call_id=tool_call_id)


@dataclass(frozen=True)
class ResponseMessage:
    """The assistant message of one response choice, as received.

    ``tool_calls`` is None when the field is absent or null, and an empty
    tuple when the backend sent an empty list; the stepper treats those
    two cases differently.
    """

    content: str | None = None
    tool_calls: tuple[ToolCall, ...] | None = None
    refusal: str | None = None
    audio: dict | None = None
    function_call: dict | None = None
    role: str = "assistant"

    @classmethod
    def from_openai(cls, message: dict) -> ResponseMessage:
        if not isinstance(message, dict):
            raise ProtocolError(f"Malformed response message: {message!r}")
        raw_calls = message.get("tool_calls")
        tool_calls = None
        if raw_calls is not None:
            tool_calls = tuple(ToolCall.from_openai(tc) for tc in raw_calls)
        return cls(
            content=message.get("content"),
            tool_calls=tool_calls,
            refusal=message.get("refusal"),
            audio=message.get("audio"),
            function_call=message.get("function_call"),
            role=message.get("role", "assistant"),
        )

    def to_request_message(self) -> Message:
        """Convert into the assistant message replayed as history.

        Audio is replayed by id only; the request side has no room for the
        transcript or data.
        """
        return Message(
            role="assistant",
            content=self.content,
            tool_calls=self.tool_calls,
            refusal=self.refusal,
            audio_id=self.audio.get("id") if self.audio else None,
            function_call=self.function_call,
        )


@dataclass(frozen=True)
class ChatResponse:
    """A parsed chat completion response."""

    choices: tuple[ResponseMessage, ...]
    usage: dict | None = None

    @classmethod
    def from_openai(cls, response: dict) -> ChatResponse:
        try:
            raw_choices = response["choices"]
            choices = tuple(
                ResponseMessage.from_openai(choice["message"])
                for choice in raw_choices
            )
        except (KeyError, TypeError) as exc:
            raise ProtocolError(f"Malformed chat response: {exc}") from exc
        return cls(choices=choices, usage=response.get("usage"))
