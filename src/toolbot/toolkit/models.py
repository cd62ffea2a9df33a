"""Toolkit data models for capability registration.

Frozen dataclasses for typed capabilities, their type-erased registered
form, and the tool definitions sent to the model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


@dataclass(frozen=True)
class Capability(Generic[InputT, OutputT]):
    """A named, typed unit of functionality the model may invoke.

    ``input_type`` and ``output_type`` may be anything pydantic's
    ``TypeAdapter`` understands, usually a ``BaseModel`` subclass.  Use
    ``None`` as the output type for capabilities that return nothing.

    Attributes:
        name: Tool name (e.g. "run", "done").
        description: Prose telling the model when and how to call it.
        input_type: Type the JSON arguments are decoded into.
        output_type: Type of the handler's return value.
        handler: Async callable from decoded input to output.  Raising
            reports a failure to the model.
    """

    name: str
    description: str
    input_type: Any
    output_type: Any
    handler: Callable[[InputT], Awaitable[OutputT]]


@dataclass(frozen=True)
class ToolDefinition:
    """A single tool definition for LLM consumption.

    Attributes:
        name: Tool name.
        description: Description with the documented result schema appended.
        parameters: Sanitized JSON Schema of the input.
        strict: Ask the backend to enforce the schema exactly.
    """

    name: str
    description: str
    parameters: dict
    strict: bool = True

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format.

        Returns:
            Dict with "type": "function" and nested "function" object.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
                "strict": self.strict,
            },
        }


@dataclass(frozen=True)
class RegisteredCapability:
    """Type-erased capability held by the registry.

    ``call`` takes an already decoded JSON value and returns the encoded
    JSON output.  It raises ``ToolDecodeError`` or ``ToolHandlerError``.
    """

    name: str
    description: str
    parameters: dict
    call: Callable[[Any], Awaitable[Any]]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )
