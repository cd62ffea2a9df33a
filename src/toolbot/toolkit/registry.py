"""CapabilityRegistry: holds named capabilities behind a uniform contract.

Each typed ``Capability`` is converted once, at registration, into a
``RegisteredCapability`` whose ``call`` closes over pydantic adapters for
the input and output types.  Everything downstream (the dispatcher, the
stepper) only sees JSON in and JSON out.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from toolbot.exceptions import (
    CapabilityConflictError,
    ToolDecodeError,
    ToolHandlerError,
)
from toolbot.toolkit.models import RegisteredCapability
from toolbot.toolkit.schema import input_schema_for, render_schema, result_schema_for

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from toolbot.toolkit.models import Capability, ToolDefinition

logger = logging.getLogger(__name__)


def _erase(capability: Capability) -> Callable[[Any], Awaitable[Any]]:
    """Build the JSON -> JSON coroutine function for a typed capability."""
    input_adapter = TypeAdapter(capability.input_type)
    output_adapter = TypeAdapter(capability.output_type)
    handler = capability.handler

    async def call(value: Any) -> Any:
        try:
            decoded = input_adapter.validate_python(value)
        except ValidationError as exc:
            raise ToolDecodeError(str(exc)) from exc
        try:
            output = await handler(decoded)
        except Exception as exc:
            logger.debug("Capability %s failed", capability.name, exc_info=True)
            raise ToolHandlerError(str(exc) or type(exc).__name__) from exc
        try:
            return output_adapter.dump_python(output, mode="json", warnings="error")
        except Exception as exc:
            raise ToolHandlerError(
                f"Cannot encode output of {capability.name}: {exc}"
            ) from exc

    return call


class CapabilityRegistry:
    """Named capabilities available to the model.

    Usage::

        registry = CapabilityRegistry()
        registry.register(Capability("add", "Add two numbers.", AddArgs, int, add))
        tools = [t.to_openai() for t in registry.list()]
    """

    def __init__(self) -> None:
        self._capabilities: dict[str, RegisteredCapability] = {}

    def register(self, capability: Capability, *, replace: bool = False) -> None:
        """Register a capability under its name.

        Args:
            capability: The typed capability.
            replace: Overwrite an existing registration with the same name.

        Raises:
            CapabilityConflictError: If the name is taken and ``replace`` is
                False.
        """
        if capability.name in self._capabilities and not replace:
            raise CapabilityConflictError(capability.name)

        description = (
            f"{capability.description}\nreturns:\n"
            f"{render_schema(self.describe_output(capability))}"
        )
        self._capabilities[capability.name] = RegisteredCapability(
            name=capability.name,
            description=description,
            parameters=input_schema_for(capability.input_type),
            call=_erase(capability),
        )
        logger.debug("Registered capability %s", capability.name)

    def unregister(self, name: str) -> None:
        """Remove a capability.  Unknown names raise ``KeyError``."""
        del self._capabilities[name]

    @staticmethod
    def describe_output(capability: Capability) -> dict[str, Any]:
        """Documented result schema: either ``{"Ok": output}`` or ``{"Err": str}``."""
        return result_schema_for(capability.output_type)

    def get(self, name: str) -> RegisteredCapability | None:
        return self._capabilities.get(name)

    def names(self) -> list[str]:
        return list(self._capabilities)

    def list(self) -> list[ToolDefinition]:
        """Tool definitions for every registered capability."""
        return [c.definition() for c in self._capabilities.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)

    def __iter__(self) -> Iterator[RegisteredCapability]:
        return iter(self._capabilities.values())
