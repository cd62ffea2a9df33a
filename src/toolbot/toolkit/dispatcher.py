"""Dispatcher: resolves tool calls by name and runs them.

Provides a single ``dispatch()`` coroutine that looks up the capability,
decodes the arguments, invokes the handler, and returns the outcome as a
JSON value.  Dispatch failures are values, not exceptions: the model sees
them as ordinary tool results and can adapt.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from toolbot.exceptions import DispatchError, ToolDecodeError, ToolNotFoundError

if TYPE_CHECKING:
    from toolbot.toolkit.registry import CapabilityRegistry

logger = logging.getLogger(__name__)


def ok(value: Any) -> dict[str, Any]:
    return {"Ok": value}


def err(message: str) -> dict[str, Any]:
    return {"Err": message}


class Dispatcher:
    """Dispatches tool calls against a capability registry.

    Usage::

        dispatcher = Dispatcher(registry)
        result = await dispatcher.dispatch("add", '{"a": 1, "b": 2}')
        # {"Ok": 3}
    """

    def __init__(self, registry: CapabilityRegistry) -> None:
        self._registry = registry

    async def dispatch(self, name: str, arguments: str | Any) -> dict[str, Any]:
        """Execute a tool by name.

        Args:
            name: Capability name from the tool call.
            arguments: Raw JSON argument string, or an already decoded value.

        Returns:
            ``{"Ok": output}`` on success, ``{"Err": message}`` otherwise.
        """
        try:
            result = ok(await self._dispatch(name, arguments))
        except DispatchError as exc:
            result = err(str(exc))
        logger.info("%s %s -> %s", name, _raw(arguments), json.dumps(result))
        return result

    async def _dispatch(self, name: str, arguments: str | Any) -> Any:
        capability = self._registry.get(name)
        if capability is None:
            raise ToolNotFoundError(name)
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except (ValueError, RecursionError) as exc:
                # ValueError also covers integers past the digit limit.
                raise ToolDecodeError(f"Invalid JSON arguments: {exc}") from exc
        return await capability.call(arguments)


def _raw(arguments: str | Any) -> str:
    if isinstance(arguments, str):
        return arguments
    return json.dumps(arguments, default=str)
