"""LLM client protocol.

Defines the pluggable interface the stepper talks to.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LLMClient(Protocol):
    """Protocol for pluggable async LLM clients.

    Any object with ``chat()`` and ``aclose()`` coroutines matching this
    signature works.  The built-in OpenAIClient implements this protocol.
    ``chat`` must return an OpenAI-style chat completion dict.
    """

    async def chat(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send messages, return response dict."""
        ...

    async def aclose(self) -> None:
        """Release underlying resources."""
        ...
