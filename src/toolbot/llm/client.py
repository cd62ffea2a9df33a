"""Built-in OpenAI-compatible async httpx client.

Provides an async HTTP client for OpenAI-compatible chat completion APIs.
Reads configuration from constructor arguments or environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
import tenacity

from toolbot.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_AUTH_ERROR_STATUS_CODES = {401, 403}


def _is_retryable(exc: BaseException) -> bool:
    """Check if an exception is retryable.

    Retryable: 429, 500, 502, 503, 504, connection errors.
    Not retryable: 401, 403, 400, other client errors.
    """
    if isinstance(exc, LLMAuthError):
        return False
    if isinstance(exc, LLMRateLimitError):
        return True
    if isinstance(exc, LLMTransportError):
        cause = exc.__cause__
        if isinstance(cause, httpx.HTTPStatusError):
            return cause.response.status_code in _RETRYABLE_STATUS_CODES
        return isinstance(cause, (httpx.ConnectError, httpx.ConnectTimeout))
    return False


class OpenAIClient:
    """Async httpx client for OpenAI-compatible chat completions.

    Implements the LLMClient protocol.  A request is attempted once by
    default: failures are fatal to the agent loop, and the model is the one
    expected to recover from tool errors.  Pass ``max_retries`` > 1 to opt
    into exponential backoff for transient errors (429, 5xx, connect).

    Usage::

        async with OpenAIClient(api_key="sk-...") as client:
            response = await client.chat([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str = "o1",
        timeout: float = 600.0,
        max_retries: int = 1,
    ) -> None:
        """Initialize the OpenAI-compatible client.

        Args:
            api_key: API key. Falls back to OPENAI_API_KEY env var.
            base_url: API base URL. Falls back to OPENAI_BASE_URL env var,
                then to https://api.openai.com/v1.
            default_model: Default model for chat requests.
            timeout: Request timeout in seconds.
            max_retries: Total attempts for retryable errors (1 = no retry).

        Raises:
            LLMConfigError: If no API key is provided or found in environment.
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY", "")
        if not self._api_key:
            raise LLMConfigError(
                "No API key provided. Pass api_key= or set OPENAI_API_KEY "
                "environment variable."
            )
        self._base_url = (
            base_url or os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL)
        ).rstrip("/")
        self._default_model = default_model
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
        )

    async def chat(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Send a chat completion request.

        Uses tenacity.AsyncRetrying programmatically (not as decorator) so
        that max_retries is configurable per-instance.

        Args:
            messages: Message dicts in OpenAI request format.
            model: Model to use. Falls back to default_model.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional payload parameters forwarded to the API
                (``tools``, ``tool_choice``, ``parallel_tool_calls``, ...).

        Returns:
            Full response dict with 'choices', 'usage', 'model', etc.

        Raises:
            LLMAuthError: On 401/403 (no retry).
            LLMRateLimitError: On 429 after all attempts.
            LLMTransportError: On other HTTP or network failures.
            LLMResponseError: On unexpected response format.
        """
        retryer = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=1, min=1, max=30)
                + tenacity.wait_random(0, 2)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retryer(
            self._do_chat,
            messages,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

    async def _do_chat(
        self,
        messages: list[dict],
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> dict:
        """Execute a single chat completion request (no retry)."""
        payload: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": messages,
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        payload.update(kwargs)

        try:
            response = await self._client.post(
                f"{self._base_url}/chat/completions",
                json=payload,
            )
        except httpx.HTTPError as exc:
            raise LLMTransportError(f"Request failed: {exc}") from exc

        # Check for auth errors before raise_for_status
        if response.status_code in _AUTH_ERROR_STATUS_CODES:
            raise LLMAuthError(
                f"Authentication failed: HTTP {response.status_code} - "
                f"{response.text}"
            )

        # Check for rate limiting
        if response.status_code == 429:
            retry_after_raw = response.headers.get("Retry-After")
            retry_after: float | None = None
            if retry_after_raw is not None:
                try:
                    retry_after = float(retry_after_raw)
                except (ValueError, TypeError):
                    pass
            raise LLMRateLimitError(
                f"Rate limited: HTTP 429 - {response.text}",
                retry_after=retry_after,
            )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise LLMTransportError(
                f"HTTP {response.status_code} - {response.text}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMResponseError(
                f"Response is not JSON: {response.text[:200]}"
            ) from exc
        if not isinstance(data, dict) or "choices" not in data:
            raise LLMResponseError(
                f"Unexpected response format: missing 'choices' key. "
                f"Response: {data}"
            )
        return data

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> OpenAIClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
