"""LLM client infrastructure for toolbot.

Provides an async OpenAI-compatible HTTP client, the pluggable LLMClient
protocol, and the LLM error hierarchy.
"""

from toolbot.llm.client import OpenAIClient
from toolbot.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTransportError,
)
from toolbot.llm.protocols import LLMClient

__all__ = [
    "OpenAIClient",
    "LLMClient",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMTransportError",
    "LLMResponseError",
]
