"""Orchestrator result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolbot.protocols import Message


@dataclass(frozen=True)
class StepResult:
    """Result of a single agent step.

    Frozen: step results are immutable records of what was committed.

    Attributes:
        assistant_message: The model's message, in replay form.
        tool_messages: One tool-result message per tool call, in call order.
        usage: Usage dict from the response, if the backend sent one.
    """

    assistant_message: Message
    tool_messages: tuple[Message, ...] = field(default_factory=tuple)
    usage: dict | None = None

    @property
    def messages(self) -> list[Message]:
        """Everything this step appended to working memory."""
        return [self.assistant_message, *self.tool_messages]
