"""Working memory: the append-only conversation log.

Every step resends the whole history.  There is no windowing or
summarization here; entries are never edited, dropped or reordered.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from toolbot.protocols import Message

logger = logging.getLogger(__name__)


class WorkingMemory:
    """Ordered, append-only sequence of messages."""

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._messages: list[Message] = list(messages)

    def snapshot(self) -> list[Message]:
        """Copy of the current history, safe to hold across appends."""
        return list(self._messages)

    def append(self, messages: Iterable[Message]) -> None:
        batch = list(messages)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", json.dumps([m.to_openai() for m in batch]))
        self._messages.extend(batch)

    def to_openai(self) -> list[dict]:
        return [m.to_openai() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))
