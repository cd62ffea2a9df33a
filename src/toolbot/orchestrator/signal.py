"""Single-slot termination signal shared by a terminal capability and the driver."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

from toolbot.exceptions import TerminationSignalError

T = TypeVar("T")


class TerminationSignal(Generic[T]):
    """A write-once cell owned by whoever runs the driver.

    The terminal capability's handler writes its payload with ``set()``;
    the driver polls ``is_set()`` between steps.  Access goes through a lock
    because handlers may run on other threads (e.g. via ``to_thread``).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: T | None = None
        self._set = False

    def set(self, value: T) -> None:
        """Store ``value``.

        Raises:
            TerminationSignalError: If the signal was already written.
        """
        with self._lock:
            if self._set:
                raise TerminationSignalError("Termination signal already set")
            self._value = value
            self._set = True

    def is_set(self) -> bool:
        with self._lock:
            return self._set

    def get(self) -> T | None:
        """The stored value, or None while the signal is empty."""
        with self._lock:
            return self._value
