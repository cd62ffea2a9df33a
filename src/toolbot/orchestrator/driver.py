"""Driver: repeats agent steps until the termination signal is written."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from toolbot.exceptions import OrchestratorError

if TYPE_CHECKING:
    from collections.abc import Callable

    from toolbot.memory import WorkingMemory
    from toolbot.orchestrator.models import StepResult
    from toolbot.orchestrator.signal import TerminationSignal
    from toolbot.orchestrator.stepper import AgentStepper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Driver(Generic[T]):
    """Runs the agent loop.

    The stepper never decides to stop.  A terminal capability writes the
    signal as a side effect of its handler, and the driver checks it after
    each committed step.  Errors raised by a step end the run.

    Usage::

        signal = TerminationSignal()
        registry.register(done_capability(signal))
        report = await Driver(stepper, memory, signal).run()
    """

    def __init__(
        self,
        stepper: AgentStepper,
        memory: WorkingMemory,
        signal: TerminationSignal[T],
        *,
        max_steps: int | None = None,
        on_step: Callable[[StepResult], None] | None = None,
    ) -> None:
        self._stepper = stepper
        self._memory = memory
        self._signal = signal
        self._max_steps = max_steps
        self._on_step = on_step
        self.steps_taken = 0

    async def run(self) -> T:
        """Step until the signal is set and return its value.

        Raises:
            OrchestratorError: If ``max_steps`` steps ran without the signal
                being written.
        """
        while not self._signal.is_set():
            if self._max_steps is not None and self.steps_taken >= self._max_steps:
                raise OrchestratorError(
                    f"Stopped after {self.steps_taken} steps without completion"
                )
            result = await self._stepper.step(self._memory)
            self.steps_taken += 1
            if self._on_step is not None:
                try:
                    self._on_step(result)
                except Exception:
                    logger.debug("on_step callback error", exc_info=True)
        logger.info("Completed after %d steps", self.steps_taken)
        return self._signal.get()  # type: ignore[return-value]
