"""Orchestrator package -- the agent stepping protocol.

Provides the AgentStepper (one request/dispatch/commit cycle), the Driver
loop, the write-once TerminationSignal, and step result records.
"""

from toolbot.orchestrator.driver import Driver
from toolbot.orchestrator.models import StepResult
from toolbot.orchestrator.signal import TerminationSignal
from toolbot.orchestrator.stepper import AgentStepper

__all__ = [
    "AgentStepper",
    "Driver",
    "StepResult",
    "TerminationSignal",
]
