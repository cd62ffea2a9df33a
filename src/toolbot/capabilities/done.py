"""The ``done`` capability: report completion and end the run.

This is the terminal capability.  Its handler first re-runs the agent's own
verification commands; only if all of them pass is the report written into
the driver's termination signal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from toolbot.capabilities.shell import RunArgs, run_command
from toolbot.toolkit.models import Capability

if TYPE_CHECKING:
    from toolbot.orchestrator.signal import TerminationSignal

DONE_DESCRIPTION = """
Report completion of the task. Verify that the task is complete before calling this function. 'verified_how' should contain the method by which completion was verified.
In addition, add a list of test commands to be run before exiting.
"""


class DoneArgs(BaseModel):
    long_summary: str
    tldr: str
    verified_how: str
    test_commands: list[RunArgs]


def done_capability(signal: TerminationSignal[DoneArgs]) -> Capability[DoneArgs, None]:
    """Build the ``done`` capability bound to ``signal``."""

    async def done(args: DoneArgs) -> None:
        for test in args.test_commands:
            await run_command(test)
        signal.set(args)

    return Capability(
        name="done",
        description=DONE_DESCRIPTION,
        input_type=DoneArgs,
        output_type=None,
        handler=done,
    )
