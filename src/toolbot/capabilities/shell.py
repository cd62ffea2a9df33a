"""The ``run`` capability: execute a command on the agent's machine."""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel

from toolbot.exceptions import CapabilityError
from toolbot.toolkit.models import Capability

logger = logging.getLogger(__name__)

RUN_DESCRIPTION = """
Run a command in your VM.
Eg: {"explanation": "Checking which users have home directories on this machine (this won't include root).", "command": ["ls", "/home"]}
Note: this command is *not* run in a shell; shell features like pipes, redirection, and globbing will not work unless you explicitly call a shell.
Put "explanation" before "command" so you can think out loud before acting.
"""


class RunArgs(BaseModel):
    explanation: str
    command: list[str]


class RunOutput(BaseModel):
    stdout: str
    stderr: str


async def run_command(args: RunArgs) -> RunOutput:
    """Run ``args.command`` without a shell and capture its output.

    Raises:
        CapabilityError: On an empty command, a missing executable, or a
            non-zero exit status.  The message carries stdout and stderr.
    """
    if not args.command:
        raise CapabilityError("empty command")
    program, *rest = args.command
    try:
        process = await asyncio.create_subprocess_exec(
            program,
            *rest,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise CapabilityError(f"cannot start {program!r}: {exc}") from exc
    stdout, stderr = await process.communicate()
    output = RunOutput(
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    if process.returncode != 0:
        logger.debug("%s exited with %s", program, process.returncode)
        raise CapabilityError(
            f"exit status {process.returncode}: {output.model_dump_json()}"
        )
    return output


def run_capability() -> Capability[RunArgs, RunOutput]:
    return Capability(
        name="run",
        description=RUN_DESCRIPTION,
        input_type=RunArgs,
        output_type=RunOutput,
        handler=run_command,
    )
