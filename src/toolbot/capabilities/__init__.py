"""Built-in capabilities: ``run``, ``note`` and the terminal ``done``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from toolbot.capabilities.done import DoneArgs, done_capability
from toolbot.capabilities.note import NoteArgs, NoteOutput, note_capability
from toolbot.capabilities.shell import RunArgs, RunOutput, run_capability, run_command

if TYPE_CHECKING:
    from toolbot.orchestrator.signal import TerminationSignal
    from toolbot.toolkit.models import Capability


def default_capabilities(signal: TerminationSignal[DoneArgs]) -> list[Capability]:
    """The capability set the CLI agent runs with."""
    return [run_capability(), note_capability(), done_capability(signal)]


__all__ = [
    "DoneArgs",
    "NoteArgs",
    "NoteOutput",
    "RunArgs",
    "RunOutput",
    "default_capabilities",
    "done_capability",
    "note_capability",
    "run_capability",
    "run_command",
]
