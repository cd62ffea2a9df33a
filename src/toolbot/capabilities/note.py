"""The ``note`` capability: a scratchpad for thinking out loud."""

from __future__ import annotations

from pydantic import BaseModel

from toolbot.toolkit.models import Capability

NOTE_DESCRIPTION = """
Log the current state of the task. Use this to think out loud, log your thoughts, and keep track of your progress.
"""


class NoteArgs(BaseModel):
    note: str
    what_is_not_working: str
    potential_explanations: str
    potential_resolutions: str
    ideas: str
    note_to_future_self: str
    note_to_other_agents: str
    ships_log: str
    prayer: str


class NoteOutput(BaseModel):
    encouragement: str


async def take_note(args: NoteArgs) -> NoteOutput:
    # The note itself lives on in the conversation history.
    return NoteOutput(encouragement="You got this!")


def note_capability() -> Capability[NoteArgs, NoteOutput]:
    return Capability(
        name="note",
        description=NOTE_DESCRIPTION,
        input_type=NoteArgs,
        output_type=NoteOutput,
        handler=take_note,
    )
