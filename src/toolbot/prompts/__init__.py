"""Prompt text used by toolbot."""

from toolbot.prompts.system import AGENT_SYSTEM_PROMPT

__all__ = ["AGENT_SYSTEM_PROMPT"]
