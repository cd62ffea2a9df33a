"""Rich formatting helpers for the toolbot CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

if TYPE_CHECKING:
    from toolbot.capabilities.done import DoneArgs
    from toolbot.orchestrator.models import StepResult


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_report(report: DoneArgs, console: Console) -> None:
    """Display the agent's completion report."""
    console.print(Panel(escape(report.tldr), title="TL;DR", title_align="left"))
    console.print(
        Panel(escape(report.long_summary), title="LONG SUMMARY", title_align="left")
    )
    console.print(
        Panel(escape(report.verified_how), title="VERIFIED HOW", title_align="left")
    )


def format_step(step: int, result: StepResult, console: Console) -> None:
    """One dim line per step listing the tools the model called."""
    calls = result.assistant_message.tool_calls or ()
    names = ", ".join(tc.name for tc in calls) or "no tool calls"
    console.print(f"[dim]step {step}: {escape(names)}[/dim]")


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
