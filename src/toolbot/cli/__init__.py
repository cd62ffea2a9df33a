"""toolbot CLI -- run the autonomous agent on a single directive.

This module is NEVER imported from toolbot/__init__.py.
It is only loaded via the ``toolbot`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import TYPE_CHECKING

import click

from toolbot.agent import run_agent
from toolbot.cli.formatting import format_error, format_report, format_step, get_console
from toolbot.config import load_config
from toolbot.exceptions import ToolbotError

if TYPE_CHECKING:
    from rich.console import Console

    from toolbot.capabilities.done import DoneArgs

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.argument("directive")
@click.option(
    "--max-steps",
    type=int,
    default=None,
    envvar="TOOLBOT_MAX_STEPS",
    help="Give up after this many steps (default: no limit).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def cli(directive: str, max_steps: int | None, verbose: bool) -> None:
    """Work on DIRECTIVE unsupervised until the agent reports it done."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
    console = get_console()
    try:
        report = asyncio.run(_run(directive, max_steps, console))
    except ToolbotError as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
    format_report(report, console)


async def _run(directive: str, max_steps: int | None, console: Console) -> DoneArgs:
    config = load_config()
    client = config.openai_client()
    counter = itertools.count(1)
    try:
        return await run_agent(
            directive,
            client,
            model=config.openai_model,
            parallel_tool_calls=config.parallel_tool_calls,
            max_steps=max_steps,
            on_step=lambda result: format_step(next(counter), result, console),
        )
    finally:
        await client.aclose()
