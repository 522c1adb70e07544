"""Live prediction CLI command."""

import asyncio
import sys

import click
from rich.console import Console

from cli.utils import get_components, render_result
from feed.errors import DataUnavailableError
from web.presenters import next_session_id

console = Console()


async def _fetch(feed):
    async with feed:
        return await feed.fetch_history()


@click.command()
def predict():
    """Fetch the latest rounds and predict the next one."""
    c = get_components(with_feed=True)
    try:
        history = asyncio.run(_fetch(c["feed"]))
    except DataUnavailableError as e:
        console.print(f"[red]Data unavailable:[/] {e}")
        sys.exit(1)

    last = history[-1]
    console.print(
        f"Last round [bold]{last.session}[/]: {last.score} -> {last.outcome}  "
        f"({len(history)} rounds loaded)"
    )
    result = c["engine"].predict(history)
    render_result(result, title=f"Next round {next_session_id(last.session)}")
