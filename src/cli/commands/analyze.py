"""Offline replay of a saved upstream payload."""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, render_result
from feed.errors import DataUnavailableError
from feed.parser import parse_history

console = Console()


def replay(engine, history) -> dict:
    """Predict every round from the first full window onward.

    Each round is predicted from the rounds before it, so performance scores
    build up the same way they would live. Returns hit counts per predictor
    and for the ensemble, plus the prediction for the round after the last.
    """
    hits: dict[str, list[int]] = {}
    ensemble = [0, 0]
    result = None
    for i in range(1, len(history) + 1):
        result = engine.predict(history[:i])
        if i == len(history) or result.fallback:
            continue
        actual = history[i].outcome
        ensemble[1] += 1
        ensemble[0] += int(result.outcome == actual)
        for name, vote in result.votes.items():
            tally = hits.setdefault(name, [0, 0])
            tally[1] += 1
            tally[0] += int(vote.outcome == actual)
    return {"predictors": hits, "ensemble": ensemble, "final": result}


@click.command()
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def analyze(payload_file: Path):
    """Replay a saved upstream JSON payload and report hit rates."""
    try:
        payload = json.loads(payload_file.read_text(encoding="utf-8"))
        history = parse_history(payload)
    except (json.JSONDecodeError, DataUnavailableError) as e:
        console.print(f"[red]Cannot read payload:[/] {e}")
        sys.exit(1)

    c = get_components()
    report = replay(c["engine"], history)

    table = Table(show_header=True, title=f"Replay of {len(history)} rounds")
    table.add_column("Predictor", style="green")
    table.add_column("Hits", justify="right")
    table.add_column("Rounds", justify="right")
    table.add_column("Hit rate", justify="right")
    rows = list(report["predictors"].items()) + [("ensemble", report["ensemble"])]
    for name, (hit, total) in rows:
        rate = f"{hit / total:.0%}" if total else "-"
        table.add_row(name, str(hit), str(total), rate)
    console.print(table)

    render_result(report["final"], title="Next round")
