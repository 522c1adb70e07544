"""Shared CLI utilities."""

import random

import structlog
from rich.console import Console
from rich.table import Table

from ensemble.engine import EnsembleEngine, EnsembleResult

console = Console()
logger = structlog.get_logger()


def get_components(config_path=None, with_feed: bool = False) -> dict:
    """Build config and engine for a CLI command, plus the feed client when asked.

    The feed holds an open HTTP client; callers that request it must close it.
    """
    from cli.config import load_config_model
    from feed.client import RoundFeedClient

    config = load_config_model(config_path)
    seed = config.engine.seed
    engine = EnsembleEngine(
        rng=random.Random(seed) if seed is not None else None,
        min_history=config.engine.min_history,
        lookback=config.engine.lookback,
    )
    components = {"config": config, "engine": engine}
    if with_feed:
        components["feed"] = RoundFeedClient(config.feed, retry=config.retry)
    return components


def outcome_style(outcome) -> str:
    return "red" if str(outcome) == "Tài" else "cyan"


def render_result(result: EnsembleResult, title: str = "Ensemble") -> None:
    """Print per-predictor votes and the final pick."""
    if result.fallback:
        console.print(f"[yellow]{result.rationale}[/]")
    else:
        table = Table(show_header=True, title=title)
        table.add_column("Predictor", style="green")
        table.add_column("Vote")
        table.add_column("Score", justify="right")
        table.add_column("Weight", justify="right")
        for name, vote in result.votes.items():
            score = result.scores.get(name)
            table.add_row(
                name,
                vote.name,
                f"{score:.2f}" if score is not None else "-",
                f"{result.weights.get(name, 0.0):.3f}",
            )
        console.print(table)
        console.print(f"Streak: {result.streak}  |  Break probability: {result.break_probability:.2f}")
        console.print(f"[dim]{result.rationale}[/]")

    style = outcome_style(result.outcome)
    console.print(f"\n[bold]Prediction:[/] [{style}]{result.outcome}[/]  ({result.confidence:.0%})")
