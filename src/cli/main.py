"""CLI entry point for Sicbo Oracle."""

import click

from cli.commands import analyze, predict, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
def cli(verbose: bool, json_logs: bool):
    """Sicbo Oracle - ensemble Tài/Xỉu predictor."""
    log_cfg = load_config_model().logging
    setup_logging(
        json_mode=json_logs or log_cfg.json_mode,
        level="DEBUG" if verbose else log_cfg.level,
    )


cli.add_command(predict)
cli.add_command(analyze)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
