"""Run the HTTP API."""

from typing import Optional

import click
import uvicorn

from cli.utils import get_components


@click.command()
@click.option("--host", default=None, help="Bind address (default from config)")
@click.option("--port", type=int, default=None, help="Port (default from config or $PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """Serve GET /sicbo with uvicorn."""
    config = get_components()["config"]
    uvicorn.run(
        "web.app:app",
        host=host or config.server.host,
        port=port or config.server.port,
        log_config=None,
    )
