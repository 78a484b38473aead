"""i2pd web-console exporter CLI — entry-point for the exporter.

Usage:
    python cli/main.py --help

Commands:
    serve     → run the /metrics HTTP server (default)
    scrape    → fetch the console once and print the metrics
    parse     → render metrics from a saved console page
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from exporter.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from exporter import __version__
from exporter.config import settings
from exporter.errors import ConfigError, ConsoleFetchError
from exporter.logging_setup import configure_logging
from exporter.pipeline import collect_metrics

logger = logging.getLogger("exporter.cli")

app = typer.Typer(
    name="i2pd-webconsole-exporter",
    help="Prometheus exporter for i2pd (via web console scraping).",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"i2pd-webconsole-exporter {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True,
        help="Print the version and exit.",
    ),
) -> None:
    """Run the metrics server when no command is given."""
    configure_logging(settings.log_level)
    if ctx.invoked_subcommand is None:
        serve()


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve() -> None:
    """Serve /metrics on METRICS_LISTEN_ADDR until SIGINT/SIGTERM."""
    import uvicorn

    from exporter.api.app import create_app

    try:
        host, port = settings.listen_host_port
    except ConfigError as exc:
        typer.echo(f"[serve] {exc}", err=True)
        raise typer.Exit(2)

    logger.info(
        "Starting i2pd webconsole exporter on %s (target: %s)",
        settings.listen_addr, settings.web_console_url,
    )
    # uvicorn installs its own SIGINT/SIGTERM handlers and drains in-flight
    # requests before running the app's lifespan shutdown.
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=logging.getLogger().getEffectiveLevel(),
        access_log=False,
    )


# ---------------------------------------------------------------------------
# One-shot commands
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: Optional[str] = typer.Option(None, help="Web console URL (default: I2PD_WEB_CONSOLE)."),
) -> None:
    """Fetch the web console once and print the rendered metrics."""
    from exporter.scraper.fetcher import fetch_console

    try:
        page = fetch_console(url or settings.web_console_url)
    except ConsoleFetchError as exc:
        typer.echo(f"[scrape] {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(collect_metrics(page.html), nl=False)


@app.command("parse")
def parse(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved console HTML."),
) -> None:
    """Render metrics from a saved web-console page."""
    html = path.read_text(encoding="utf-8", errors="replace")
    typer.echo(collect_metrics(html), nl=False)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
