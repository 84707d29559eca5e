"""Main CLI entry point for haricot.

Provides commands for:
- summary: Aggregate statistics as JSON
- entries: Number of entries
- body: Request or response body of one entry as JSON
- overview: Human-readable listing of all entries
"""

from __future__ import annotations

import logging
import sys

try:
    import typer
except ImportError as e:
    raise ImportError("CLI dependencies not installed. Install with: pip install haricot[cli]") from e

from haricot.cli.body import body
from haricot.cli.entries import entries
from haricot.cli.overview import overview
from haricot.cli.summary import summary

app = typer.Typer(
    name="haricot",
    help="Inspect HAR files.",
    no_args_is_help=True,
)

app.command()(summary)
app.command()(entries)
app.command()(body)
app.command()(overview)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed by setup_logging, replaced on every call
_handler: logging.Handler | None = None


def setup_logging(verbosity: int) -> None:
    """Configure logging of the haricot package to stderr.

    Args:
        verbosity: Number of -v flags (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    global _handler

    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logger = logging.getLogger("haricot")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(_handler)
    logger.setLevel(level)


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version flag was provided
    """
    if value:
        from haricot import __version__

        typer.echo(f"haricot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Verbosity (default=WARNING, -v=INFO, -vv=DEBUG). Logs go to stderr.",
    ),
) -> None:
    r"""Inspect HAR files.

    \b
    Examples:
        haricot summary capture.har
        haricot entries capture.har
        haricot body capture.har 3 resp --decode-structured | jq .body
        haricot overview capture.har --exclude-noise
    """
    setup_logging(verbose)


if __name__ == "__main__":
    app()
