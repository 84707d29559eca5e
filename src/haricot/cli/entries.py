"""Entries command for haricot CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from haricot.cli.common import load_index


def entries(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to count entries of"),
    ],
) -> None:
    """Print the number of entries in a HAR file.

    Example:
        haricot entries capture.har
    """
    index = load_index(har_file)
    typer.echo(index.count())
