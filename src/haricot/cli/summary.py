"""Summary command for haricot CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from haricot.analysis.summary import summarize
from haricot.cli.common import echo_json, load_index


def summary(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to summarize"),
    ],
) -> None:
    """Print summary statistics of a HAR file as JSON.

    Reports the number of entries, request methods, response status codes,
    response MIME types, total declared response size and entry timings.

    Example:
        haricot summary capture.har
        haricot summary capture.har | jq .statuses
    """
    index = load_index(har_file)
    echo_json(summarize(index).to_dict())
