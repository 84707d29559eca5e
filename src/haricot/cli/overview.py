"""Overview command for haricot CLI - lists every entry."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from haricot.analysis.overview import build_overview, render_overview
from haricot.cli.common import fail, load_index
from haricot.settings import SettingsLoadError, load_settings


def overview(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to list"),
    ],
    with_query_string: Annotated[
        bool,
        typer.Option("--with-query-string", "-q", help="Show URLs including their query string"),
    ] = False,
    exclude_noise: Annotated[
        bool,
        typer.Option(
            "--exclude-noise", "-x", help="Hide the query parameters and headers listed in settings"
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", envvar="HARICOT_CONFIG", help="Custom settings JSON file"),
    ] = None,
) -> None:
    """List every entry with its query string, headers and body previews.

    URLs are shown without their query string by default; the query
    parameters are listed separately.

    Args:
        har_file: HAR file to list
        with_query_string: Show URLs as recorded, including the query string
        exclude_noise: Hide the configured query parameters and headers
        config: Custom settings JSON file to merge with the defaults

    Example:
        haricot overview capture.har
        haricot overview capture.har --exclude-noise
        haricot overview capture.har -x --config my-settings.json
    """
    try:
        settings = load_settings(config).get("overview", {})
    except SettingsLoadError as e:
        raise fail(f"Failed to load settings: {e}") from None

    index = load_index(har_file)
    views = build_overview(
        index,
        with_query_string=with_query_string,
        query_excludes=settings.get("query_string_excludes", []) if exclude_noise else (),
        header_excludes=settings.get("header_excludes", []) if exclude_noise else (),
        preview_length=settings.get("preview_length", 80),
    )
    typer.echo(render_overview(index.document, views))
