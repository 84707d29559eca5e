"""Helpers shared by haricot CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer

from haricot.index import EntryIndex
from haricot.model import MalformedJsonError, SchemaMismatchError, load
from haricot.model.loader import HarNotFoundError, HarUnreadableError, LoadError

_LOGGER = logging.getLogger(__name__)


def fail(message: str) -> typer.Exit:
    """Write an error message to stderr and return the exit to raise."""
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def load_index(har_file: Path) -> EntryIndex:
    """Load a HAR file for a command, turning load errors into a clean exit.

    Raises:
        typer.Exit: With code 1 if the file cannot be loaded
    """
    try:
        document = load(har_file)
    except HarNotFoundError as e:
        raise fail(f"File not found: {e.path}") from None
    except HarUnreadableError as e:
        raise fail(f"Cannot read {e.path}: {e.reason}") from None
    except MalformedJsonError as e:
        raise fail(f"Invalid JSON in HAR file: {e.msg}{e.position}") from None
    except SchemaMismatchError as e:
        raise fail(f"Invalid HAR file {e.path}: {e.field_path} {e.problem}") from None
    except LoadError as e:
        raise fail(str(e)) from None
    return EntryIndex(document)


def echo_json(data: Any) -> None:
    """Print a JSON document to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False))
