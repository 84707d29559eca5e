"""Body command for haricot CLI - extracts a request or response body."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from haricot.analysis.extraction import (
    DecodeFailedError,
    DecodeMode,
    ExtractIndexError,
    NoBodyError,
    Side,
    extract,
)
from haricot.cli.common import echo_json, fail, load_index


def body(
    har_file: Annotated[
        Path,
        typer.Argument(help="HAR file to read"),
    ],
    ordinal: Annotated[
        int,
        typer.Argument(help="Zero-based entry number"),
    ],
    which: Annotated[
        Side,
        typer.Argument(help="Body of the request 'req' or the response 'resp'"),
    ],
    decode_structured: Annotated[
        bool,
        typer.Option("--decode-structured", "-s", help="Embed JSON bodies as JSON instead of a string"),
    ] = False,
    expand_nested: Annotated[
        bool,
        typer.Option(
            "--expand-nested",
            "-e",
            help="Also expand JSON embedded in string values (implies --decode-structured)",
        ),
    ] = False,
) -> None:
    """Print the body of a request or response as a JSON object.

    The output carries the MIME type, declared size and the body. Base64
    bodies are decoded. With --decode-structured a body that is valid JSON
    is embedded as JSON, so it can be piped straight into jq.

    Args:
        har_file: HAR file to read
        ordinal: Zero-based entry number
        which: 'req' for the request body, 'resp' for the response body
        decode_structured: Embed JSON bodies as native JSON
        expand_nested: Also expand (percent-encoded) JSON inside string values

    Example:
        haricot body capture.har 3 resp
        haricot body capture.har 3 resp --decode-structured | jq .body
        haricot body capture.har 0 req --expand-nested
    """
    if expand_nested:
        decode_mode = DecodeMode.EXPANDED
    elif decode_structured:
        decode_mode = DecodeMode.STRUCTURED
    else:
        decode_mode = DecodeMode.RAW

    index = load_index(har_file)

    try:
        extracted = extract(index, ordinal, which, decode_mode)
    except ExtractIndexError as e:
        raise fail(str(e.index_error)) from None
    except NoBodyError as e:
        raise fail(str(e)) from None
    except DecodeFailedError as e:
        raise fail(str(e)) from None

    echo_json(extracted.to_dict())
