"""HAR file inspection library.

This library provides tools for:
- Loading HAR (HTTP Archive) files into a typed, read-only model
- Summarizing entries (methods, status codes, MIME types, sizes, timings)
- Extracting request and response bodies, decoding base64 and embedded JSON

The core has ZERO dependencies (only stdlib).
Optional features require: typer (cli).

Example usage:
    from haricot import EntryIndex, load, summarize, extract, Side, DecodeMode

    index = EntryIndex(load("capture.har"))
    print(index.count())
    report = summarize(index)
    body = extract(index, 1, Side.RESPONSE, DecodeMode.STRUCTURED)
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export public API for convenience
from haricot.analysis import (
    DecodeMode,
    ExtractedBody,
    ExtractError,
    Side,
    SummaryReport,
    extract,
    summarize,
)
from haricot.index import EntryIndex, EntryIndexError, EntryOutOfRangeError
from haricot.model import Document, LoadError, load

__all__ = [
    "__version__",
    "load",
    "Document",
    "LoadError",
    "EntryIndex",
    "EntryIndexError",
    "EntryOutOfRangeError",
    "summarize",
    "SummaryReport",
    "extract",
    "ExtractedBody",
    "ExtractError",
    "Side",
    "DecodeMode",
]
