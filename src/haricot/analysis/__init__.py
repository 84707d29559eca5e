"""Read-only operations on a loaded HAR document.

This module has ZERO external dependencies (stdlib only).

Exports:
    - summarize: Aggregate statistics (SummaryReport)
    - extract: Request/response body extraction (ExtractedBody)
    - build_overview, render_overview: Human-readable per-entry listing
"""

from __future__ import annotations

from haricot.analysis.extraction import (
    DecodeFailedError,
    DecodeMode,
    ExtractedBody,
    ExtractError,
    ExtractIndexError,
    NoBodyError,
    Side,
    expand_nested_json,
    extract,
)
from haricot.analysis.overview import (
    BodyPreview,
    EntryOverview,
    build_overview,
    cut_text,
    render_overview,
    strip_query,
)
from haricot.analysis.summary import SummaryReport, normalize_mime_type, summarize

__all__ = [
    # Summary
    "summarize",
    "SummaryReport",
    "normalize_mime_type",
    # Extraction
    "extract",
    "expand_nested_json",
    "ExtractedBody",
    "Side",
    "DecodeMode",
    "ExtractError",
    "ExtractIndexError",
    "NoBodyError",
    "DecodeFailedError",
    # Overview
    "build_overview",
    "render_overview",
    "cut_text",
    "strip_query",
    "EntryOverview",
    "BodyPreview",
]
