"""HAR document model and loader.

This module has ZERO external dependencies (stdlib only).

Exports:
    - load: Load a HAR file from disk into a Document
    - parse_document: Build a Document from decoded JSON
    - Document, Entry, Request, Response, Content, NameValue: Model types
    - LoadError and its subclasses: Load failures
"""

from __future__ import annotations

from haricot.model.document import (
    BASE64_ENCODING,
    UNKNOWN_SIZE,
    Content,
    Document,
    Entry,
    NameValue,
    Request,
    Response,
)
from haricot.model.loader import (
    HarNotFoundError,
    HarUnreadableError,
    LoadError,
    MalformedJsonError,
    SchemaMismatchError,
    load,
    parse_document,
)

__all__ = [
    # Model
    "Document",
    "Entry",
    "Request",
    "Response",
    "Content",
    "NameValue",
    "UNKNOWN_SIZE",
    "BASE64_ENCODING",
    # Loading
    "load",
    "parse_document",
    "LoadError",
    "HarNotFoundError",
    "HarUnreadableError",
    "MalformedJsonError",
    "SchemaMismatchError",
]
