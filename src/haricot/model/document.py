"""Typed representation of a HAR document.

Only the parts of the HAR 1.2 format needed for inspection are modeled.
Everything is immutable: a Document is built once by the loader and
only read afterwards.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Declared size used by capture tools when the body size is not known
UNKNOWN_SIZE = -1

BASE64_ENCODING = "base64"


@dataclass(frozen=True)
class NameValue:
    """A header, query-string parameter or form parameter.

    Names keep their original casing; HAR allows the same name to appear
    more than once with different casing.
    """

    name: str
    value: str


@dataclass(frozen=True)
class Content:
    """Body descriptor of a request or response.

    Attributes:
        mime_type: Declared MIME type, possibly with parameters (may be empty)
        size: Declared size in bytes, or UNKNOWN_SIZE (-1)
        encoding: Encoding of ``text`` ("base64"), or None when text is literal
        text: The payload itself, or None when no body was captured
    """

    mime_type: str = ""
    size: int = UNKNOWN_SIZE
    encoding: str | None = None
    text: str | None = None

    @property
    def is_base64(self) -> bool:
        """Return True if text is base64 encoded."""
        return self.encoding == BASE64_ENCODING

    @property
    def has_text(self) -> bool:
        """Return True if a payload was captured (an empty string counts)."""
        return self.text is not None


@dataclass(frozen=True)
class Request:
    """Recorded HTTP request."""

    method: str
    url: str
    headers: tuple[NameValue, ...] = ()
    query_string: tuple[NameValue, ...] = ()
    post_params: tuple[NameValue, ...] = ()
    content: Content | None = None


@dataclass(frozen=True)
class Response:
    """Recorded HTTP response."""

    status: int
    status_text: str = ""
    headers: tuple[NameValue, ...] = ()
    content: Content | None = None


@dataclass(frozen=True)
class Entry:
    """Single request/response exchange.

    Attributes:
        ordinal: Zero-based position in the document's entries array
        started_date_time: ISO 8601 timestamp as recorded
        time: Total elapsed time in milliseconds (may be fractional)
        request: The recorded request
        response: The recorded response
    """

    ordinal: int
    started_date_time: str
    time: float
    request: Request
    response: Response


@dataclass(frozen=True)
class Document:
    """Root of a parsed HAR file.

    Metadata fields are carried through exactly as found in ``log`` and
    are never interpreted.
    """

    entries: tuple[Entry, ...]
    version: str | None = None
    creator: dict[str, Any] | None = None
    browser: dict[str, Any] | None = None
    pages: list[Any] | None = None
    comment: str | None = None
    source: str | None = field(default=None, compare=False)
