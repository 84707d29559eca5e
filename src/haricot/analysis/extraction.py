"""Extract request and response bodies from HAR entries.

The extracted body is returned together with its MIME type and declared
size so it can be emitted as one self-describing JSON object. Bodies that
are themselves JSON can be embedded as native structure instead of as an
escaped string, which makes the output directly usable with jq.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from haricot.index import EntryIndexError

if TYPE_CHECKING:
    from haricot.index import EntryIndex
    from haricot.model.document import Content, Entry, NameValue

_LOGGER = logging.getLogger(__name__)

# Maximum nesting depth followed when expanding embedded JSON strings
_MAX_RECURSION_DEPTH = 50

_WHITESPACE_RE = re.compile(r"\s+")


class Side(str, Enum):
    """Which half of an exchange to extract."""

    REQUEST = "req"
    RESPONSE = "resp"


class DecodeMode(str, Enum):
    """How the body text is turned into the output value.

    RAW: the body is always emitted as a string.
    STRUCTURED: a body that parses as JSON is embedded as JSON.
    EXPANDED: like STRUCTURED, and string values inside the embedded JSON
        that are (percent-encoded) JSON objects or arrays are expanded too.
    """

    RAW = "raw"
    STRUCTURED = "structured"
    EXPANDED = "expanded"


class ExtractError(Exception):
    """Base class for body extraction failures."""


class ExtractIndexError(ExtractError):
    """Raised when the requested entry does not exist.

    Wraps the EntryIndexError raised by the index as ``index_error``.
    """

    def __init__(self, index_error: EntryIndexError) -> None:
        self.index_error = index_error
        super().__init__(str(index_error))


class NoBodyError(ExtractError):
    """Raised when the selected side has no captured body."""

    def __init__(self, ordinal: int, side: Side) -> None:
        self.ordinal = ordinal
        self.side = side
        super().__init__(f"Entry {ordinal} has no {_side_label(side)} body")


class DecodeFailedError(ExtractError):
    """Raised when a base64 body cannot be decoded."""

    def __init__(self, ordinal: int, side: Side, reason: str) -> None:
        self.ordinal = ordinal
        self.side = side
        self.reason = reason
        super().__init__(f"Cannot decode base64 {_side_label(side)} body of entry {ordinal}: {reason}")


def _side_label(side: Side) -> str:
    return "request" if side is Side.REQUEST else "response"


@dataclass(frozen=True)
class ExtractedBody:
    """Body of one side of an entry, ready for output.

    Attributes:
        ordinal: Entry the body was taken from
        side: Request or response
        mime_type: Declared MIME type (Content-Type header when not declared)
        size: Declared size in bytes, -1 when unknown
        encoding: Encoding recorded in the HAR ("base64"), or None
        decode_mode: Decode mode used
        body: The body as a string, or an embedded JSON value when structured is True
        structured: True if body is a parsed JSON value rather than text
        lossy: True if invalid UTF-8 sequences were replaced while decoding
    """

    ordinal: int
    side: Side
    mime_type: str
    size: int
    encoding: str | None
    decode_mode: DecodeMode
    body: Any
    structured: bool = False
    lossy: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "entry": self.ordinal,
            "side": self.side.value,
            "mimeType": self.mime_type,
            "size": self.size,
            "encoding": self.encoding,
            "decodeMode": self.decode_mode.value,
            "structured": self.structured,
            "lossy": self.lossy,
            "body": self.body,
        }


def _header_value(headers: tuple[NameValue, ...], name: str) -> str | None:
    name_lower = name.lower()
    for header in headers:
        if header.name.lower() == name_lower:
            return header.value
    return None


def _select(entry: Entry, side: Side) -> tuple[Content | None, str]:
    """Return the content block of one side and its resolved MIME type."""
    if side is Side.REQUEST:
        content, headers = entry.request.content, entry.request.headers
    else:
        content, headers = entry.response.content, entry.response.headers

    mime_type = content.mime_type if content is not None else ""
    if not mime_type:
        mime_type = _header_value(headers, "Content-Type") or ""
    return content, mime_type


def decode_base64_text(text: str) -> bytes:
    """Decode base64 text, ignoring whitespace but rejecting other junk.

    Raises:
        binascii.Error: If the text is not valid base64
    """
    return base64.b64decode(_WHITESPACE_RE.sub("", text), validate=True)


def bytes_to_text(data: bytes) -> tuple[str, bool]:
    """Decode bytes as UTF-8, replacing invalid sequences.

    Returns:
        Tuple of (text, lossy) where lossy is True if anything was replaced
    """
    try:
        return data.decode("utf-8"), False
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace"), True


def parse_json_text(text: str) -> tuple[Any, bool]:
    """Try to parse text as strict JSON.

    NaN and Infinity are rejected, as is nesting deeper than the parser
    can recurse.

    Returns:
        Tuple of (value, ok); value is the original text when ok is False
    """
    try:
        return json.loads(text, parse_constant=_reject_constant), True
    except (ValueError, RecursionError):
        return text, False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _expand_string(value: str) -> Any:
    candidate = value.strip()
    if not candidate:
        return value
    # Cheap pre-check before percent-decoding and parsing
    if candidate[0] not in "{[%":
        return value
    parsed, ok = parse_json_text(unquote(candidate))
    if ok and isinstance(parsed, dict | list):
        return parsed
    return value


def expand_nested_json(data: Any, _depth: int = 0) -> Any:
    """Replace string values holding JSON objects or arrays with parsed values.

    Strings may be percent-encoded. Expanded values are expanded again, so
    JSON embedded several levels deep is unpacked completely.

    Args:
        data: JSON value (dict, list, or primitive)
        _depth: Current recursion depth (internal use)

    Returns:
        Expanded copy of data
    """
    if _depth > _MAX_RECURSION_DEPTH:
        _LOGGER.warning("Max recursion depth exceeded while expanding nested JSON")
        return data

    if isinstance(data, dict):
        return {key: expand_nested_json(value, _depth + 1) for key, value in data.items()}
    if isinstance(data, list):
        return [expand_nested_json(item, _depth + 1) for item in data]
    if isinstance(data, str):
        expanded = _expand_string(data)
        if expanded is not data:
            return expand_nested_json(expanded, _depth + 1)
    return data


def extract(
    index: EntryIndex,
    ordinal: int,
    side: Side,
    decode_mode: DecodeMode = DecodeMode.RAW,
) -> ExtractedBody:
    """Extract the body of a request or response.

    Args:
        index: Entry index of a loaded document
        ordinal: Zero-based entry position
        side: Side.REQUEST or Side.RESPONSE
        decode_mode: How to render the body (see DecodeMode)

    Returns:
        The extracted body with its metadata

    Raises:
        ExtractIndexError: If ordinal is out of range
        NoBodyError: If the selected side has no content or no text
        DecodeFailedError: If base64 content cannot be decoded

    Example:
        >>> body = extract(index, 1, Side.RESPONSE, DecodeMode.STRUCTURED)
        >>> body.to_dict()["body"]
        {'ok': False}
    """
    try:
        entry = index.get(ordinal)
    except EntryIndexError as e:
        raise ExtractIndexError(e) from e

    content, mime_type = _select(entry, side)
    if content is None or content.text is None:
        raise NoBodyError(ordinal, side)

    lossy = False
    if content.is_base64:
        try:
            raw = decode_base64_text(content.text)
        except binascii.Error as e:
            raise DecodeFailedError(ordinal, side, str(e)) from e
        text, lossy = bytes_to_text(raw)
        if lossy:
            _LOGGER.warning(
                "%s body of entry %d is not valid UTF-8; invalid bytes were replaced",
                _side_label(side).capitalize(),
                ordinal,
            )
    else:
        text = content.text

    body: Any = text
    structured = False
    # Lossy text is not what the capture recorded, so it is never parsed
    if decode_mode is not DecodeMode.RAW and not lossy:
        body, structured = parse_json_text(text)
        if structured and decode_mode is DecodeMode.EXPANDED:
            body = expand_nested_json(body)

    _LOGGER.debug(
        "Extracted %s body of entry %d (%s, structured=%s)", side.value, ordinal, mime_type, structured
    )
    return ExtractedBody(
        ordinal=ordinal,
        side=side,
        mime_type=mime_type,
        size=content.size,
        encoding=content.encoding,
        decode_mode=decode_mode,
        body=body,
        structured=structured,
        lossy=lossy,
    )
