"""Load HAR files into the typed document model.

Loading is all-or-nothing: the file is read completely, parsed as JSON and
checked field by field while the model is built. The first problem found
aborts the load with a LoadError subclass; no partial document is returned.
"""

from __future__ import annotations

import gzip
import json
import logging
import math
import zlib
from pathlib import Path
from typing import Any

from haricot.model.document import (
    UNKNOWN_SIZE,
    Content,
    Document,
    Entry,
    NameValue,
    Request,
    Response,
)

_LOGGER = logging.getLogger(__name__)

_JSON_TYPE_NAMES: dict[type, str] = {
    dict: "object",
    list: "array",
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


class LoadError(Exception):
    """Base class for failures to load a HAR file."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class HarNotFoundError(LoadError):
    """Raised when the HAR file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"HAR file not found: {path}", path)


class HarUnreadableError(LoadError):
    """Raised when the HAR file exists but cannot be read or decompressed."""

    def __init__(self, path: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot read HAR file {path}: {reason}", path)


class MalformedJsonError(LoadError):
    """Raised when the HAR file is not valid JSON."""

    def __init__(self, path: str, msg: str, lineno: int | None = None, colno: int | None = None) -> None:
        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        super().__init__(f"Invalid JSON in HAR file {path}: {msg}{self.position}", path)

    @property
    def position(self) -> str:
        """Location suffix for messages, empty when the position is unknown."""
        if self.lineno is None:
            return ""
        return f" at line {self.lineno}, column {self.colno}"


class SchemaMismatchError(LoadError):
    """Raised when the JSON does not have the structure of a HAR document.

    Attributes:
        field_path: Location of the offending field, e.g. "entries[2].response.status"
        problem: What is wrong with it, e.g. "missing"
    """

    def __init__(self, field_path: str, problem: str, path: str = "") -> None:
        self.field_path = field_path
        self.problem = problem
        message = f"Invalid HAR structure: {field_path} {problem}"
        if path:
            message += f" (in {path})"
        super().__init__(message, path)


def _json_type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _join(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _is_finite(value: int | float) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def _check_type(value: Any, expected: str, where: str) -> None:
    """Raise SchemaMismatchError unless value has the expected JSON type."""
    if expected == "object":
        ok = isinstance(value, dict)
    elif expected == "array":
        ok = isinstance(value, list)
    elif expected == "string":
        ok = isinstance(value, str)
    elif expected == "integer":
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif expected == "number":
        ok = isinstance(value, int | float) and not isinstance(value, bool)
        if ok and not _is_finite(value):
            raise SchemaMismatchError(where, f"must be finite number, got {value!r}")
    else:
        raise ValueError(f"Unknown JSON type: {expected}")

    if not ok:
        raise SchemaMismatchError(where, f"must be {expected}, got {_json_type_name(value)}")


def _required(obj: dict[str, Any], key: str, expected: str, where: str) -> Any:
    field_path = _join(where, key)
    if key not in obj:
        raise SchemaMismatchError(field_path, "missing")
    value = obj[key]
    _check_type(value, expected, field_path)
    return value


def _optional(obj: dict[str, Any], key: str, expected: str, where: str, default: Any = None) -> Any:
    # null is treated the same as an absent key
    value = obj.get(key)
    if value is None:
        return default
    _check_type(value, expected, _join(where, key))
    return value


def _parse_name_values(obj: dict[str, Any], key: str, where: str) -> tuple[NameValue, ...]:
    """Parse a HAR name/value array, keeping order and duplicates."""
    items = _optional(obj, key, "array", where, default=[])
    result = []
    for i, item in enumerate(items):
        item_path = f"{_join(where, key)}[{i}]"
        _check_type(item, "object", item_path)
        result.append(
            NameValue(
                name=_required(item, "name", "string", item_path),
                value=_required(item, "value", "string", item_path),
            )
        )
    return tuple(result)


def _parse_content(data: dict[str, Any], where: str, size: int) -> Content:
    return Content(
        mime_type=_optional(data, "mimeType", "string", where, default=""),
        size=size,
        encoding=_optional(data, "encoding", "string", where),
        text=_optional(data, "text", "string", where),
    )


def _parse_request(data: dict[str, Any], where: str) -> Request:
    content = None
    post_params: tuple[NameValue, ...] = ()
    post_data = _optional(data, "postData", "object", where)
    if post_data is not None:
        post_path = _join(where, "postData")
        body_size = _optional(data, "bodySize", "integer", where, default=UNKNOWN_SIZE)
        content = _parse_content(post_data, post_path, body_size)
        post_params = _parse_name_values(post_data, "params", post_path)

    return Request(
        method=_required(data, "method", "string", where),
        url=_required(data, "url", "string", where),
        headers=_parse_name_values(data, "headers", where),
        query_string=_parse_name_values(data, "queryString", where),
        post_params=post_params,
        content=content,
    )


def _parse_response(data: dict[str, Any], where: str) -> Response:
    content = None
    content_data = _optional(data, "content", "object", where)
    if content_data is not None:
        content_path = _join(where, "content")
        size = _optional(content_data, "size", "integer", content_path, default=UNKNOWN_SIZE)
        content = _parse_content(content_data, content_path, size)

    return Response(
        status=_required(data, "status", "integer", where),
        status_text=_optional(data, "statusText", "string", where, default=""),
        headers=_parse_name_values(data, "headers", where),
        content=content,
    )


def _parse_entry(data: Any, ordinal: int) -> Entry:
    where = f"entries[{ordinal}]"
    _check_type(data, "object", where)

    started = _required(data, "startedDateTime", "string", where)
    elapsed = _required(data, "time", "number", where)
    request = _parse_request(_required(data, "request", "object", where), _join(where, "request"))
    response = _parse_response(_required(data, "response", "object", where), _join(where, "response"))

    return Entry(
        ordinal=ordinal,
        started_date_time=started,
        time=float(elapsed),
        request=request,
        response=response,
    )


def parse_document(har_data: Any, source: str | None = None) -> Document:
    """Build a Document from already-decoded HAR JSON.

    Args:
        har_data: Decoded JSON value (normally a dict with a "log" key)
        source: Optional description of where the data came from, kept on the Document

    Returns:
        Parsed document with entry ordinals assigned in array order

    Raises:
        SchemaMismatchError: If a required field is missing or has the wrong type

    Example:
        >>> doc = parse_document({"log": {"entries": []}})
        >>> len(doc.entries)
        0
    """
    try:
        if not isinstance(har_data, dict):
            raise SchemaMismatchError("root", f"must be object, got {_json_type_name(har_data)}")

        log = _required(har_data, "log", "object", "")
        raw_entries = _required(log, "entries", "array", "")
        entries = tuple(_parse_entry(entry, i) for i, entry in enumerate(raw_entries))

        return Document(
            entries=entries,
            version=_optional(log, "version", "string", "log"),
            creator=_optional(log, "creator", "object", "log"),
            browser=_optional(log, "browser", "object", "log"),
            pages=_optional(log, "pages", "array", "log"),
            comment=_optional(log, "comment", "string", "log"),
            source=source,
        )
    except SchemaMismatchError as e:
        if source and not e.path:
            raise SchemaMismatchError(e.field_path, e.problem, source) from None
        raise


def _read_bytes(path: Path) -> bytes:
    path_str = str(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise HarNotFoundError(path_str) from e
    except PermissionError as e:
        raise HarUnreadableError(path_str, "permission denied") from e
    except OSError as e:
        raise HarUnreadableError(path_str, e.strerror or str(e)) from e

    if path.suffix == ".gz":
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as e:
            raise HarUnreadableError(path_str, f"corrupt gzip data ({e})") from e
    return raw


def load(path: Path | str) -> Document:
    """Load and parse a HAR file.

    Args:
        path: Path to a .har file (or gzip-compressed .har.gz)

    Returns:
        Fully parsed Document

    Raises:
        HarNotFoundError: If the path does not exist
        HarUnreadableError: If the file cannot be read, decompressed or decoded as UTF-8
        MalformedJsonError: If the content is not valid JSON
        SchemaMismatchError: If the JSON is not a HAR document
    """
    path = Path(path)
    path_str = str(path)

    if not path.exists():
        raise HarNotFoundError(path_str)

    raw = _read_bytes(path)
    _LOGGER.debug("Read %d bytes from %s", len(raw), path_str)

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise HarUnreadableError(path_str, f"not valid UTF-8 (byte {e.start})") from e

    try:
        har_data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(path_str, e.msg, e.lineno, e.colno) from e
    except ValueError as e:
        # NaN/Infinity tokens and integers over the digit limit
        raise MalformedJsonError(path_str, str(e)) from e
    except RecursionError as e:
        raise MalformedJsonError(path_str, "nesting too deep") from e

    document = parse_document(har_data, source=path_str)
    _LOGGER.info("Loaded %d entries from %s", len(document.entries), path_str)
    return document
