"""Human-readable per-entry listing of a HAR document."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

if TYPE_CHECKING:
    from haricot.index import EntryIndex
    from haricot.model.document import Content, Document, NameValue

DEFAULT_PREVIEW_LENGTH = 80

# Width of the "Name:" column in rendered name/value lists
_NAME_WIDTH = 20


@dataclass
class BodyPreview:
    """Short description of a request or response body."""

    mime_type: str
    size: int
    length: int | None
    preview: str


@dataclass
class EntryOverview:
    """Display-ready view of one entry."""

    ordinal: int
    method: str
    url: str
    status: int
    status_text: str
    query: list[NameValue] = field(default_factory=list)
    request_headers: list[NameValue] = field(default_factory=list)
    response_headers: list[NameValue] = field(default_factory=list)
    request_body: BodyPreview | None = None
    response_body: BodyPreview | None = None


def cut_text(text: str, max_len: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Shorten text to one display line.

    Example:
        >>> cut_text("  line one\\nline two  ", 13)
        'line one\\\\nli'
    """
    return text[:max_len].replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t").strip()


def strip_query(url: str) -> str:
    """Remove the query string from a URL, keeping any fragment."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))


def _filter_sorted(pairs: Iterable[NameValue], excludes: Iterable[str]) -> list[NameValue]:
    excluded = {name.lower() for name in excludes}
    kept = [nv for nv in pairs if nv.name.lower() not in excluded]
    return sorted(kept, key=lambda nv: nv.name)


def _preview(content: Content | None, preview_length: int) -> BodyPreview | None:
    if content is None:
        return None
    text = content.text
    if text is None:
        preview, length = "", None
    elif content.is_base64:
        preview, length = f"<base64, {len(text)} characters>", len(text)
    else:
        preview, length = cut_text(text, preview_length), len(text)
    return BodyPreview(mime_type=content.mime_type, size=content.size, length=length, preview=preview)


def build_overview(
    index: EntryIndex,
    *,
    with_query_string: bool = False,
    query_excludes: Iterable[str] = (),
    header_excludes: Iterable[str] = (),
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> list[EntryOverview]:
    """Build display views for every entry.

    Args:
        index: Entry index of a loaded document
        with_query_string: Keep the query string in displayed URLs
        query_excludes: Query parameter names to leave out (case-insensitive)
        header_excludes: Header names to leave out (case-insensitive)
        preview_length: Maximum characters of body text in previews

    Returns:
        One EntryOverview per entry, in document order
    """
    query_excludes = list(query_excludes)
    header_excludes = list(header_excludes)
    overviews = []
    for entry in index:
        request, response = entry.request, entry.response
        overviews.append(
            EntryOverview(
                ordinal=entry.ordinal,
                method=request.method,
                url=request.url if with_query_string else strip_query(request.url),
                status=response.status,
                status_text=response.status_text,
                query=_filter_sorted(request.query_string, query_excludes),
                request_headers=_filter_sorted(request.headers, header_excludes),
                response_headers=_filter_sorted(response.headers, header_excludes),
                request_body=_preview(request.content, preview_length),
                response_body=_preview(response.content, preview_length),
            )
        )
    return overviews


def _render_name_values(title: str, pairs: list[NameValue], lines: list[str]) -> None:
    if not pairs:
        return
    lines.append(f"    {title}:")
    for nv in pairs:
        lines.append(f"        {nv.name + ':':{_NAME_WIDTH}} {nv.value}")


def _render_body(title: str, body: BodyPreview, lines: list[str]) -> None:
    lines.append(f"    {title}:")
    lines.append(f"        {'Mime-Type:':{_NAME_WIDTH}} {body.mime_type}")
    lines.append(f"        {'Size:':{_NAME_WIDTH}} {body.size}")
    if body.length is not None:
        lines.append(f"        {'Length:':{_NAME_WIDTH}} {body.length}")
        lines.append(f"        {'Text:':{_NAME_WIDTH}} {body.preview}")


def render_overview(document: Document, overviews: list[EntryOverview]) -> str:
    """Render entry views as a plain-text report."""
    lines = [f"{len(overviews)} entries"]
    if document.creator:
        name = document.creator.get("name", "")
        version = document.creator.get("version", "")
        lines.append(f"Created by {name} {version}".rstrip())

    for view in overviews:
        lines.append("")
        lines.append(f"{view.ordinal}/ {view.method} {view.url}")
        _render_name_values("Query String", view.query, lines)
        _render_name_values("Headers", view.request_headers, lines)
        if view.request_body is not None:
            _render_body("Post Data", view.request_body, lines)

        lines.append(f"{view.ordinal}/ RESPONSE: {view.status} {view.status_text}".rstrip())
        _render_name_values("Headers", view.response_headers, lines)
        if view.response_body is not None:
            _render_body("Content", view.response_body, lines)

    return "\n".join(lines)
