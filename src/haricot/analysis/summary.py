"""Aggregate statistics over the entries of a HAR document."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from haricot.model.document import UNKNOWN_SIZE

if TYPE_CHECKING:
    from haricot.index import EntryIndex


def normalize_mime_type(mime_type: str) -> str:
    """Strip parameters from a MIME type.

    Example:
        >>> normalize_mime_type("text/html; charset=utf-8")
        'text/html'
    """
    return mime_type.split(";", 1)[0].strip().lower()


@dataclass
class SummaryReport:
    """Aggregate statistics for one HAR document.

    Attributes:
        entry_count: Total number of entries
        methods: Request method -> number of entries
        statuses: Response status code -> number of entries
        mime_types: Normalized response MIME type -> number of entries with content
        total_response_size: Sum of declared response sizes, unknown sizes excluded
        unknown_size_count: Entries whose response content size is unknown (-1)
        time_min: Shortest entry time in ms, None without entries
        time_max: Longest entry time in ms, None without entries
        time_total: Sum of entry times in ms
    """

    entry_count: int = 0
    methods: dict[str, int] = field(default_factory=dict)
    statuses: dict[int, int] = field(default_factory=dict)
    mime_types: dict[str, int] = field(default_factory=dict)
    total_response_size: int = 0
    unknown_size_count: int = 0
    time_min: float | None = None
    time_max: float | None = None
    time_total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict with keys in a stable order."""
        return {
            "entries": self.entry_count,
            "methods": dict(sorted(self.methods.items())),
            "statuses": {str(status): n for status, n in sorted(self.statuses.items())},
            "mimeTypes": dict(sorted(self.mime_types.items())),
            "responseSize": {
                "total": self.total_response_size,
                "unknownCount": self.unknown_size_count,
            },
            "time": {
                "min": self.time_min,
                "max": self.time_max,
                "total": self.time_total,
            },
        }


def summarize(index: EntryIndex) -> SummaryReport:
    """Compute summary statistics in a single pass over the entries.

    The result depends only on the multiset of entries, not on their order.

    Args:
        index: Entry index of a loaded document

    Returns:
        Summary report
    """
    methods: Counter[str] = Counter()
    statuses: Counter[int] = Counter()
    mime_types: Counter[str] = Counter()
    total_size = 0
    unknown_sizes = 0
    times: list[float] = []

    for entry in index:
        methods[entry.request.method] += 1
        statuses[entry.response.status] += 1
        times.append(entry.time)

        content = entry.response.content
        if content is None:
            continue
        mime_types[normalize_mime_type(content.mime_type)] += 1
        if content.size <= UNKNOWN_SIZE:
            unknown_sizes += 1
        else:
            total_size += content.size

    return SummaryReport(
        entry_count=index.count(),
        methods=dict(methods),
        statuses=dict(statuses),
        mime_types=dict(mime_types),
        total_response_size=total_size,
        unknown_size_count=unknown_sizes,
        time_min=min(times) if times else None,
        time_max=max(times) if times else None,
        # fsum keeps the total independent of entry order
        time_total=math.fsum(times),
    )
