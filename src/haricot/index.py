"""Positional access to the entries of a HAR document."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from haricot.model.document import Document, Entry


class EntryIndexError(IndexError):
    """Base class for entry lookup failures."""


class EntryOutOfRangeError(EntryIndexError):
    """Raised when an ordinal is outside the valid range.

    Attributes:
        ordinal: The requested ordinal
        count: Number of entries in the document
        valid_range: Half-open range (0, count) of valid ordinals
    """

    def __init__(self, ordinal: int, count: int) -> None:
        self.ordinal = ordinal
        self.count = count
        self.valid_range = (0, count)
        if count == 0:
            detail = "document has no entries"
        else:
            detail = f"valid range is [0, {count})"
        super().__init__(f"Entry {ordinal} out of range: {detail}")


class EntryIndex:
    """Read-only view over a document's entries.

    Wraps the entries tuple without copying it.

    Example:
        >>> index = EntryIndex(document)
        >>> index.count()
        3
        >>> index.get(1).request.method
        'POST'
    """

    def __init__(self, document: Document) -> None:
        self._document = document
        self._entries = document.entries

    @property
    def document(self) -> Document:
        return self._document

    def count(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

    def get(self, ordinal: int) -> Entry:
        """Return the entry at a zero-based ordinal.

        Raises:
            EntryOutOfRangeError: If ordinal < 0 or ordinal >= count()
        """
        # Negative ordinals must not wrap around like list indexing does
        if not 0 <= ordinal < len(self._entries):
            raise EntryOutOfRangeError(ordinal, len(self._entries))
        return self._entries[ordinal]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)
