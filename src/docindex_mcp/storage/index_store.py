"""Immutable in-memory store of search index records."""

import logging
from collections import Counter
from typing import Any, Callable, Iterator

from ..parser.records import Record, parse_records, record_to_dict

logger = logging.getLogger(__name__)


class RecordView:
    """Lazy, restartable filtered view over a record tuple.

    Each iteration re-scans the underlying records, so a view can be
    iterated any number of times and always yields the same sequence.
    """

    def __init__(self, records: tuple[Record, ...], predicate: Callable[[Record], bool]):
        self._records = records
        self._predicate = predicate

    def __iter__(self) -> Iterator[Record]:
        return (r for r in self._records if self._predicate(r))

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"RecordView({list(self)!r})"


class IndexStore:
    """Read-only collection of documentation fragments in document order."""

    __slots__ = ("_records",)

    def __init__(self, records: tuple[Record, ...] = ()):
        self._records = tuple(records)

    @classmethod
    def load(cls, source: Any) -> "IndexStore":
        """Parse ``{"docs": [...]}`` or a bare record list into a store.

        Raises:
            ParseError: If the input is malformed. No store is created.
        """
        records = parse_records(source)
        logger.debug("Loaded index with %d records", len(records))
        return cls(records)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexStore):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"IndexStore({len(self._records)} records)"

    def search(self, query: str) -> RecordView:
        """Records whose title or text contains query, case-insensitive.

        An empty query matches every record.
        """
        query_folded = query.casefold()
        return RecordView(self._records, lambda r: r.matches(query_folded))

    def by_category(self, category: str) -> RecordView:
        """Records with an exact category match."""
        return RecordView(self._records, lambda r: r.category == category)

    def by_page(self, page: str) -> RecordView:
        """Records with an exact page match."""
        return RecordView(self._records, lambda r: r.page == page)

    def pages(self) -> list[str]:
        """Distinct page names in first-seen order."""
        return list(dict.fromkeys(r.page for r in self._records))

    def categories(self) -> dict[str, int]:
        """Record count per category in first-seen order."""
        return dict(Counter(r.category for r in self._records))

    def to_dict(self) -> dict:
        """Convert back to the generator's structural form."""
        return {"docs": [record_to_dict(r) for r in self._records]}
