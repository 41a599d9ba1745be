"""Record dataclass, ParseError, and record decoding."""

from dataclasses import dataclass
from typing import Any, Optional

REQUIRED_FIELDS = ("location", "page", "category")
OPTIONAL_FIELDS = ("title", "text")


class ParseError(ValueError):
    """Raised when input cannot be decoded into search index records."""

    def __init__(self, message: str, index: Optional[int] = None, field: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.field = field


@dataclass(frozen=True)
class Record:
    """One indexed documentation fragment."""
    location: str                   # URL anchor, e.g. "manual/deqs/#Standard-Models"
    page: str                       # Human-readable page name
    category: str                   # "section" | "page" | "type" (open set)
    title: str = ""                 # Section or symbol title
    text: str = ""                  # Body text, empty for structural separators

    def matches(self, query_folded: str) -> bool:
        """Case-insensitive substring match on title or text.

        query_folded must already be passed through str.casefold().
        """
        return query_folded in self.title.casefold() or query_folded in self.text.casefold()


def record_from_dict(data: Any, index: int = 0) -> Record:
    """Decode a single record mapping.

    Args:
        data: Mapping with location/page/title/text/category keys.
        index: Position in the source sequence, used in error messages.

    Returns:
        Record object.

    Raises:
        ParseError: If data is not a mapping, a required field is missing,
            or a field holds a non-string value.
    """
    if not isinstance(data, dict):
        raise ParseError(
            f"Record {index}: expected an object, got {type(data).__name__}",
            index=index,
        )

    values = {}
    for key in REQUIRED_FIELDS:
        if data.get(key) is None:
            raise ParseError(f"Record {index}: missing required field '{key}'", index=index, field=key)
        values[key] = data[key]
    for key in OPTIONAL_FIELDS:
        values[key] = data.get(key, "")

    for key, value in values.items():
        if not isinstance(value, str):
            raise ParseError(
                f"Record {index}: field '{key}' must be a string, got {type(value).__name__}",
                index=index,
                field=key,
            )

    return Record(**values)


def record_to_dict(record: Record) -> dict:
    """Convert Record to the generator's object form."""
    return {
        "location": record.location,
        "page": record.page,
        "title": record.title,
        "text": record.text,
        "category": record.category,
    }


def parse_records(source: Any) -> tuple[Record, ...]:
    """Decode a whole record collection.

    Accepts ``{"docs": [...]}`` or a bare list. Every record is decoded
    before anything is returned, so a bad record fails the whole call.
    """
    if isinstance(source, dict):
        if "docs" not in source:
            raise ParseError("Missing top-level 'docs' array")
        docs = source["docs"]
    else:
        docs = source

    if not isinstance(docs, list):
        raise ParseError(f"Expected an array of records, got {type(docs).__name__}")

    return tuple(record_from_dict(item, i) for i, item in enumerate(docs))
