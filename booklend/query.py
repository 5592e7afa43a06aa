"""Substring search over book records.

Catalogs are small, so every query is a linear scan followed by a stable
sort on the searched field. Equal keys keep catalog insertion order.
"""

from typing import Iterable, List

from booklend.book import BookRecord
from booklend.errors import ValidationError

SEARCH_FIELDS = ("title", "author", "genre")


def check_field(field: str) -> str:
    if field not in SEARCH_FIELDS:
        raise ValidationError(
            f"Unknown search field '{field}'. Use one of: {', '.join(SEARCH_FIELDS)}."
        )
    return field


def matches(record: BookRecord, field: str, term: str) -> bool:
    """Case-insensitive substring test. An empty term matches every record."""
    value: str = getattr(record, field)
    return term.casefold() in value.casefold()


def sort_by(records: Iterable[BookRecord], field: str) -> List[BookRecord]:
    check_field(field)
    return sorted(records, key=lambda r: getattr(r, field))


def search(records: Iterable[BookRecord], field: str, term: str) -> List[BookRecord]:
    check_field(field)
    term = term or ""
    return sort_by((r for r in records if matches(r, field, term)), field)
