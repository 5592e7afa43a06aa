"""
JSON codecs for the catalog and loan documents.

Catalog document: an object keyed by ISBN, each value holding
``title``, ``author``, ``genre`` and ``available_count``.

Ledger document: an array of ``{"isbn", "borrower", "date"}`` objects where
``date`` is always ``YYYY-MM-DD``.

Files written by the earlier version of the program used Spanish keys
(``titulo``/``autor``/``genero``/``cantidad`` and ``ISBN``/``Usuario``/``Fecha``).
Those are still accepted when decoding; encoding always uses the English keys.
"""

import datetime
import json
import re
from typing import Any, Dict, Iterable, List

from booklend.book import BookRecord, LoanRecord
from booklend.errors import DecodeError

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# canonical key -> accepted spellings, canonical first
BOOK_KEYS: Dict[str, tuple] = {
    "title": ("title", "titulo"),
    "author": ("author", "autor"),
    "genre": ("genre", "genero"),
    "available_count": ("available_count", "cantidad"),
}
LOAN_KEYS: Dict[str, tuple] = {
    "isbn": ("isbn", "ISBN"),
    "borrower": ("borrower", "usuario", "Usuario"),
    "date": ("date", "fecha", "Fecha"),
}


# ------------------------- Field helpers ------------------------- #
def _pick(obj: Dict[str, Any], key: str, aliases: Dict[str, tuple], where: str) -> Any:
    for name in aliases[key]:
        if name in obj:
            return obj[name]
    raise DecodeError(f"{where}: missing field '{key}'")


def _require_str(value: Any, key: str, where: str, allow_empty: bool = True) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"{where}: field '{key}' must be a string")
    if not allow_empty and not value.strip():
        raise DecodeError(f"{where}: field '{key}' must not be empty")
    return value


def format_date(value: datetime.date) -> str:
    # isoformat always zero pads the year to four digits, strftime("%Y") does not
    return value.isoformat()


def parse_date(text: str) -> datetime.date:
    """Parse a strict ``YYYY-MM-DD`` date.

    ``date.fromisoformat`` alone would also take forms like ``20240101``,
    so the shape is checked first.
    """
    if not isinstance(text, str) or not _DATE_RE.fullmatch(text):
        raise DecodeError(f"invalid date {text!r}, expected YYYY-MM-DD")
    try:
        return datetime.date.fromisoformat(text)
    except ValueError as exc:
        raise DecodeError(f"invalid date {text!r}: {exc}") from exc


# ------------------------- Book codec ------------------------- #
def encode_catalog(records: Iterable[BookRecord]) -> Dict[str, Dict[str, Any]]:
    document: Dict[str, Dict[str, Any]] = {}
    for record in records:
        document[record.isbn] = {
            "title": record.title,
            "author": record.author,
            "genre": record.genre,
            "available_count": record.available_count,
        }
    return document


def decode_book(isbn: Any, data: Any) -> BookRecord:
    where = f"book {isbn!r}"
    if not isinstance(isbn, str) or not isbn.strip():
        raise DecodeError(f"{where}: ISBN key must be a non-empty string")
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")

    count = _pick(data, "available_count", BOOK_KEYS, where)
    # bool is an int subclass; reject it explicitly
    if isinstance(count, bool) or not isinstance(count, int):
        raise DecodeError(f"{where}: field 'available_count' must be an integer")
    if count < 0:
        raise DecodeError(f"{where}: field 'available_count' must not be negative")

    return BookRecord(
        isbn=isbn,
        title=_require_str(_pick(data, "title", BOOK_KEYS, where), "title", where),
        author=_require_str(_pick(data, "author", BOOK_KEYS, where), "author", where),
        genre=_require_str(_pick(data, "genre", BOOK_KEYS, where), "genre", where),
        available_count=count,
    )


def decode_catalog(document: Any) -> List[BookRecord]:
    if not isinstance(document, dict):
        raise DecodeError("catalog document must be a JSON object keyed by ISBN")
    return [decode_book(isbn, data) for isbn, data in document.items()]


# ------------------------- Loan codec ------------------------- #
def encode_ledger(records: Iterable[LoanRecord]) -> List[Dict[str, str]]:
    return [
        {"isbn": r.isbn, "borrower": r.borrower, "date": format_date(r.date)}
        for r in records
    ]


def decode_loan(position: int, data: Any) -> LoanRecord:
    where = f"loan #{position}"
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")
    isbn = _require_str(_pick(data, "isbn", LOAN_KEYS, where), "isbn", where, allow_empty=False)
    borrower = _require_str(_pick(data, "borrower", LOAN_KEYS, where), "borrower", where, allow_empty=False)
    raw_date = _pick(data, "date", LOAN_KEYS, where)
    try:
        loan_date = parse_date(raw_date)
    except DecodeError as exc:
        raise DecodeError(f"{where}: {exc}") from exc
    return LoanRecord(isbn=isbn, borrower=borrower, date=loan_date)


def decode_ledger(document: Any) -> List[LoanRecord]:
    if document is None:
        return []
    if not isinstance(document, list):
        raise DecodeError("ledger document must be a JSON array")
    return [decode_loan(i, item) for i, item in enumerate(document)]


# ------------------------- Text helpers ------------------------- #
def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    except RecursionError as exc:
        raise DecodeError("invalid JSON: document is nested too deeply") from exc


def to_json(document: Any) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def dumps_catalog(records: Iterable[BookRecord]) -> str:
    return to_json(encode_catalog(records))


def loads_catalog(text: str) -> List[BookRecord]:
    return decode_catalog(parse_json(text))


def dumps_ledger(records: Iterable[LoanRecord]) -> str:
    return to_json(encode_ledger(records))


def loads_ledger(text: str) -> List[LoanRecord]:
    return decode_ledger(parse_json(text))
