import json
from datetime import date

import pytest

from booklend import serializers
from booklend.book import BookRecord, LoanRecord
from booklend.errors import DecodeError


def test_encode_catalog_shape():
    document = serializers.encode_catalog([BookRecord("978-0", "Dune", "Herbert", "SciFi", 2)])
    assert document == {
        "978-0": {"title": "Dune", "author": "Herbert", "genre": "SciFi", "available_count": 2}
    }


def test_dumps_keeps_non_ascii():
    text = serializers.dumps_catalog([BookRecord("1", "Niño", "Peña", "Cuento", 1)])
    assert "Niño" in text
    assert text.startswith("{\n  ")


@pytest.mark.parametrize("document, reason", [
    ([], "JSON object"),
    ({"1": "Dune"}, "expected an object"),
    ({"1": {"title": "Dune", "author": "H", "genre": "G"}}, "missing field 'available_count'"),
    ({"1": {"title": "Dune", "author": "H", "genre": "G", "available_count": "2"}}, "must be an integer"),
    ({"1": {"title": "Dune", "author": "H", "genre": "G", "available_count": True}}, "must be an integer"),
    ({"1": {"title": 5, "author": "H", "genre": "G", "available_count": 2}}, "'title' must be a string"),
    ({"": {"title": "Dune", "author": "H", "genre": "G", "available_count": 2}}, "non-empty"),
])
def test_decode_catalog_rejects(document, reason):
    with pytest.raises(DecodeError, match=reason):
        serializers.decode_catalog(document)


def test_encode_ledger_date_format():
    document = serializers.encode_ledger([LoanRecord("1", "Ana", date(2024, 3, 7))])
    assert document == [{"isbn": "1", "borrower": "Ana", "date": "2024-03-07"}]


@pytest.mark.parametrize("text", ["2024-3-7", "20240307", "07/03/2024", "2024-02-30", "2024-03-07T10:00", "2024-03-07\n", ""])
def test_parse_date_is_strict(text):
    with pytest.raises(DecodeError):
        serializers.parse_date(text)


def test_parse_date_non_string():
    with pytest.raises(DecodeError):
        serializers.parse_date(20240307)


@pytest.mark.parametrize("item, reason", [
    ("1", "expected an object"),
    ({"borrower": "Ana", "date": "2024-01-01"}, "missing field 'isbn'"),
    ({"isbn": "1", "borrower": "", "date": "2024-01-01"}, "'borrower' must not be empty"),
    ({"isbn": "1", "borrower": "Ana"}, "missing field 'date'"),
])
def test_decode_ledger_rejects(item, reason):
    with pytest.raises(DecodeError, match=reason):
        serializers.decode_ledger([item])


def test_decode_ledger_null_is_empty():
    assert serializers.loads_ledger("null") == []


def test_decode_ledger_rejects_object():
    with pytest.raises(DecodeError, match="JSON array"):
        serializers.loads_ledger(json.dumps({"isbn": "1"}))


def test_invalid_json():
    with pytest.raises(DecodeError, match="invalid JSON"):
        serializers.loads_catalog("{\"1\": ")
