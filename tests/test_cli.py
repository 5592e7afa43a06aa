import json
from datetime import date

import pytest
from typer.testing import CliRunner

from booklend import main
from booklend.main import app
from booklend.prompts import InputValidator

runner = CliRunner()


def test_list_no_books(settings):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No books in library." in result.stdout


def test_add_then_list(settings):
    result = runner.invoke(app, ["add", "978-0", "Dune", "Herbert", "SciFi", "2"])
    assert result.exit_code == 0
    assert "Book added: Dune (978-0)" in result.stdout
    assert settings.catalog_path.exists()

    result = runner.invoke(app, ["list"])
    assert "ISBN: 978-0 | Title: Dune | Author: Herbert | Genre: SciFi | Available: 2" in result.stdout


def test_add_negative_count(settings):
    result = runner.invoke(app, ["add", "1", "T", "A", "G", "--", "-1"])
    assert result.exit_code == 1
    assert "Available count cannot be negative." in result.stdout


def test_loan_flow(settings):
    runner.invoke(app, ["add", "978-0", "Dune", "Herbert", "SciFi", "1"])

    result = runner.invoke(app, ["loan", "978-0", "Alice", "2024-01-01"])
    assert result.exit_code == 0
    assert "Copies left: 0" in result.stdout

    result = runner.invoke(app, ["loan", "978-0", "Bob", "2024-01-02"])
    assert result.exit_code == 1
    assert "No copies of ISBN 978-0 are available." in result.stdout

    result = runner.invoke(app, ["--output", "json", "loans"])
    assert json.loads(result.stdout) == [{"isbn": "978-0", "borrower": "Alice", "date": "2024-01-01"}]


def test_loan_unknown_book(settings):
    result = runner.invoke(app, ["loan", "missing", "Alice", "2024-01-01"])
    assert result.exit_code == 1
    assert "Book with ISBN missing not found." in result.stdout


def test_loan_rejects_bad_date(settings):
    result = runner.invoke(app, ["loan", "1", "Alice", "01/01/2024"])
    assert result.exit_code != 0


def test_search_by_author(settings):
    runner.invoke(app, ["add", "1", "Emma", "Jane Austen", "Classic", "1"])
    runner.invoke(app, ["add", "2", "Dune", "Frank Herbert", "SciFi", "1"])

    result = runner.invoke(app, ["search", "austen", "--by", "author"])
    assert result.exit_code == 0
    assert "Search results (1 found):" in result.stdout
    assert "Emma" in result.stdout
    assert "Dune" not in result.stdout


def test_search_unknown_field(settings):
    result = runner.invoke(app, ["search", "x", "--by", "isbn"])
    assert result.exit_code == 1
    assert "Unknown search field" in result.stdout


def test_corrupt_catalog_is_reported(settings):
    settings.catalog_path.parent.mkdir(parents=True)
    settings.catalog_path.write_text("not json", encoding="utf-8")

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "Error loading data:" in result.stdout
    assert "No books in library." in result.stdout


class FakePrompts:
    def __init__(self, answers):
        self.answers = list(answers)

    def _next(self, *args, **kwargs):
        return self.answers.pop(0)

    read_text = read_int = read_date = _next


def test_menu_session(lib, monkeypatch, capsys):
    choices = iter(["1", "", "2", "", "3", "", "3", "", "4", "", "5", "", "6", "", "7"])
    monkeypatch.setattr(main.Prompt, "ask", lambda *args, **kwargs: next(choices))
    prompts = FakePrompts([
        "978-0", "Dune", "Herbert", "SciFi", 1,      # add book
        "978-0", "Alice", date(2024, 1, 1),          # loan
        "978-0",                                     # loan rejected: no stock
        "dun",                                       # search by title
        "HERB",                                      # search by author
        "",                                          # search by genre
    ])

    main.run_menu(service=lib, prompts=prompts)

    assert prompts.answers == []
    assert lib.find_book("978-0").available_count == 0
    assert [l.borrower for l in lib.list_loans()] == ["Alice"]
    out = capsys.readouterr().out
    assert "Dune" in out
    assert "No books found" not in out


@pytest.mark.parametrize("text, expected", [
    ("2024-01-31", date(2024, 1, 31)),
    (" 2024-01-31 ", date(2024, 1, 31)),
    ("31-01-2024", None),
    (None, None),
])
def test_input_validator_dates(text, expected):
    assert InputValidator.parse_date(text) == expected


def test_input_validator_range():
    assert InputValidator.in_range(0, minimum=0)
    assert not InputValidator.in_range(-1, minimum=0)
    assert not InputValidator.in_range(8, 1, 7)
    assert not InputValidator.is_present("   ")
