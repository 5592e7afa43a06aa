import json
import os
from typing import Any, List, Optional

from rich.console import Console
from rich.table import Table

from booklend.book import BookRecord, LoanRecord

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"


def format_book(book: BookRecord) -> str:
    return (
        f"ISBN: {book.isbn} | Title: {book.title} | Author: {book.author} | "
        f"Genre: {book.genre} | Available: {book.available_count}"
    )


def format_loan(loan: LoanRecord) -> str:
    return f"{loan.date.isoformat()} | ISBN: {loan.isbn} | Borrower: {loan.borrower}"


def _books_table(books: List[BookRecord], title: str) -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("ISBN", style="magenta", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Genre", style="white")
    table.add_column("Available", justify="right", style="green")
    for b in books:
        table.add_row(b.isbn, b.title, b.author, b.genre, str(b.available_count))
    return table


def print_books(books: List[BookRecord], empty_message: str = "No books in library.",
                title: str = "📚 Books", heading: Optional[str] = None,
                console: Optional[Console] = None) -> None:
    """Print books in the current output mode.
    - plain: one 'ISBN: ... | Available: n' line per book
    - json: JSON array of book objects
    - rich: Rich table
    """
    mode = get_output_mode()
    console = console or _console

    if not books:
        print(empty_message)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        console.print(_books_table(books, title))
    else:
        if heading:
            print(heading)
        for b in books:
            print(format_book(b))


def print_search_results(books: List[BookRecord], field: str, console: Optional[Console] = None) -> None:
    print_books(
        books,
        empty_message=f"No books found with that {field}.",
        title=f"🔎 Search results ({len(books)} found)",
        heading=f"Search results ({len(books)} found):",
        console=console,
    )


def print_loans(loans: List[LoanRecord], console: Optional[Console] = None) -> None:
    mode = get_output_mode()
    console = console or _console

    if not loans:
        print("No loans recorded.")
        return

    if mode == "json":
        print(json.dumps([loan.to_dict() for loan in loans], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📖 Loans", show_lines=True, header_style="bold cyan")
        table.add_column("Date", style="white", no_wrap=True)
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Borrower", style="white")
        for loan in loans:
            table.add_row(loan.date.isoformat(), loan.isbn, loan.borrower)
        console.print(table)
    else:
        for loan in loans:
            print(format_loan(loan))


def print_storage_errors(errors: List[Any]) -> None:
    for err in errors:
        print(f"Warning: could not save data: {err}")
