import sys
from datetime import datetime
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from booklend.config import Settings, configure_logging
from booklend.errors import LibraryError
from booklend.library import LibraryService
from booklend.prompts import ConsolePrompts
from booklend.query import SEARCH_FIELDS
from booklend.ui_helpers import (
    print_books,
    print_loans,
    print_search_results,
    print_storage_errors,
    set_output_mode,
)

console = Console()


def open_service(settings: Optional[Settings] = None) -> LibraryService:
    """Load the catalog and ledger, reporting unreadable files."""
    settings = settings or Settings()
    configure_logging(settings)
    service = LibraryService.from_settings(settings)
    for err in service.load_errors:
        print(f"Error loading data: {err}")
    return service


# --- Typer CLI Application ---
app = typer.Typer(help="Library catalog and loans")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("add")
def cli_add(
    isbn: str,
    title: str,
    author: str,
    genre: str,
    count: int = typer.Argument(..., help="Available copies"),
):
    """Add a book, replacing any book with the same ISBN."""
    service = open_service()
    try:
        result = service.add_book(isbn, title, author, genre, count)
    except LibraryError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print_storage_errors(result.storage_errors)
    print(f"Book added: {title} ({isbn})")


@app.command("list")
def cli_list():
    """List every book ordered by title."""
    service = open_service()
    print_books(service.list_books())


@app.command("loan")
def cli_loan(
    isbn: str,
    borrower: str,
    date: datetime = typer.Argument(..., formats=["%Y-%m-%d"], help="Loan date (YYYY-MM-DD)"),
):
    """Lend one copy of a book."""
    service = open_service()
    try:
        result = service.register_loan(isbn, borrower, date.date())
    except LibraryError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print_storage_errors(result.storage_errors)
    book = service.find_book(isbn)
    print(f"Loan registered: {isbn} -> {borrower}. Copies left: {book.available_count}")


@app.command("search")
def cli_search(
    term: str = typer.Argument("", help="Search term (empty matches everything)"),
    by: str = typer.Option("title", "--by", "-b", help=f"Field to search: {', '.join(SEARCH_FIELDS)}"),
):
    """Case-insensitive substring search on one field."""
    service = open_service()
    try:
        books = service.search(by, term)
    except LibraryError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    print_search_results(books, by)


@app.command("loans")
def cli_loans(isbn: Optional[str] = typer.Option(None, "--isbn", help="Only loans of this ISBN")):
    """Show the loan ledger in the order loans were recorded."""
    service = open_service()
    print_loans(service.list_loans(isbn))


# --- Interactive menu ---
def add_book(service: LibraryService, prompts: ConsolePrompts) -> None:
    console.print("\n[bold]--- Add Book ---[/]")
    isbn = prompts.read_text("ISBN")
    title = prompts.read_text("Title")
    author = prompts.read_text("Author")
    genre = prompts.read_text("Genre")
    count = prompts.read_int("Available copies", minimum=0)
    try:
        result = service.add_book(isbn, title, author, genre, count)
    except LibraryError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return
    _report_storage(result.storage_errors)
    console.print(Panel.fit(f"[green]Book added:[/] [bold]{escape(title)}[/] ({escape(isbn)})",
                            title="✅ Success", border_style="green"))


def list_books(service: LibraryService) -> None:
    books = service.list_books()
    if not books:
        console.print("[yellow]No books registered.[/]")
        return
    print_books(books, title="📚 Catalog", console=console)


def register_loan(service: LibraryService, prompts: ConsolePrompts) -> None:
    console.print("\n[bold]--- Register Loan ---[/]")
    isbn = prompts.read_text("Book ISBN")

    # fail fast before asking for the remaining fields
    book = service.find_book(isbn)
    if book is None:
        console.print("[bold red]Error:[/] Book not found.")
        return
    if book.available_count <= 0:
        console.print("[bold red]Error:[/] No copies available.")
        return

    borrower = prompts.read_text("Borrower name")
    loan_date = prompts.read_date("Date (YYYY-MM-DD)")
    try:
        result = service.register_loan(isbn, borrower, loan_date)
    except LibraryError as e:
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return
    _report_storage(result.storage_errors)
    console.print(Panel.fit(
        f"[green]Loan registered:[/] [bold]{escape(book.title)}[/] -> {escape(borrower)}\n"
        f"[bold]Copies left:[/] {book.available_count}",
        title="✅ Success", border_style="green"))


def search(service: LibraryService, prompts: ConsolePrompts, field: str) -> None:
    console.print(f"\n[bold]--- Search by {field} ---[/]")
    term = prompts.read_text("Search term", required=False)
    books = service.search(field, term)
    if not books:
        console.print(f"[yellow]🔍 No books found with that {field}.[/]")
        return
    print_search_results(books, field, console=console)


def _report_storage(errors) -> None:
    for err in errors:
        console.print(f"[bold yellow]Could not save data:[/] {escape(str(err))}")


def run_menu(service: Optional[LibraryService] = None, prompts: Optional[ConsolePrompts] = None) -> None:
    """Simple interactive menu for the library CLI."""
    settings = Settings()
    if service is None:
        configure_logging(settings)
        service = LibraryService.from_settings(settings)
    prompts = prompts or ConsolePrompts(console)
    set_output_mode("rich")

    def render_menu() -> None:
        menu_items = [
            ("1", "Add book", "➕"),
            ("2", "List all books", "📚"),
            ("3", "Register loan", "📖"),
            ("4", "Search by title", "🔎"),
            ("5", "Search by author", "✍️"),
            ("6", "Search by genre", "🏷️"),
            ("7", "Exit", "🚪"),
        ]

        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        console.print(Panel(table, title=settings.app_name, border_style="cyan",
                            box=box.HEAVY, padding=(1, 2)))

    for err in service.load_errors:
        console.print(f"[bold red]Error loading data:[/] {escape(str(err))}")

    while True:
        render_menu()
        choice = Prompt.ask("Select an option", choices=["1", "2", "3", "4", "5", "6", "7"],
                            console=console).strip()

        if choice == "1":
            add_book(service, prompts)
        elif choice == "2":
            list_books(service)
        elif choice == "3":
            register_loan(service, prompts)
        elif choice == "4":
            search(service, prompts, "title")
        elif choice == "5":
            search(service, prompts, "author")
        elif choice == "6":
            search(service, prompts, "genre")
        elif choice == "7":
            console.print("[green]Exiting the system...[/]")
            break

        Prompt.ask("\nPress Enter to continue", default="", show_default=False, console=console)
        console.clear()


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        run_menu()


if __name__ == "__main__":
    main()
