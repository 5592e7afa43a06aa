import datetime
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from booklend.book import BookRecord, LoanRecord
from booklend.catalog import CatalogStore
from booklend.config import Settings
from booklend.errors import LibraryError, NotFoundError, OutOfStockError, StorageError, ValidationError
from booklend.ledger import LoanLedger

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of a mutating operation.

    The in-memory change always stands; ``storage_errors`` lists the file
    writes that failed afterwards.
    """
    record: Union[BookRecord, LoanRecord]
    storage_errors: List[StorageError] = field(default_factory=list)

    @property
    def persisted(self) -> bool:
        return not self.storage_errors


class LibraryService:
    """Adds books, registers loans and answers catalog queries."""

    def __init__(self, catalog: CatalogStore, ledger: LoanLedger) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.load_errors: List[LibraryError] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "LibraryService":
        """Build both stores from the configured paths and load them."""
        service = cls(CatalogStore(settings.catalog_path), LoanLedger(settings.ledger_path))
        service.load()
        return service

    def load(self) -> List[LibraryError]:
        self.load_errors = [
            err for err in (self.catalog.load(), self.ledger.load()) if err is not None
        ]
        return self.load_errors

    # ------------------------- Core operations ------------------------- #
    def add_book(self, isbn: str, title: str, author: str, genre: str, count: int) -> OperationResult:
        """Add a book, replacing any existing book with the same ISBN."""
        isbn = self._require_text(isbn, "ISBN")
        # bool is an int subclass; True is not a copy count
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError("Available count must be an integer.")
        if count < 0:
            raise ValidationError("Available count cannot be negative.")

        book = BookRecord(isbn=isbn, title=title, author=author, genre=genre, available_count=count)
        self.catalog.upsert(book)
        result = OperationResult(record=book)
        self._persist(self.catalog, "catalog", result)
        return result

    def register_loan(self, isbn: str, borrower: str, date: datetime.date) -> OperationResult:
        """Lend one copy of ``isbn`` to ``borrower``.

        Raises NotFoundError or OutOfStockError without touching any state.
        On success the catalog is written first, then the ledger.
        """
        isbn = self._require_text(isbn, "ISBN")
        borrower = self._require_text(borrower, "Borrower")
        if isinstance(date, datetime.datetime):
            date = date.date()
        if not isinstance(date, datetime.date):
            raise ValidationError("Loan date must be a calendar date.")

        book = self.catalog.get(isbn)
        if book is None:
            raise NotFoundError(isbn)
        if book.available_count <= 0:
            raise OutOfStockError(isbn)

        self.catalog.decrement_stock(isbn)
        loan = LoanRecord(isbn=isbn, borrower=borrower, date=date)
        self.ledger.append(loan)
        logger.info(f"Loan registered: {isbn} -> {borrower} on {date.isoformat()}")

        result = OperationResult(record=loan)
        self._persist(self.catalog, "catalog", result)
        self._persist(self.ledger, "ledger", result)
        return result

    # ------------------------- Queries ------------------------- #
    def find_book(self, isbn: str) -> Optional[BookRecord]:
        return self.catalog.get(isbn)

    def list_books(self) -> List[BookRecord]:
        return self.catalog.list_all()

    def search(self, field: str, term: str) -> List[BookRecord]:
        return self.catalog.search(field, term)

    def search_by_title(self, term: str) -> List[BookRecord]:
        return self.search("title", term)

    def search_by_author(self, term: str) -> List[BookRecord]:
        return self.search("author", term)

    def search_by_genre(self, term: str) -> List[BookRecord]:
        return self.search("genre", term)

    def list_loans(self, isbn: Optional[str] = None) -> List[LoanRecord]:
        if isbn:
            return self.ledger.for_isbn(isbn)
        return self.ledger.list_all()

    # ------------------------- Utilities ------------------------- #
    @staticmethod
    def _require_text(value: str, label: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{label} cannot be empty.")
        return value

    @staticmethod
    def _persist(store, name: str, result: OperationResult) -> None:
        try:
            store.save()
        except StorageError as exc:
            logger.error(f"Failed to save {name}: {exc}")
            result.storage_errors.append(exc)
