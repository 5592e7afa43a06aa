import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from booklend import query, serializers, storage
from booklend.book import BookRecord
from booklend.errors import DecodeError, LibraryError, NotFoundError, OutOfStockError, StorageError

logger = logging.getLogger(__name__)


class CatalogStore:
    """Owns the ISBN -> BookRecord mapping and its JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._books: Dict[str, BookRecord] = {}

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, isbn: object) -> bool:
        return isbn in self._books

    # ------------------------- Core operations ------------------------- #
    def upsert(self, record: BookRecord) -> None:
        """Insert or replace the book with the same ISBN. Last write wins."""
        if record.isbn in self._books:
            logger.info(f"Replacing catalog entry for ISBN {record.isbn}")
        self._books[record.isbn] = record

    def get(self, isbn: str) -> Optional[BookRecord]:
        return self._books.get(isbn)

    def decrement_stock(self, isbn: str) -> BookRecord:
        book = self._books.get(isbn)
        if book is None:
            raise NotFoundError(isbn)
        if book.available_count <= 0:
            raise OutOfStockError(isbn)
        book.available_count -= 1
        return book

    def list_all(self) -> List[BookRecord]:
        return query.sort_by(self._books.values(), "title")

    def search(self, field: str, term: str) -> List[BookRecord]:
        return query.search(self._books.values(), field, term)

    # ------------------------- Persistence ------------------------- #
    def save(self) -> None:
        """Write the whole catalog. Raises StorageError on failure."""
        storage.write_text(self.path, serializers.dumps_catalog(self._books.values()))
        logger.info(f"Saved {len(self._books)} books to {self.path}")

    def load(self) -> Optional[LibraryError]:
        """Replace the in-memory catalog with the file's contents.

        A missing file leaves the catalog empty. A file that cannot be read
        or decoded is logged, the catalog is reset to empty and the error is
        returned so the caller can show it.
        """
        self._books = {}
        try:
            text = storage.read_text(self.path)
            if text is None:
                return None
            records = serializers.loads_catalog(text)
        except (DecodeError, StorageError) as exc:
            logger.error(f"Could not load catalog from {self.path}: {exc}")
            return exc

        self._books = {r.isbn: r for r in records}
        logger.info(f"Loaded {len(self._books)} books from {self.path}")
        return None
