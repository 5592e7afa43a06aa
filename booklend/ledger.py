import logging
from pathlib import Path
from typing import List, Optional, Union

from booklend import serializers, storage
from booklend.book import LoanRecord
from booklend.errors import DecodeError, LibraryError, StorageError

logger = logging.getLogger(__name__)


class LoanLedger:
    """Append-only history of loans, kept in insertion order."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._loans: List[LoanRecord] = []

    def __len__(self) -> int:
        return len(self._loans)

    def append(self, record: LoanRecord) -> None:
        self._loans.append(record)

    def list_all(self) -> List[LoanRecord]:
        return list(self._loans)

    def for_isbn(self, isbn: str) -> List[LoanRecord]:
        return [loan for loan in self._loans if loan.isbn == isbn]

    def save(self) -> None:
        storage.write_text(self.path, serializers.dumps_ledger(self._loans))
        logger.info(f"Saved {len(self._loans)} loans to {self.path}")

    def load(self) -> Optional[LibraryError]:
        """Same contract as CatalogStore.load."""
        self._loans = []
        try:
            text = storage.read_text(self.path)
            if text is None:
                return None
            records = serializers.loads_ledger(text)
        except (DecodeError, StorageError) as exc:
            logger.error(f"Could not load loans from {self.path}: {exc}")
            return exc

        self._loans = records
        logger.info(f"Loaded {len(self._loans)} loans from {self.path}")
        return None
