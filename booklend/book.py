from __future__ import annotations

from dataclasses import dataclass
import datetime


@dataclass
class BookRecord:
    """A single title in the catalog and how many copies are on the shelf."""

    isbn: str
    title: str
    author: str
    genre: str
    available_count: int = 0

    def to_dict(self) -> dict:
        return {
            "isbn": self.isbn,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "available_count": self.available_count,
        }


@dataclass(frozen=True)
class LoanRecord:
    """One loan event. Loans are never edited once written."""

    isbn: str
    borrower: str
    date: datetime.date

    def to_dict(self) -> dict:
        return {
            "isbn": self.isbn,
            "borrower": self.borrower,
            "date": self.date.isoformat(),
        }
