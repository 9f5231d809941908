"""
In-memory book store for the FastAPI application.

Records live in an ordered list owned by a ``BookStore`` instance. A
record's ``id`` is its position at creation time; deletions shift later
records down without renumbering them, so lookups by id and writes by
position are deliberately separate operations.
"""

from typing import Iterable, List, Optional

import structlog

from api.models import BookResponse

logger = structlog.get_logger(__name__)


class BookStore:
    """Ordered, process-local storage for book records."""

    def __init__(self, books: Optional[Iterable[BookResponse]] = None):
        self._books: List[BookResponse] = list(books or [])

    def __len__(self) -> int:
        return len(self._books)

    def list_books(self) -> List[BookResponse]:
        """Return a snapshot of all records in store order."""
        return list(self._books)

    def next_id(self) -> int:
        """Id the next appended record will receive."""
        return len(self._books)

    def get_book(self, book_id: int) -> Optional[BookResponse]:
        """Find the first record whose ``id`` equals ``book_id``."""
        return next((b for b in self._books if b.id == book_id), None)

    def add_books(self, books: List[BookResponse]) -> List[BookResponse]:
        """Append records in order and return them."""
        self._books.extend(books)
        logger.info("Books added", count=len(books), total=len(self._books))
        return books

    def put_at(self, position: int, book: BookResponse) -> BookResponse:
        """
        Write a record at a list position.

        Overwrites the record at ``position`` when it exists, otherwise
        appends to the end of the store.
        """
        if position < len(self._books):
            self._books[position] = book
        else:
            self._books.append(book)
        logger.debug("Book written", position=position, book_id=book.id)
        return book

    def remove_at(self, position: int) -> Optional[BookResponse]:
        """Remove the record at ``position``; no-op past the end."""
        if position >= len(self._books):
            logger.debug("Nothing to remove", position=position, total=len(self._books))
            return None
        removed = self._books.pop(position)
        logger.info("Book removed", position=position, book_id=removed.id)
        return removed

    def clear(self) -> None:
        """Drop all records."""
        self._books.clear()
