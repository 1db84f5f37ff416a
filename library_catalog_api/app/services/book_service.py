"""
Service layer for the book catalog.

``BookService`` orchestrates the validators, the search resolver and
the repository for the six catalog use cases: add, list (paginated),
get by id, search, update and delete.  Every failure is raised as a
``BookError``; the API layer turns it into an error envelope.

Validation failures while adding a book are re-raised as a single
``BOOK_CREATION`` error that carries the original message.  Storage
failures surface as ``INTERNAL`` so that ``NOT_FOUND`` always means the
book really is absent.  Errors from the other use cases name the
operation, e.g. "Error Occurred while retrieving Book: ...".
"""

from __future__ import annotations

import dataclasses
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..core.exceptions import VALIDATION_KINDS, BookError, ErrorKind
from ..models.book import Book
from ..repositories.base import BookRepository
from ..repositories.book_repository import SQLiteBookRepository
from ..schemas.book import BookRequest, BookResponse, PaginatedBookResponse
from .book_validator import BookValidator
from .search_resolver import resolve_search

logger = logging.getLogger(__name__)


@contextmanager
def _operation_errors(action: str, prefix: bool = True) -> Iterator[None]:
    """Name the failed operation in errors raised inside the block.

    Database failures become ``INTERNAL``.  A ``BookError`` keeps its
    kind and, when ``prefix`` is set, gets the operation prepended to
    its message.
    """
    try:
        yield
    except BookError as exc:
        if not prefix:
            raise
        raise BookError(exc.kind, f"Error Occurred while {action}: {exc.message}") from exc
    except sqlite3.Error as exc:
        logger.error("Storage error while %s: %s", action, exc)
        raise BookError(ErrorKind.INTERNAL, f"Error Occurred while {action}: {exc}") from exc


class BookService:
    """Use cases of the book catalog."""

    def __init__(self, repository: Optional[BookRepository] = None) -> None:
        self.repository = repository or SQLiteBookRepository()
        self.validator = BookValidator

    async def add_book(self, data: BookRequest) -> BookResponse:
        """Validate ``data`` and persist it as a new book.

        Validation order: required title, required author, unique
        title, title format, author format, publication year.  The
        first failure aborts before anything is written.
        """
        try:
            with _operation_errors("adding new book", prefix=False):
                self.validator.require_title(data.title)
                self.validator.require_author(data.author)
                self.validator.check_title_unique(data.title, self.repository)
                self.validator.validate_title(data.title)
                self.validator.validate_author(data.author)
                self.validator.validate_publication_year(data.publication_year)
                book = self.repository.save(
                    Book(
                        title=data.title,
                        author=data.author,
                        isbn=data.isbn,
                        quantity=data.quantity,
                        publication_year=data.publication_year,
                    )
                )
        except BookError as exc:
            if exc.kind not in VALIDATION_KINDS:
                raise
            raise BookError(
                ErrorKind.BOOK_CREATION,
                f"Error Occurred while Adding New Book: {exc.message}",
            ) from exc
        logger.info("New Book saved successfully with id %s", book.id)
        return self._to_response(book)

    async def list_books(self, page_no: int, page_size: int) -> PaginatedBookResponse:
        """Return page ``page_no`` (zero based) of ``page_size`` books."""
        if page_no < 0 or page_size <= 0:
            raise BookError(
                ErrorKind.INVALID_PAGINATION,
                "Page number must not be negative and page size must be positive",
            )
        with _operation_errors("retrieving Book List"):
            page = self.repository.find_page(page_no, page_size)
        logger.info("Book List successfully retrieved with Pagination")
        return PaginatedBookResponse(
            contents=[self._to_response(book) for book in page.items],
            page_element_count=page.number_of_elements,
            page_size=page.size,
        )

    async def get_book(self, book_id: int) -> BookResponse:
        with _operation_errors("retrieving Book"):
            book = self.repository.find_by_id(book_id)
            if book is None:
                logger.error("Book with id %s does not exist", book_id)
                raise BookError(ErrorKind.NOT_FOUND, f"Book with id {book_id} does not exist")
        return self._to_response(book)

    async def search_books(self, query: str, year_lookup: bool = True) -> List[BookResponse]:
        """Search by publication year or by title/author/ISBN fragment."""
        try:
            with _operation_errors("searching Book"):
                books = resolve_search(query, self.repository, year_lookup=year_lookup)
        except BookError as exc:
            logger.error("Error while searching Book: %s", exc.message)
            raise
        logger.info("Book successfully retrieved from search text: %s", query)
        return [self._to_response(book) for book in books]

    async def update_book(self, book_id: int, data: BookRequest) -> BookResponse:
        """Apply the fields present in ``data`` to book ``book_id``.

        Title, author and publication year are validated before they
        overwrite the stored values; ISBN and quantity are copied as
        given.  Nothing is written if any check fails.
        """
        with _operation_errors("updating Book"):
            existing = self.repository.find_by_id(book_id)
            if existing is None:
                logger.error("Book with id %s not found and cannot be updated", book_id)
                raise BookError(
                    ErrorKind.NOT_FOUND,
                    f"Book with id {book_id} not found and cannot be updated",
                )

            updated = dataclasses.replace(existing)
            if data.title is not None:
                self.validator.check_title_unique(data.title, self.repository, exclude_id=book_id)
                self.validator.validate_title(data.title)
                updated.title = data.title
            if data.author is not None:
                self.validator.validate_author(data.author)
                updated.author = data.author
            if data.isbn is not None:
                updated.isbn = data.isbn
            if data.publication_year is not None:
                self.validator.validate_publication_year(data.publication_year)
                updated.publication_year = data.publication_year
            if data.quantity is not None:
                updated.quantity = data.quantity

            saved = self.repository.save(updated)
        logger.info("Book successfully updated with id %s", book_id)
        return self._to_response(saved)

    async def delete_book(self, book_id: int) -> None:
        """Delete book ``book_id``; deleting a missing book is not an error."""
        with _operation_errors("deleting Book"):
            self.repository.delete_by_id(book_id)
        logger.info("Book successfully deleted with id: %s", book_id)

    @staticmethod
    def _to_response(book: Book) -> BookResponse:
        return BookResponse.model_validate(book)
