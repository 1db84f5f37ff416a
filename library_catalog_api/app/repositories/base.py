"""Base repository interface for the book catalog."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.book import Book, BookPage


class BookRepository(ABC):
    """
    Persistence abstraction used by the service layer.

    The service never touches SQL directly; any storage that honours
    this contract (SQLite, another RDBMS, an in-memory fake) can be
    plugged in.
    """

    @abstractmethod
    def find_by_title_case_insensitive(self, title: str) -> Optional[Book]:
        """Return the book whose title equals ``title`` ignoring case."""

    @abstractmethod
    def exists_by_publication_year(self, year: int) -> bool:
        """Return True if at least one book was published in ``year``."""

    @abstractmethod
    def find_all_by_publication_year(self, year: int) -> List[Book]:
        """Return every book published in ``year``."""

    @abstractmethod
    def search_by_substring(
        self,
        title: Optional[str],
        author: Optional[str],
        isbn: Optional[str],
    ) -> List[Book]:
        """Case-insensitive substring search, OR-ed across non-None arguments."""

    @abstractmethod
    def find_by_id(self, book_id: int) -> Optional[Book]:
        """Get book by ID."""

    @abstractmethod
    def find_page(self, page_no: int, page_size: int) -> BookPage:
        """Return page ``page_no`` (zero based) of ``page_size`` books."""

    @abstractmethod
    def save(self, book: Book) -> Book:
        """Insert the book when it has no id, update it otherwise."""

    @abstractmethod
    def delete_by_id(self, book_id: int) -> None:
        """Delete book by ID.  Deleting a missing id is a no-op."""
