"""
SQLite implementation of the book repository.

All queries use parameterized statements.  Each call opens its own
connection through ``core.db.get_connection`` and closes it before
returning, so the repository holds no state between calls.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from ..core.db import SQLITE_MAX_INTEGER, get_connection
from ..core.exceptions import BookError, ErrorKind
from ..models.book import Book, BookPage
from .base import BookRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, author, isbn, quantity, publication_year, created_at, updated_at"


def _fits_integer(value: int) -> bool:
    """SQLite integers are signed 64-bit; larger ids cannot exist."""
    return -SQLITE_MAX_INTEGER - 1 <= value <= SQLITE_MAX_INTEGER


class SQLiteBookRepository(BookRepository):
    """Book repository backed by the ``books`` table."""

    def find_by_title_case_insensitive(self, title: str) -> Optional[Book]:
        if title is None:
            return None
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE title = ? COLLATE NOCASE",
                (title,),
            ).fetchone()
            return self._row_to_book(row) if row else None
        finally:
            conn.close()

    def exists_by_publication_year(self, year: int) -> bool:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT 1 FROM books WHERE publication_year = ? LIMIT 1",
                (year,),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def find_all_by_publication_year(self, year: int) -> List[Book]:
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE publication_year = ? ORDER BY id",
                (year,),
            ).fetchall()
            return [self._row_to_book(row) for row in rows]
        finally:
            conn.close()

    def search_by_substring(
        self,
        title: Optional[str],
        author: Optional[str],
        isbn: Optional[str],
    ) -> List[Book]:
        # instr() keeps '%' and '_' in the query literal, unlike LIKE.
        clauses: list[str] = []
        params: list = []
        for column, value in (("title", title), ("author", author), ("isbn", isbn)):
            if value is not None:
                clauses.append(f"instr(lower({column}), lower(?)) > 0")
                params.append(value)
        if not clauses:
            return []
        query = f"SELECT {_COLUMNS} FROM books WHERE " + " OR ".join(clauses) + " ORDER BY id"
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
            return [self._row_to_book(row) for row in rows]
        finally:
            conn.close()

    def find_by_id(self, book_id: int) -> Optional[Book]:
        if not _fits_integer(book_id):
            return None
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM books WHERE id = ?",
                (book_id,),
            ).fetchone()
            return self._row_to_book(row) if row else None
        finally:
            conn.close()

    def find_page(self, page_no: int, page_size: int) -> BookPage:
        offset = page_no * page_size
        if not _fits_integer(offset):
            return BookPage(items=[], number_of_elements=0, size=page_size)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM books ORDER BY id LIMIT ? OFFSET ?",
                (min(page_size, SQLITE_MAX_INTEGER), offset),
            ).fetchall()
            items = [self._row_to_book(row) for row in rows]
            return BookPage(items=items, number_of_elements=len(items), size=page_size)
        finally:
            conn.close()

    def save(self, book: Book) -> Book:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if book.id is None:
                cursor.execute(
                    """
                    INSERT INTO books (title, author, isbn, quantity, publication_year)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (book.title, book.author, book.isbn, book.quantity, book.publication_year),
                )
                book_id = cursor.lastrowid
            else:
                cursor.execute(
                    """
                    UPDATE books
                    SET title = ?, author = ?, isbn = ?, quantity = ?, publication_year = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (
                        book.title,
                        book.author,
                        book.isbn,
                        book.quantity,
                        book.publication_year,
                        book.id,
                    ),
                )
                book_id = book.id
            conn.commit()
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,)
            ).fetchone()
            if row is None:
                # Deleted by another request between lookup and update.
                raise BookError(ErrorKind.NOT_FOUND, f"Book with id {book_id} does not exist")
            return self._row_to_book(row)
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "UNIQUE" not in str(exc):
                raise
            logger.error("Unique title constraint rejected '%s': %s", book.title, exc)
            raise BookError(
                ErrorKind.ALREADY_EXISTS,
                f"Book with this title: {book.title} already exists. Please use a different title",
            ) from exc
        finally:
            conn.close()

    def delete_by_id(self, book_id: int) -> None:
        if not _fits_integer(book_id):
            return
        conn = get_connection()
        try:
            cursor = conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            conn.commit()
            if cursor.rowcount:
                logger.debug("Deleted book row %s", book_id)
        finally:
            conn.close()

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> Book:
        """Convert a database row to a ``Book``."""
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            isbn=row["isbn"],
            quantity=row["quantity"],
            publication_year=row["publication_year"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
