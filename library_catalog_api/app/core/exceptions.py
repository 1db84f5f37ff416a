"""
Error type shared by the catalog service layer.

Every failure the service reports is a ``BookError`` tagged with an
``ErrorKind``.  The API layer maps kinds to HTTP status codes in one
place (``HTTP_STATUS_BY_KIND``) instead of catching a family of
exception classes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    TITLE_REQUIRED = "title_required"
    AUTHOR_REQUIRED = "author_required"
    INVALID_TITLE = "invalid_title"
    INVALID_AUTHOR = "invalid_author"
    INVALID_PUBLICATION_YEAR = "invalid_publication_year"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    BOOK_CREATION = "book_creation"
    INVALID_PAGINATION = "invalid_pagination"
    INTERNAL = "internal"


# Kinds raised by field validation; Add re-wraps these as BOOK_CREATION.
VALIDATION_KINDS = frozenset(
    {
        ErrorKind.TITLE_REQUIRED,
        ErrorKind.AUTHOR_REQUIRED,
        ErrorKind.INVALID_TITLE,
        ErrorKind.INVALID_AUTHOR,
        ErrorKind.INVALID_PUBLICATION_YEAR,
        ErrorKind.ALREADY_EXISTS,
    }
)

HTTP_STATUS_BY_KIND = {
    ErrorKind.TITLE_REQUIRED: 400,
    ErrorKind.AUTHOR_REQUIRED: 400,
    ErrorKind.INVALID_TITLE: 400,
    ErrorKind.INVALID_AUTHOR: 400,
    ErrorKind.INVALID_PUBLICATION_YEAR: 400,
    ErrorKind.INVALID_PAGINATION: 400,
    ErrorKind.BOOK_CREATION: 400,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class BookError(Exception):
    """A catalog operation failed.

    ``kind`` identifies the failure; ``message`` is the human readable
    text returned to API clients.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND.get(self.kind, 500)

    def __repr__(self) -> str:
        return f"BookError({self.kind.value!r}, {self.message!r})"
