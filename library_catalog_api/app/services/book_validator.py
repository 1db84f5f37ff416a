"""
Field validation for book records.

Checks are split in two groups: "required" checks (the value is
present at all) and "well formed" checks (the value satisfies its
constraints).  Each group reports its own ``ErrorKind`` so clients can
tell a missing title from a malformed one.  The uniqueness check is
kept apart because it is the only one that needs the repository.
"""

import logging
import re
from datetime import date
from typing import Optional

from ..core.exceptions import BookError, ErrorKind
from ..repositories.base import BookRepository

logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"[A-Za-z0-9 ]+")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
EARLIEST_PUBLICATION_YEAR = 2001


# str.isspace() accepts these, but they count as content in a name.
_NON_BLANK_SPACES = frozenset("\u00a0\u2007\u202f\u0085")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or all(ch.isspace() and ch not in _NON_BLANK_SPACES for ch in value)


class BookValidator:
    """Stateless validators for book fields."""

    @staticmethod
    def require_title(title: Optional[str]) -> None:
        if _is_blank(title):
            logger.error("Title field is required! and cannot be empty/blank")
            raise BookError(
                ErrorKind.TITLE_REQUIRED,
                "Title field is required! and cannot be empty/blank",
            )

    @staticmethod
    def require_author(author: Optional[str]) -> None:
        if _is_blank(author):
            logger.error("Author field is required! and cannot be empty/blank")
            raise BookError(
                ErrorKind.AUTHOR_REQUIRED,
                "Author field is required! and cannot be empty/blank",
            )

    @staticmethod
    def check_title_unique(
        title: Optional[str],
        repository: BookRepository,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Fail if another book already uses ``title`` (ignoring case).

        ``exclude_id`` lets an update keep its own title.
        """
        existing = repository.find_by_title_case_insensitive(title)
        if existing is not None and existing.id != exclude_id:
            message = f"Book with this title: {title} already exists. Please use a different title"
            logger.error(message)
            raise BookError(ErrorKind.ALREADY_EXISTS, message)

    @staticmethod
    def validate_title(title: Optional[str]) -> None:
        if (
            _is_blank(title)
            or not MIN_NAME_LENGTH <= len(title) <= MAX_NAME_LENGTH
            or not TITLE_PATTERN.fullmatch(title)
        ):
            logger.error(
                "Title: %s must be between 2 and 50 characters and contain only "
                "English alphabet or a combination of English alphabet and number",
                title,
            )
            raise BookError(
                ErrorKind.INVALID_TITLE,
                "Title must be between 2 and 50 characters and contain only English "
                "alphabet or a combination of English alphabet and number",
            )

    @staticmethod
    def validate_author(author: Optional[str]) -> None:
        if _is_blank(author) or not MIN_NAME_LENGTH <= len(author) <= MAX_NAME_LENGTH:
            logger.error("Author Name(s): %s must be between 2 and 50 characters", author)
            raise BookError(
                ErrorKind.INVALID_AUTHOR,
                "Author Name(s) must be between 2 and 50 characters",
            )

    @staticmethod
    def validate_publication_year(year: Optional[int], today: Optional[date] = None) -> None:
        """Fail unless ``year`` lies in [2001, current year].

        The current year is read when the check runs; ``today`` is only
        there so tests can pin the clock.
        """
        current_year = (today or date.today()).year
        if year is None or year < EARLIEST_PUBLICATION_YEAR or year > current_year:
            logger.error(
                "Publication year: %s must be in the range between 2001 and the present year",
                year,
            )
            raise BookError(
                ErrorKind.INVALID_PUBLICATION_YEAR,
                "Publication year must be in the range between 2001 and the present year",
            )
