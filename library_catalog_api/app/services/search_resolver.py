"""
Resolution of the free-text book search.

The search endpoint takes one query string that may mean a publication
year or a fragment of a title, author or ISBN.  A query that looks
like a year is answered by year equality only; a year with no books is
a hard not-found and does not fall back to the substring search.  Any
other query is matched as a case-insensitive substring against title,
author and ISBN.
"""

import logging
import re
from typing import List, Optional

from ..core.exceptions import BookError, ErrorKind
from ..models.book import Book
from ..repositories.base import BookRepository

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r"[0-9]{4}")


def parse_year(text: str) -> Optional[int]:
    """Return ``text`` as a year if it is exactly four ASCII digits."""
    if text is not None and YEAR_PATTERN.fullmatch(text):
        return int(text)
    return None


def resolve_search(
    query: str,
    repository: BookRepository,
    year_lookup: bool = True,
) -> List[Book]:
    """Return the books matching ``query`` in store order.

    With ``year_lookup`` disabled the query is always treated as text.
    Raises ``BookError(NOT_FOUND)`` when nothing matches.
    """
    year = parse_year(query) if year_lookup else None
    if year is not None:
        if not repository.exists_by_publication_year(year):
            raise BookError(ErrorKind.NOT_FOUND, f"Book with search text {query} does not exist")
        books = repository.find_all_by_publication_year(year)
        logger.debug("Search '%s' resolved as publication year", query)
    else:
        books = repository.search_by_substring(query, query, query)
        logger.debug("Search '%s' resolved as substring match", query)

    if not books:
        raise BookError(ErrorKind.NOT_FOUND, f"Book with search text {query} does not exist")
    return books
