"""Domain models for persisted books."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Book:
    """A catalog entry as stored by the repository.

    ``id`` is ``None`` until the store assigns one.  Timestamps are
    managed by the store and kept as the strings it returns.
    """

    title: str
    author: str
    publication_year: int
    isbn: Optional[str] = None
    quantity: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class BookPage:
    """A slice of the catalog returned by ``find_page``."""

    items: List[Book] = field(default_factory=list)
    number_of_elements: int = 0
    size: int = 0
