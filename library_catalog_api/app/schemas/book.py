"""
Pydantic models for book payloads.

``BookRequest`` is used both to add and to update a book; every field
is optional at the schema level so that the service layer can report
missing titles and authors with its own, more specific errors.
``BookResponse`` is what clients get back, ``PaginatedBookResponse``
wraps one page of books and ``ApiResponse`` is the envelope around
every payload.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..core.db import SQLITE_MAX_INTEGER


class BookRequest(BaseModel):
    """Schema for creating or partially updating a book."""

    title: Optional[str] = Field(None, examples=["Dune"])
    author: Optional[str] = Field(None, examples=["Frank Herbert"])
    isbn: Optional[str] = Field(None, examples=["9780441013593"])
    quantity: Optional[int] = Field(
        None, ge=-SQLITE_MAX_INTEGER - 1, le=SQLITE_MAX_INTEGER, examples=[3]
    )
    publication_year: Optional[int] = Field(
        None, ge=-SQLITE_MAX_INTEGER - 1, le=SQLITE_MAX_INTEGER, examples=[2005]
    )


class BookResponse(BaseModel):
    """Schema for reading a book from the API."""

    id: int
    title: str
    author: str
    isbn: Optional[str] = None
    quantity: Optional[int] = None
    publication_year: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class PaginatedBookResponse(BaseModel):
    """One page of books.

    ``page_element_count`` is the number of books actually returned;
    no total count is exposed.
    """

    contents: List[BookResponse]
    page_element_count: int
    page_size: int


class ApiResponse(BaseModel):
    """Envelope returned by every book endpoint."""

    message: str
    status: int
    timestamp: datetime
    data: Any = None
