"""
Book endpoints for API v1.

These routes expose the catalog use cases: add, paginated listing,
free-text search, retrieval, partial update and deletion.  Every route
answers with the ``ApiResponse`` envelope; failures raised by the
service are converted to error envelopes by the handlers registered in
``main.py``.
"""

from fastapi import APIRouter, Depends, Query, status

from library_catalog_api.app.core.config import settings
from library_catalog_api.app.core.responses import build_success_response
from library_catalog_api.app.schemas.book import ApiResponse, BookRequest
from library_catalog_api.app.services.book_service import BookService

router = APIRouter()


def get_book_service() -> BookService:
    """Dependency returning a service bound to the SQLite repository."""
    return BookService()


@router.post("/", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def add_book(
    book_in: BookRequest,
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Add a new book to the catalog.

    Title and author are required, the title must be unique (ignoring
    case) and the publication year must lie between 2001 and the
    current year.
    """
    book = await service.add_book(book_in)
    return build_success_response(book, status.HTTP_201_CREATED)


@router.get("/", response_model=ApiResponse)
async def list_books(
    page_no: int = Query(0, ge=0),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Return one page of books ordered by id.

    - **page_no**: zero based page number.
    - **page_size**: number of books per page.
    """
    page = await service.list_books(page_no, page_size)
    return build_success_response(page)


@router.get("/search", response_model=ApiResponse)
async def search_books(
    q: str = Query(..., min_length=1, description="Publication year or title/author/ISBN fragment"),
    by_year: bool = Query(True, description="Treat a four digit query as a publication year"),
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Search books by publication year, title, author or ISBN."""
    books = await service.search_books(q, year_lookup=by_year)
    return build_success_response(books)


@router.get("/{book_id}", response_model=ApiResponse)
async def get_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Retrieve a single book by its ID.  Returns 404 if it does not exist."""
    book = await service.get_book(book_id)
    return build_success_response(book)


@router.put("/{book_id}", response_model=ApiResponse)
async def update_book(
    book_id: int,
    book_in: BookRequest,
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Update the fields present in the request body; others are kept."""
    book = await service.update_book(book_id, book_in)
    return build_success_response(book)


@router.delete("/{book_id}", response_model=ApiResponse)
async def delete_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> ApiResponse:
    """Delete a book.  Deleting a book that does not exist succeeds."""
    await service.delete_book(book_id)
    return build_success_response(None)
