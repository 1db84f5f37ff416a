"""Pytest configuration and fixtures."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from library_catalog_api.app.core.config import settings
from library_catalog_api.app.core.db import init_db
from library_catalog_api.app.repositories.book_repository import SQLiteBookRepository
from library_catalog_api.app.schemas.book import BookRequest
from library_catalog_api.app.services.book_service import BookService


@pytest.fixture(autouse=True)
def db_file(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file for every test."""
    path = tmp_path / "catalog.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    yield path


@pytest.fixture
def repository():
    return SQLiteBookRepository()


@pytest.fixture
def service(repository):
    return BookService(repository)


@pytest.fixture
def client():
    from library_catalog_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def add_book(service):
    """Add a book through the service and return the response."""

    def _add(title="Dune", author="Herbert", isbn="111", quantity=3, publication_year=2001):
        request = BookRequest(
            title=title,
            author=author,
            isbn=isbn,
            quantity=quantity,
            publication_year=publication_year,
        )
        return asyncio.run(service.add_book(request))

    return _add
