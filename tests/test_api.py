from datetime import date

BOOKS_URL = "/api/v1/books/"

DUNE = {
    "title": "Dune",
    "author": "Herbert",
    "isbn": "111",
    "quantity": 3,
    "publication_year": 2001,
}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["db"] is True


def test_add_book_returns_envelope(client):
    response = client.post(BOOKS_URL, json=DUNE)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "successful"
    assert body["status"] == 201
    assert body["timestamp"]
    assert body["data"]["id"] == 1
    assert body["data"]["title"] == "Dune"
    assert body["data"]["publication_year"] == 2001


def test_add_duplicate_title_is_bad_request(client):
    client.post(BOOKS_URL, json=DUNE)

    response = client.post(BOOKS_URL, json={**DUNE, "title": "dune"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Error Occurred:"
    assert body["status"] == 400
    assert body["data"].startswith("Error Occurred while Adding New Book: Book with this title: dune already exists")


def test_add_missing_title(client):
    response = client.post(BOOKS_URL, json={"author": "Herbert", "publication_year": 2005})

    assert response.status_code == 400
    assert "Title field is required" in response.json()["data"]


def test_malformed_body_reports_fields(client):
    response = client.post(
        BOOKS_URL,
        json={"title": "Dune", "author": "Herbert", "quantity": "lots", "publication_year": "soon"},
    )

    assert response.status_code == 400
    data = response.json()["data"]
    assert set(data) == {"quantity", "publication_year"}


def test_get_book_and_not_found(client):
    created = client.post(BOOKS_URL, json=DUNE).json()["data"]

    response = client.get(f"{BOOKS_URL}{created['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Dune"

    missing = client.get(f"{BOOKS_URL}99")
    assert missing.status_code == 404
    assert missing.json()["data"] == "Error Occurred while retrieving Book: Book with id 99 does not exist"


def test_list_books_paginated(client):
    for title in ["Alpha", "Beta", "Gamma"]:
        client.post(BOOKS_URL, json={**DUNE, "title": title})

    response = client.get(BOOKS_URL, params={"page_no": 1, "page_size": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [b["title"] for b in data["contents"]] == ["Gamma"]
    assert data["page_element_count"] == 1
    assert data["page_size"] == 2


def test_list_books_defaults(client):
    client.post(BOOKS_URL, json=DUNE)

    data = client.get(BOOKS_URL).json()["data"]

    assert data["page_size"] == 10
    assert data["page_element_count"] == 1


def test_list_books_rejects_negative_page(client):
    response = client.get(BOOKS_URL, params={"page_no": -1})
    assert response.status_code == 400
    assert "page_no" in response.json()["data"]


def test_search(client):
    client.post(BOOKS_URL, json={**DUNE, "title": "The Hobbit", "author": "J R R Tolkien", "publication_year": 2003})
    client.post(BOOKS_URL, json={**DUNE, "title": "Report 2022", "author": "Someone", "publication_year": 2010})

    by_author = client.get(f"{BOOKS_URL}search", params={"q": "Tolkien"})
    assert by_author.status_code == 200
    assert [b["title"] for b in by_author.json()["data"]] == ["The Hobbit"]

    by_year = client.get(f"{BOOKS_URL}search", params={"q": "2010"})
    assert [b["title"] for b in by_year.json()["data"]] == ["Report 2022"]

    missing_year = client.get(f"{BOOKS_URL}search", params={"q": "2022"})
    assert missing_year.status_code == 404

    as_text = client.get(f"{BOOKS_URL}search", params={"q": "2022", "by_year": "false"})
    assert [b["title"] for b in as_text.json()["data"]] == ["Report 2022"]


def test_search_requires_query(client):
    response = client.get(f"{BOOKS_URL}search")
    assert response.status_code == 400
    assert "q" in response.json()["data"]


def test_update_book(client):
    created = client.post(BOOKS_URL, json=DUNE).json()["data"]

    response = client.put(f"{BOOKS_URL}{created['id']}", json={"title": "Dune Messiah", "quantity": 1})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Dune Messiah"
    assert data["quantity"] == 1
    assert data["author"] == "Herbert"


def test_update_invalid_year(client):
    created = client.post(BOOKS_URL, json=DUNE).json()["data"]

    response = client.put(
        f"{BOOKS_URL}{created['id']}",
        json={"publication_year": date.today().year + 1},
    )

    assert response.status_code == 400
    assert "Publication year" in response.json()["data"]
    assert client.get(f"{BOOKS_URL}{created['id']}").json()["data"]["publication_year"] == 2001


def test_update_conflicting_title(client):
    client.post(BOOKS_URL, json=DUNE)
    other = client.post(BOOKS_URL, json={**DUNE, "title": "Emma"}).json()["data"]

    response = client.put(f"{BOOKS_URL}{other['id']}", json={"title": "DUNE"})

    assert response.status_code == 409


def test_update_missing_book(client):
    response = client.put(f"{BOOKS_URL}5", json={"quantity": 2})
    assert response.status_code == 404


def test_delete_twice(client):
    created = client.post(BOOKS_URL, json=DUNE).json()["data"]

    first = client.delete(f"{BOOKS_URL}{created['id']}")
    second = client.delete(f"{BOOKS_URL}{created['id']}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["data"] is None
    assert client.get(f"{BOOKS_URL}{created['id']}").status_code == 404


def test_out_of_range_id_is_not_found(client):
    huge = 10**20

    assert client.get(f"{BOOKS_URL}{huge}").status_code == 404
    assert client.put(f"{BOOKS_URL}{huge}", json={"quantity": 2}).status_code == 404
    deleted = client.delete(f"{BOOKS_URL}{huge}")
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "successful"


def test_far_page_is_empty(client):
    client.post(BOOKS_URL, json=DUNE)

    response = client.get(BOOKS_URL, params={"page_no": 10**18, "page_size": 100})

    assert response.status_code == 200
    assert response.json()["data"]["contents"] == []
    assert response.json()["data"]["page_element_count"] == 0


def test_oversized_quantity_is_rejected(client):
    response = client.post(BOOKS_URL, json={**DUNE, "quantity": 10**20})

    assert response.status_code == 400
    assert set(response.json()["data"]) == {"quantity"}


def test_unexpected_error_returns_envelope():
    from fastapi.testclient import TestClient

    from library_catalog_api.app.api.v1.endpoints.books import get_book_service
    from library_catalog_api.app.main import app
    from library_catalog_api.app.repositories.book_repository import SQLiteBookRepository
    from library_catalog_api.app.services.book_service import BookService

    class FailingRepository(SQLiteBookRepository):
        def find_page(self, page_no, page_size):
            raise RuntimeError("boom")

    app.dependency_overrides[get_book_service] = lambda: BookService(FailingRepository())
    try:
        with TestClient(app, raise_server_exceptions=False) as failing_client:
            response = failing_client.get(BOOKS_URL)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Error Occurred:"
    assert body["status"] == 500
    assert body["data"] == "Internal server error"
