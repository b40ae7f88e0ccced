"""Test the catalog HTTP surface end to end against SQLite."""
from datetime import date

import pytest

MISSING = "00000000-0000-4000-8000-000000000000"


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_root_redirects_to_catalog(client):
    resp = await client.get("/")
    assert resp.status_code == 302
    assert resp.headers["location"] == "/catalog/"


@pytest.mark.asyncio
async def test_request_id_echoed(client):
    resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"
    generated = await client.get("/health")
    assert len(generated.headers["X-Request-ID"]) == 32


@pytest.mark.asyncio
async def test_index_counts(client, seed):
    book = await seed.book(await seed.author())
    await seed.copy(book, status="Available")
    await seed.copy(book, imprint="Penguin", status="Loaned")
    await seed.genre("Fiction")

    resp = await client.get("/catalog/")
    assert resp.status_code == 200
    assert "<strong>Books:</strong> 1" in resp.text
    assert "<strong>Copies:</strong> 2" in resp.text
    assert "<strong>Copies available:</strong> 1" in resp.text
    assert "<strong>Authors:</strong> 1" in resp.text
    assert "<strong>Genres:</strong> 1" in resp.text


@pytest.mark.asyncio
async def test_genre_create_flow(client):
    form = await client.get("/catalog/genre/create")
    assert form.status_code == 200
    assert 'name="name"' in form.text

    resp = await client.post("/catalog/genre/create", data={"name": "Fiction"})
    assert resp.status_code == 302
    location = resp.headers["location"]
    assert location.startswith("/catalog/genre/")

    detail = await client.get(location)
    assert detail.status_code == 200
    assert "<h2>Fiction</h2>" in detail.text
    assert "This genre has no books." in detail.text

    again = await client.post("/catalog/genre/create", data={"name": "Fiction"})
    assert again.status_code == 302
    assert again.headers["location"] == location

    listing = await client.get("/catalog/genres")
    assert listing.text.count(">Fiction</a>") == 1


@pytest.mark.asyncio
async def test_genre_create_blank_name_redisplays(client):
    resp = await client.post("/catalog/genre/create", data={"name": ""})
    assert resp.status_code == 200
    assert "Genre name required" in resp.text
    listing = await client.get("/catalog/genres")
    assert "There are no genres." in listing.text


@pytest.mark.asyncio
async def test_unknown_ids_are_404(client):
    for path in (
        f"/catalog/genre/{MISSING}",
        f"/catalog/author/{MISSING}",
        f"/catalog/book/{MISSING}",
        f"/catalog/bookinstance/{MISSING}",
        f"/catalog/genre/{MISSING}/update",
        f"/catalog/book/{MISSING}/update",
    ):
        resp = await client.get(path)
        assert resp.status_code == 404, path
        assert "not found" in resp.text


@pytest.mark.asyncio
async def test_malformed_id_is_store_failure(client):
    resp = await client.get("/catalog/genre/not-an-id")
    assert resp.status_code == 500
    assert "Malformed identifier" in resp.text


@pytest.mark.asyncio
async def test_genre_delete_blocked_lists_books(client, seed):
    author = await seed.author()
    fiction = await seed.genre("Fiction")
    await seed.book(author, title="Book A", genres=[fiction])
    await seed.book(author, title="Book B", genres=[fiction])

    page = await client.get(f"/catalog/genre/{fiction.id}/delete")
    assert page.status_code == 200
    assert "Delete the following books before attempting to delete this genre." in page.text
    assert "Book A" in page.text and "Book B" in page.text

    resp = await client.post(f"/catalog/genre/{fiction.id}/delete")
    assert resp.status_code == 200
    assert "Book A" in resp.text
    assert (await client.get(fiction.url)).status_code == 200


@pytest.mark.asyncio
async def test_genre_delete_then_repeat(client, seed):
    poetry = await seed.genre("Poetry")

    page = await client.get(f"/catalog/genre/{poetry.id}/delete")
    assert "Do you really want to delete this genre?" in page.text

    first = await client.post(f"/catalog/genre/{poetry.id}/delete")
    assert first.status_code == 302
    assert first.headers["location"] == "/catalog/genres"
    second = await client.post(f"/catalog/genre/{poetry.id}/delete")
    assert second.status_code == 302
    assert second.headers["location"] == "/catalog/genres"
    assert (await client.get(poetry.url)).status_code == 404


@pytest.mark.asyncio
async def test_genre_update(client, seed):
    genre = await seed.genre("Fiction")
    form = await client.get(f"/catalog/genre/{genre.id}/update")
    assert 'value="Fiction"' in form.text

    bad = await client.post(f"/catalog/genre/{genre.id}/update", data={"name": "Sci Fi"})
    assert bad.status_code == 200
    assert "Name has non-alphanumeric characters." in bad.text
    assert 'value="Sci Fi"' in bad.text

    ok = await client.post(f"/catalog/genre/{genre.id}/update", data={"name": "Poetry"})
    assert ok.status_code == 302
    assert ok.headers["location"] == "/catalog/genres"
    assert "<h2>Poetry</h2>" in (await client.get(genre.url)).text


@pytest.mark.asyncio
async def test_author_create_and_detail(client):
    resp = await client.post("/catalog/author/create", data={
        "first_name": "Isaac",
        "family_name": "Asimov",
        "date_of_birth": "1920-01-02",
        "date_of_death": "1992-04-06",
    })
    assert resp.status_code == 302
    detail = await client.get(resp.headers["location"])
    assert "<h2>Asimov, Isaac</h2>" in detail.text
    assert "January 2nd, 1920 - April 6th, 1992" in detail.text


@pytest.mark.asyncio
async def test_author_invalid_date_redisplays(client):
    resp = await client.post("/catalog/author/create", data={
        "first_name": "Isaac", "family_name": "Asimov", "date_of_birth": "someday",
    })
    assert resp.status_code == 200
    assert "Invalid date of birth" in resp.text
    assert 'value="Asimov"' in resp.text


@pytest.mark.asyncio
async def test_book_create_with_several_genres(client, seed):
    author = await seed.author()
    fantasy = await seed.genre("Fantasy")
    fiction = await seed.genre("Fiction")

    form = await client.get("/catalog/book/create")
    assert "Rothfuss, Patrick" in form.text
    assert "Fantasy" in form.text

    resp = await client.post("/catalog/book/create", data={
        "title": "The Wise Man's Fear",
        "author": author.id,
        "summary": "Day two.",
        "isbn": "9780756404734",
        "genre": [fantasy.id, fiction.id],
    })
    assert resp.status_code == 302
    detail = await client.get(resp.headers["location"])
    assert "The Wise Man&#x27;s Fear" in detail.text
    assert f'<a href="{fantasy.url}">Fantasy</a>, <a href="{fiction.url}">Fiction</a>' in detail.text
    assert "There are no copies of this book in the library." in detail.text

    genre_page = await client.get(fiction.url)
    assert "The Wise Man&#x27;s Fear" in genre_page.text


@pytest.mark.asyncio
async def test_book_detail_lists_copies(client, seed):
    book = await seed.book(await seed.author())
    await seed.copy(book, imprint="Penguin", status="Loaned", due_back=date(2024, 6, 1))
    detail = await client.get(book.url)
    assert "Penguin" in detail.text
    assert "Loaned (Due: June 1st, 2024)" in detail.text


@pytest.mark.asyncio
async def test_bookinstance_bad_date_preserves_input(client, seed):
    book = await seed.book(await seed.author())
    resp = await client.post("/catalog/bookinstance/create", data={
        "book": book.id, "imprint": "Penguin Classics", "status": "Loaned", "due_back": "not-a-date",
    })
    assert resp.status_code == 200
    assert "Invalid date" in resp.text
    assert 'value="Penguin Classics"' in resp.text
    assert f'<option value="{book.id}" selected>' in resp.text
    assert '<option value="Loaned" selected>' in resp.text
    listing = await client.get("/catalog/bookinstances")
    assert "There are no book copies in this library." in listing.text


@pytest.mark.asyncio
async def test_bookinstance_create_and_delete(client, seed):
    book = await seed.book(await seed.author())
    resp = await client.post("/catalog/bookinstance/create", data={
        "book": book.id, "imprint": "Penguin", "status": "Available",
    })
    assert resp.status_code == 302
    location = resp.headers["location"]
    detail = await client.get(location)
    assert "<strong>Status:</strong> Available" in detail.text

    blocked = await client.post(f"{book.url}/delete")
    assert blocked.status_code == 200
    assert "Delete the following copies before attempting to delete this book." in blocked.text

    gone = await client.post(f"{location}/delete")
    assert gone.status_code == 302
    assert gone.headers["location"] == "/catalog/bookinstances"
    assert (await client.get(location)).status_code == 404


@pytest.mark.asyncio
async def test_update_missing_record_redirects_to_collection(client):
    resp = await client.post(f"/catalog/genre/{MISSING}/update", data={"name": "Poetry"})
    assert resp.status_code == 302
    assert resp.headers["location"] == "/catalog/genres"


@pytest.mark.asyncio
async def test_delete_page_for_missing_record_redirects(client):
    for entity, collection in (
        ("author", "authors"),
        ("genre", "genres"),
        ("book", "books"),
        ("bookinstance", "bookinstances"),
    ):
        resp = await client.get(f"/catalog/{entity}/{MISSING}/delete")
        assert resp.status_code == 302, entity
        assert resp.headers["location"] == f"/catalog/{collection}"
