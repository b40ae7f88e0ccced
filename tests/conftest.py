"""Shared fixtures: a throwaway SQLite store and an HTTP client bound to it."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.main import app
from core.database import CatalogStore, get_store
from verticals.catalog.repository import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
)


@pytest_asyncio.fixture
async def store(tmp_path):
    store = CatalogStore(f"sqlite+aiosqlite:///{tmp_path}/catalog.db")
    await store.create_all()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed(store):
    """Helpers that write records straight through the repositories."""

    class Seed:
        async def author(self, first_name="Patrick", family_name="Rothfuss", **extra):
            async with store.session() as session:
                return await AuthorRepository(session).create(
                    {"first_name": first_name, "family_name": family_name, **extra}
                )

        async def genre(self, name="Fiction"):
            async with store.session() as session:
                return await GenreRepository(session).create({"name": name})

        async def book(self, author, title="The Name of the Wind", genres=()):
            async with store.session() as session:
                return await BookRepository(session).create({
                    "title": title,
                    "author_id": author.id,
                    "summary": "A summary.",
                    "isbn": "9781473211896",
                    "genre_ids": tuple(g.id for g in genres),
                })

        async def copy(self, book, imprint="Gollancz, 2011", status="Available", due_back=None):
            async with store.session() as session:
                return await BookInstanceRepository(session).create({
                    "book_id": book.id,
                    "imprint": imprint,
                    "status": status,
                    "due_back": due_back,
                })

    return Seed()
