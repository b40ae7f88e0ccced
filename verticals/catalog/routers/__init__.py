"""Catalog routers — one module per entity plus the home page.

All routes are mounted under /catalog by api.main.
"""

from fastapi import APIRouter, Depends

from core.database import CatalogStore, get_store
from patterns.aggregation import aggregate, in_session
from verticals.catalog.repository import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
)
from verticals.catalog.routers import author, book, bookinstance, genre
from verticals.catalog.routers.common import render

router = APIRouter()


@router.get("/")
async def index(store: CatalogStore = Depends(get_store)):
    """Home page with a count of every collection."""
    counts = await aggregate({
        "book_count": in_session(store, BookRepository, lambda r: r.count()),
        "book_instance_count": in_session(store, BookInstanceRepository, lambda r: r.count()),
        "book_instance_available_count": in_session(
            store, BookInstanceRepository, lambda r: r.count_available()
        ),
        "author_count": in_session(store, AuthorRepository, lambda r: r.count()),
        "genre_count": in_session(store, GenreRepository, lambda r: r.count()),
    })
    return render("index", {"title": "Local Library Home", **counts})


router.include_router(genre.router)
router.include_router(author.router)
router.include_router(book.router)
router.include_router(bookinstance.router)
