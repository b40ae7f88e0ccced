"""Book routes.

Book forms need every author and genre, so the create and update pages
aggregate those lists alongside the book itself.
"""

from fastapi import APIRouter, Depends, Request

from core.database import CatalogStore, get_store
from core.errors import NotFoundError
from patterns import deletion, mutation
from patterns.aggregation import aggregate, in_session
from verticals.catalog.profiles import BOOK
from verticals.catalog.repository import BookInstanceRepository, BookRepository
from verticals.catalog.routers.common import (
    deletion_response,
    mutation_response,
    read_form,
    render,
)

router = APIRouter()

_MULTI = ("genre",)


@router.get("/books")
async def book_list(store: CatalogStore = Depends(get_store)):
    """All books with their authors, by title."""
    async with store.session() as session:
        books = await BookRepository(session).list()
    return render("book_list", {"title": "Book List", "book_list": books})


@router.get("/book/create")
async def book_create_get(store: CatalogStore = Depends(get_store)):
    context = await mutation.form_context(BOOK, store)
    return render("book_form", {"title": "Create Book", **context})


@router.post("/book/create")
async def book_create_post(request: Request, store: CatalogStore = Depends(get_store)):
    result = await mutation.create(BOOK, store, await read_form(request, _MULTI))
    return mutation_response(result, "book_form", "Create Book", "book")


@router.get("/book/{book_id}")
async def book_detail(book_id: str, store: CatalogStore = Depends(get_store)):
    """A book and its copies."""
    results = await aggregate({
        "book": in_session(store, BookRepository, lambda r: r.get(book_id)),
        "book_instances": in_session(store, BookInstanceRepository, lambda r: r.by_book(book_id)),
    })
    if results["book"] is None:
        raise NotFoundError("Book")
    return render("book_detail", {"title": results["book"].title, **results})


@router.get("/book/{book_id}/delete")
async def book_delete_get(book_id: str, store: CatalogStore = Depends(get_store)):
    outcome = await deletion.inspect(BOOK, store, book_id)
    return deletion_response(outcome, "book_delete", "Delete Book", "book", "book_instances")


@router.post("/book/{book_id}/delete")
async def book_delete_post(book_id: str, store: CatalogStore = Depends(get_store)):
    """Delete a book that has no copies."""
    outcome = await deletion.delete(BOOK, store, book_id)
    return deletion_response(outcome, "book_delete", "Delete Book", "book", "book_instances")


@router.get("/book/{book_id}/update")
async def book_update_get(book_id: str, store: CatalogStore = Depends(get_store)):
    results = await aggregate({
        "book": in_session(store, BookRepository, lambda r: r.get(book_id)),
        **BOOK.form_lookups(store),
    })
    if results["book"] is None:
        raise NotFoundError("Book")
    return render("book_form", {"title": "Update Book", **results})


@router.post("/book/{book_id}/update")
async def book_update_post(
    book_id: str, request: Request, store: CatalogStore = Depends(get_store),
):
    result = await mutation.update(BOOK, store, book_id, await read_form(request, _MULTI))
    return mutation_response(result, "book_form", "Update Book", "book")
