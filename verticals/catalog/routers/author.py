"""Author routes."""

from fastapi import APIRouter, Depends, Request

from core.database import CatalogStore, get_store
from core.errors import NotFoundError
from patterns import deletion, mutation
from patterns.aggregation import aggregate, in_session
from verticals.catalog.profiles import AUTHOR
from verticals.catalog.repository import AuthorRepository, BookRepository
from verticals.catalog.routers.common import (
    deletion_response,
    mutation_response,
    read_form,
    render,
)

router = APIRouter()


@router.get("/authors")
async def author_list(store: CatalogStore = Depends(get_store)):
    """All authors, by family name."""
    async with store.session() as session:
        authors = await AuthorRepository(session).list()
    return render("author_list", {"title": "Author List", "author_list": authors})


@router.get("/author/create")
async def author_create_get():
    return render("author_form", {"title": "Create Author"})


@router.post("/author/create")
async def author_create_post(request: Request, store: CatalogStore = Depends(get_store)):
    result = await mutation.create(AUTHOR, store, await read_form(request))
    return mutation_response(result, "author_form", "Create Author", "author")


@router.get("/author/{author_id}")
async def author_detail(author_id: str, store: CatalogStore = Depends(get_store)):
    """An author and their books."""
    results = await aggregate({
        "author": in_session(store, AuthorRepository, lambda r: r.get(author_id)),
        "author_books": in_session(store, BookRepository, lambda r: r.by_author(author_id)),
    })
    if results["author"] is None:
        raise NotFoundError("Author")
    return render("author_detail", {"title": "Author Detail", **results})


@router.get("/author/{author_id}/delete")
async def author_delete_get(author_id: str, store: CatalogStore = Depends(get_store)):
    outcome = await deletion.inspect(AUTHOR, store, author_id)
    return deletion_response(outcome, "author_delete", "Delete Author", "author", "author_books")


@router.post("/author/{author_id}/delete")
async def author_delete_post(author_id: str, store: CatalogStore = Depends(get_store)):
    """Delete an author who has no books."""
    outcome = await deletion.delete(AUTHOR, store, author_id)
    return deletion_response(outcome, "author_delete", "Delete Author", "author", "author_books")


@router.get("/author/{author_id}/update")
async def author_update_get(author_id: str, store: CatalogStore = Depends(get_store)):
    async with store.session() as session:
        author = await AuthorRepository(session).get(author_id)
    if author is None:
        raise NotFoundError("Author")
    return render("author_form", {"title": "Update Author", "author": author})


@router.post("/author/{author_id}/update")
async def author_update_post(
    author_id: str, request: Request, store: CatalogStore = Depends(get_store),
):
    result = await mutation.update(AUTHOR, store, author_id, await read_form(request))
    return mutation_response(result, "author_form", "Update Author", "author")
