"""BookInstance routes.

Copies have no dependents, so deletion never blocks.
"""

from fastapi import APIRouter, Depends, Request

from core.database import CatalogStore, get_store
from core.errors import NotFoundError
from patterns import deletion, mutation
from patterns.aggregation import aggregate, in_session
from verticals.catalog.profiles import BOOKINSTANCE
from verticals.catalog.repository import BookInstanceRepository
from verticals.catalog.routers.common import (
    deletion_response,
    mutation_response,
    read_form,
    render,
)

router = APIRouter()


@router.get("/bookinstances")
async def bookinstance_list(store: CatalogStore = Depends(get_store)):
    """Every copy with its book."""
    async with store.session() as session:
        copies = await BookInstanceRepository(session).list()
    return render("bookinstance_list", {
        "title": "Book Instance List", "bookinstance_list": copies,
    })


@router.get("/bookinstance/create")
async def bookinstance_create_get(store: CatalogStore = Depends(get_store)):
    context = await mutation.form_context(BOOKINSTANCE, store)
    return render("bookinstance_form", {"title": "Create BookInstance", **context})


@router.post("/bookinstance/create")
async def bookinstance_create_post(request: Request, store: CatalogStore = Depends(get_store)):
    result = await mutation.create(BOOKINSTANCE, store, await read_form(request))
    return mutation_response(result, "bookinstance_form", "Create BookInstance", "bookinstance")


@router.get("/bookinstance/{bookinstance_id}")
async def bookinstance_detail(bookinstance_id: str, store: CatalogStore = Depends(get_store)):
    async with store.session() as session:
        copy = await BookInstanceRepository(session).get(bookinstance_id)
    if copy is None:
        raise NotFoundError("Book copy")
    return render("bookinstance_detail", {"title": "Book:", "bookinstance": copy})


@router.get("/bookinstance/{bookinstance_id}/delete")
async def bookinstance_delete_get(bookinstance_id: str, store: CatalogStore = Depends(get_store)):
    outcome = await deletion.inspect(BOOKINSTANCE, store, bookinstance_id)
    return deletion_response(
        outcome, "bookinstance_delete", "Delete Book Instance", "bookinstance", "dependents",
    )


@router.post("/bookinstance/{bookinstance_id}/delete")
async def bookinstance_delete_post(bookinstance_id: str, store: CatalogStore = Depends(get_store)):
    outcome = await deletion.delete(BOOKINSTANCE, store, bookinstance_id)
    return deletion_response(
        outcome, "bookinstance_delete", "Delete Book Instance", "bookinstance", "dependents",
    )


@router.get("/bookinstance/{bookinstance_id}/update")
async def bookinstance_update_get(bookinstance_id: str, store: CatalogStore = Depends(get_store)):
    results = await aggregate({
        "bookinstance": in_session(
            store, BookInstanceRepository, lambda r: r.get(bookinstance_id)
        ),
        **BOOKINSTANCE.form_lookups(store),
    })
    if results["bookinstance"] is None:
        raise NotFoundError("Book copy")
    return render("bookinstance_form", {"title": "Update Book Instance", **results})


@router.post("/bookinstance/{bookinstance_id}/update")
async def bookinstance_update_post(
    bookinstance_id: str, request: Request, store: CatalogStore = Depends(get_store),
):
    fields = await read_form(request)
    result = await mutation.update(BOOKINSTANCE, store, bookinstance_id, fields)
    return mutation_response(result, "bookinstance_form", "Update Book Instance", "bookinstance")
