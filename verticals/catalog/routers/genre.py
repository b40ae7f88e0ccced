"""Genre routes."""

from fastapi import APIRouter, Depends, Request

from core.database import CatalogStore, get_store
from core.errors import NotFoundError
from patterns import deletion, mutation
from patterns.aggregation import aggregate, in_session
from verticals.catalog.profiles import GENRE
from verticals.catalog.repository import BookRepository, GenreRepository
from verticals.catalog.routers.common import (
    deletion_response,
    mutation_response,
    read_form,
    render,
)

router = APIRouter()


@router.get("/genres")
async def genre_list(store: CatalogStore = Depends(get_store)):
    """All genres, by name."""
    async with store.session() as session:
        genres = await GenreRepository(session).list()
    return render("genre_list", {"title": "Genre List", "genre_list": genres})


@router.get("/genre/create")
async def genre_create_get():
    return render("genre_form", {"title": "Create Genre"})


@router.post("/genre/create")
async def genre_create_post(request: Request, store: CatalogStore = Depends(get_store)):
    """Create a genre, or redirect to the existing one with the same name."""
    result = await mutation.create(GENRE, store, await read_form(request))
    return mutation_response(result, "genre_form", "Create Genre", "genre")


@router.get("/genre/{genre_id}")
async def genre_detail(genre_id: str, store: CatalogStore = Depends(get_store)):
    """A genre and every book carrying it."""
    results = await aggregate({
        "genre": in_session(store, GenreRepository, lambda r: r.get(genre_id)),
        "genre_books": in_session(store, BookRepository, lambda r: r.by_genre(genre_id)),
    })
    if results["genre"] is None:
        raise NotFoundError("Genre")
    return render("genre_detail", {"title": "Genre Detail", **results})


@router.get("/genre/{genre_id}/delete")
async def genre_delete_get(genre_id: str, store: CatalogStore = Depends(get_store)):
    outcome = await deletion.inspect(GENRE, store, genre_id)
    return deletion_response(outcome, "genre_delete", "Delete Genre", "genre", "genre_books")


@router.post("/genre/{genre_id}/delete")
async def genre_delete_post(genre_id: str, store: CatalogStore = Depends(get_store)):
    """Delete a genre unless books still carry it."""
    outcome = await deletion.delete(GENRE, store, genre_id)
    return deletion_response(outcome, "genre_delete", "Delete Genre", "genre", "genre_books")


@router.get("/genre/{genre_id}/update")
async def genre_update_get(genre_id: str, store: CatalogStore = Depends(get_store)):
    async with store.session() as session:
        genre = await GenreRepository(session).get(genre_id)
    if genre is None:
        raise NotFoundError("Genre")
    return render("genre_form", {"title": "Update Genre", "genre": genre})


@router.post("/genre/{genre_id}/update")
async def genre_update_post(
    genre_id: str, request: Request, store: CatalogStore = Depends(get_store),
):
    result = await mutation.update(GENRE, store, genre_id, await read_form(request))
    return mutation_response(result, "genre_form", "Update Genre", "genre")
