"""Test concurrent lookup aggregation."""
import asyncio

import pytest

from core.errors import StoreFailure
from patterns.aggregation import aggregate, in_session
from verticals.catalog.repository import BookRepository, GenreRepository


def _after(delay, value, finished=None):
    async def lookup():
        await asyncio.sleep(delay)
        if finished is not None:
            finished.append(value)
        return value

    return lookup


@pytest.mark.asyncio
async def test_aggregate_keys_results_regardless_of_completion_order():
    finished = []
    results = await aggregate({
        "slow": _after(0.05, "slow", finished),
        "fast": _after(0, "fast", finished),
    })
    assert results == {"slow": "slow", "fast": "fast"}
    assert finished == ["fast", "slow"]


@pytest.mark.asyncio
async def test_aggregate_runs_lookups_concurrently():
    started = asyncio.Event()

    async def waiter():
        await asyncio.wait_for(started.wait(), timeout=1)
        return "waited"

    async def starter():
        started.set()
        return "started"

    results = await aggregate({"waiter": waiter, "starter": starter})
    assert results == {"waiter": "waited", "starter": "started"}


@pytest.mark.asyncio
async def test_aggregate_empty():
    assert await aggregate({}) == {}


@pytest.mark.asyncio
async def test_aggregate_raises_first_failure_and_cancels_the_rest():
    cancelled = []

    async def slow():
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    async def failing():
        raise StoreFailure("boom", "query")

    with pytest.raises(StoreFailure):
        await aggregate({"slow": slow, "failing": failing})
    assert cancelled == [True]


@pytest.mark.asyncio
async def test_in_session_lookups_against_store(store, seed):
    author = await seed.author()
    fiction = await seed.genre("Fiction")
    await seed.book(author, genres=[fiction])

    results = await aggregate({
        "genre": in_session(store, GenreRepository, lambda r: r.get(fiction.id)),
        "genre_books": in_session(store, BookRepository, lambda r: r.by_genre(fiction.id)),
    })
    assert results["genre"].name == "Fiction"
    assert [b.title for b in results["genre_books"]] == ["The Name of the Wind"]


@pytest.mark.asyncio
async def test_in_session_malformed_id_is_store_failure(store):
    with pytest.raises(StoreFailure):
        await aggregate({
            "genre": in_session(store, GenreRepository, lambda r: r.get("not-an-id")),
        })
