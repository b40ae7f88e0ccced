"""Concurrent multi-lookup aggregation.

Assembles one view model from several independent store lookups. Each
lookup is a zero-argument coroutine function; all of them run concurrently
on the event loop inside a TaskGroup and the result maps every input key to
its lookup's value. Either every lookup succeeds or the first failure is
raised and nothing is returned.

Example::

    results = await aggregate({
        "genre": in_session(store, GenreRepository, lambda r: r.get(genre_id)),
        "genre_books": in_session(store, BookRepository, lambda r: r.by_genre(genre_id)),
    })
    if results["genre"] is None:
        raise NotFoundError("Genre")
"""

import asyncio
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from core.database import CatalogStore
from patterns.repository import BaseRepository

T = TypeVar("T")
RepoT = TypeVar("RepoT", bound=BaseRepository)

Lookup = Callable[[], Awaitable[Any]]


def in_session(
    store: CatalogStore,
    repository: type[RepoT],
    operation: Callable[[RepoT], Awaitable[T]],
) -> Callable[[], Awaitable[T]]:
    """Wrap a repository call as a lookup with its own session.

    A session cannot run two statements at once, so every concurrent lookup
    gets a session of its own.
    """

    async def lookup() -> T:
        async with store.session() as session:
            return await operation(repository(session))

    return lookup


async def aggregate(lookups: Mapping[str, Lookup]) -> dict[str, Any]:
    """Run all lookups concurrently and merge their results by key.

    Completion order is irrelevant. If any lookup raises, the remaining
    ones are cancelled and that lookup's exception propagates.
    """
    if not lookups:
        return {}
    try:
        async with asyncio.TaskGroup() as group:
            tasks = {key: group.create_task(lookup()) for key, lookup in lookups.items()}
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return {key: task.result() for key, task in tasks.items()}
