"""Test dependency-checked deletion and its state machine."""
import pytest

from patterns import deletion
from patterns.workflow_states import DeletionState, DeletionWorkflow
from verticals.catalog.profiles import AUTHOR, BOOK, BOOKINSTANCE, GENRE
from verticals.catalog.repository import BookRepository, GenreRepository

MISSING = "00000000-0000-4000-8000-000000000000"


def test_workflow_transitions():
    wf = DeletionWorkflow(entity="Genre", item_id="g1")
    assert wf.current_state == DeletionState.REQUESTED
    assert not wf.is_terminal
    wf.transition(DeletionState.CONFIRMED)
    wf.transition(DeletionState.DELETED)
    assert wf.is_terminal
    assert [t.to_state for t in wf.history] == ["confirmed", "deleted"]


def test_workflow_rejects_skipping_the_check():
    wf = DeletionWorkflow(entity="Genre", item_id="g1")
    assert not wf.can_transition(DeletionState.DELETED)
    with pytest.raises(ValueError):
        wf.transition(DeletionState.DELETED)


def test_blocked_is_terminal():
    wf = DeletionWorkflow(entity="Genre", item_id="g1")
    wf.transition(DeletionState.BLOCKED, {"dependents": 2})
    assert wf.is_terminal
    assert wf.history[0].metadata == {"dependents": 2}
    with pytest.raises(ValueError):
        wf.transition(DeletionState.DELETED)


@pytest.mark.asyncio
async def test_genre_with_books_is_blocked_with_every_dependent(store, seed):
    author = await seed.author()
    fiction = await seed.genre("Fiction")
    await seed.book(author, title="Book A", genres=[fiction])
    await seed.book(author, title="Book B", genres=[fiction])

    outcome = await deletion.delete(GENRE, store, fiction.id)
    assert outcome.blocked
    assert outcome.target.name == "Fiction"
    assert sorted(b.title for b in outcome.dependents) == ["Book A", "Book B"]
    async with store.session() as session:
        assert await GenreRepository(session).get(fiction.id) is not None


@pytest.mark.asyncio
async def test_unreferenced_genre_is_deleted_then_absent(store, seed):
    poetry = await seed.genre("Poetry")

    first = await deletion.delete(GENRE, store, poetry.id)
    assert first.state is DeletionState.DELETED
    assert first.location == "/catalog/genres"

    second = await deletion.delete(GENRE, store, poetry.id)
    assert second.state is DeletionState.ABSENT
    assert second.target is None


@pytest.mark.asyncio
async def test_inspect_never_deletes(store, seed):
    poetry = await seed.genre("Poetry")
    outcome = await deletion.inspect(GENRE, store, poetry.id)
    assert outcome.state is DeletionState.CONFIRMED
    assert outcome.dependents == []
    async with store.session() as session:
        assert await GenreRepository(session).get(poetry.id) is not None


@pytest.mark.asyncio
async def test_missing_target_is_absent(store):
    outcome = await deletion.inspect(AUTHOR, store, MISSING)
    assert outcome.state is DeletionState.ABSENT
    assert outcome.location == "/catalog/authors"


@pytest.mark.asyncio
async def test_author_blocked_until_books_removed(store, seed):
    author = await seed.author()
    book = await seed.book(author)

    assert (await deletion.delete(AUTHOR, store, author.id)).blocked
    assert (await deletion.delete(BOOK, store, book.id)).state is DeletionState.DELETED
    assert (await deletion.delete(AUTHOR, store, author.id)).state is DeletionState.DELETED


@pytest.mark.asyncio
async def test_book_blocked_by_copies(store, seed):
    book = await seed.book(await seed.author())
    copy = await seed.copy(book)

    outcome = await deletion.delete(BOOK, store, book.id)
    assert outcome.blocked
    assert [c.id for c in outcome.dependents] == [copy.id]

    assert (await deletion.delete(BOOKINSTANCE, store, copy.id)).state is DeletionState.DELETED
    assert (await deletion.delete(BOOK, store, book.id)).state is DeletionState.DELETED
    async with store.session() as session:
        assert await BookRepository(session).count() == 0


@pytest.mark.asyncio
async def test_deleting_book_keeps_its_genres(store, seed):
    fiction = await seed.genre("Fiction")
    book = await seed.book(await seed.author(), genres=[fiction])
    await deletion.delete(BOOK, store, book.id)
    outcome = await deletion.inspect(GENRE, store, fiction.id)
    assert outcome.state is DeletionState.CONFIRMED
