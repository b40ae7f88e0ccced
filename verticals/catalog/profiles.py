"""Entity profiles for the four catalog collections."""

from patterns.aggregation import in_session
from patterns.profile import DependentQuery, EntityProfile
from verticals.catalog import rules
from verticals.catalog.config import config
from verticals.catalog.models.schemas import (
    AuthorRecord,
    BookInstanceRecord,
    BookRecord,
    GenreRecord,
)
from verticals.catalog.repository import (
    AuthorRepository,
    BookInstanceRepository,
    BookRepository,
    GenreRepository,
)


def _book_form_lookups(store):
    return {
        "authors": in_session(store, AuthorRepository, lambda r: r.list()),
        "genres": in_session(store, GenreRepository, lambda r: r.list()),
    }


def _bookinstance_form_lookups(store):
    return {"books": in_session(store, BookRepository, lambda r: r.list())}


AUTHOR = EntityProfile(
    name="Author",
    repository=AuthorRepository,
    record=AuthorRecord,
    kinds=rules.AUTHOR_KINDS,
    create_rules=rules.AUTHOR_RULES,
    collection_url="/catalog/authors",
    dependents=DependentQuery(
        key="author_books",
        repository=BookRepository,
        query=lambda repo, item_id: repo.by_author(item_id),
    ),
)

GENRE = EntityProfile(
    name="Genre",
    repository=GenreRepository,
    record=GenreRecord,
    kinds=rules.GENRE_KINDS,
    create_rules=rules.GENRE_CREATE_RULES,
    update_rules=rules.GENRE_UPDATE_RULES,
    collection_url="/catalog/genres",
    natural_key="name",
    dependents=DependentQuery(
        key="genre_books",
        repository=BookRepository,
        query=lambda repo, item_id: repo.by_genre(item_id),
    ),
)

BOOK = EntityProfile(
    name="Book",
    repository=BookRepository,
    record=BookRecord,
    kinds=rules.BOOK_KINDS,
    create_rules=rules.BOOK_RULES,
    collection_url="/catalog/books",
    field_map={"author": "author_id", "genre": "genre_ids"},
    form_lookups=_book_form_lookups,
    dependents=DependentQuery(
        key="book_instances",
        repository=BookInstanceRepository,
        query=lambda repo, item_id: repo.by_book(item_id),
    ),
)

BOOKINSTANCE = EntityProfile(
    name="BookInstance",
    repository=BookInstanceRepository,
    record=BookInstanceRecord,
    kinds=rules.BOOKINSTANCE_KINDS,
    create_rules=rules.BOOKINSTANCE_RULES,
    collection_url="/catalog/bookinstances",
    field_map={"book": "book_id"},
    defaults={"status": config.inventory.default_status},
    form_lookups=_bookinstance_form_lookups,
)
