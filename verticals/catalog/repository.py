"""Catalog repositories — async database access per collection.

Extends BaseRepository with the catalog's dependent queries (books by
author, books by genre, copies of a book) and natural-key lookups.
"""

from typing import Any

from sqlalchemy import select

from patterns.repository import BaseRepository, parse_id
from verticals.catalog.models.db_models import Author, Book, BookInstance, Genre
from verticals.catalog.models.schemas import BookInstanceStatus, BookRecord


class AuthorRepository(BaseRepository[Author]):
    """Authors, ordered by family name."""

    model = Author
    default_order = "family_name"


class GenreRepository(BaseRepository[Genre]):
    """Genres, ordered by name."""

    model = Genre
    default_order = "name"


class BookRepository(BaseRepository[Book]):
    """Books, ordered by title."""

    model = Book
    default_order = "title"

    async def _apply(self, item: Book, data: dict[str, Any]) -> None:
        data = dict(data)
        genre_ids = data.pop("genre_ids", ())
        if data.get("author_id"):
            data["author_id"] = parse_id(data["author_id"])
        await super()._apply(item, data)
        if genre_ids:
            ids = [parse_id(g) for g in genre_ids]
            result = await self.session.execute(select(Genre).where(Genre.id.in_(ids)))
            item.genres = list(result.scalars().all())
        else:
            item.genres = []

    async def by_author(self, author_id: str) -> list[BookRecord]:
        """Books written by an author."""
        return await self.find(author_id=parse_id(author_id))

    async def by_genre(self, genre_id: str) -> list[BookRecord]:
        """Books whose genre set includes a genre."""
        stmt = (
            select(Book)
            .where(Book.genres.any(Genre.id == parse_id(genre_id)))
            .order_by(Book.title)
        )
        result = await self.session.execute(stmt)
        return [row.to_record() for row in result.scalars().all()]


class BookInstanceRepository(BaseRepository[BookInstance]):
    """Physical copies, ordered by imprint."""

    model = BookInstance
    default_order = "imprint"

    async def _apply(self, item: BookInstance, data: dict[str, Any]) -> None:
        data = dict(data)
        if data.get("book_id"):
            data["book_id"] = parse_id(data["book_id"])
        await super()._apply(item, data)

    async def by_book(self, book_id: str) -> list:
        """Copies of a book."""
        return await self.find(book_id=parse_id(book_id))

    async def count_available(self) -> int:
        """Copies currently on the shelf."""
        return await self.count(status=BookInstanceStatus.AVAILABLE.value)
