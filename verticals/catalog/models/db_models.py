"""SQLAlchemy models for the catalog vertical.

Each model inherits from Base and uses DocumentMixin for its identifier.
The to_record() method converts a row into the immutable record type used
by repositories, pipelines and views. References are plain foreign keys;
nothing cascades, so referential integrity on delete is enforced by the
dependency-checked deletion workflow.

Free-text columns are unbounded Text: values are stored HTML-escaped, which
can make them longer than the validated input.
"""

from datetime import date

from sqlalchemy import Column, Date, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.models.base import Base, DocumentMixin
from verticals.catalog.models.schemas import (
    AuthorRecord,
    BookInstanceRecord,
    BookInstanceStatus,
    BookRecord,
    GenreRecord,
)

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id"), primary_key=True),
    Column("genre_id", String(36), ForeignKey("genres.id"), primary_key=True),
)


class Author(DocumentMixin, Base):
    """A book author."""

    __tablename__ = "authors"

    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    family_name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[date | None] = mapped_column(Date, nullable=True)

    def to_record(self) -> AuthorRecord:
        return AuthorRecord(
            id=self.id,
            first_name=self.first_name,
            family_name=self.family_name,
            date_of_birth=self.date_of_birth,
            date_of_death=self.date_of_death,
        )


class Genre(DocumentMixin, Base):
    """A book category such as Fiction or Poetry."""

    __tablename__ = "genres"

    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    def to_record(self) -> GenreRecord:
        return GenreRecord(id=self.id, name=self.name)


class Book(DocumentMixin, Base):
    """A title in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("authors.id"), nullable=False, index=True
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped["Author"] = relationship(lazy="selectin")
    genres: Mapped[list["Genre"]] = relationship(
        secondary=book_genres, lazy="selectin", order_by="Genre.name"
    )

    def to_record(self) -> BookRecord:
        return BookRecord(
            id=self.id,
            title=self.title,
            author_id=self.author_id,
            summary=self.summary,
            isbn=self.isbn,
            genre_ids=tuple(g.id for g in self.genres),
            author=self.author.to_record() if self.author else None,
            genres=tuple(g.to_record() for g in self.genres),
        )


class BookInstance(DocumentMixin, Base):
    """A physical copy of a book that can be borrowed."""

    __tablename__ = "book_instances"

    book_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("books.id"), nullable=False, index=True
    )
    imprint: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BookInstanceStatus.MAINTENANCE.value, index=True
    )
    due_back: Mapped[date | None] = mapped_column(Date, nullable=True)

    book: Mapped["Book"] = relationship(lazy="selectin")

    def to_record(self) -> BookInstanceRecord:
        return BookInstanceRecord(
            id=self.id,
            book_id=self.book_id,
            imprint=self.imprint,
            status=self.status,
            due_back=self.due_back,
            book=self.book.to_record() if self.book else None,
        )
