"""Immutable catalog records.

Records are what repositories return and what the mutation pipeline builds
from sanitized form input. Derived values (display name, lifespan, URLs)
are computed on access and never stored.
"""

from datetime import date
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, computed_field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BookInstanceStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


def _ordinal(day: int) -> str:
    """1st, 2nd, 3rd, 4th ... 11th, 12th, 13th ... 21st."""
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    return f"{day}{_SUFFIXES.get(day % 10, 'th')}"


def format_date(value: Optional[date]) -> str:
    """Render a date as e.g. "March 3rd, 1920"; empty when absent."""
    if value is None:
        return ""
    return f"{value:%B} {_ordinal(value.day)}, {value.year}"


class Record(BaseModel):
    """Base for all records: frozen, identified by an optional string id."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None

    # Stored document fields, in form order; collection is the URL segment
    stored_fields: ClassVar[tuple[str, ...]] = ()
    collection: ClassVar[str] = ""

    @computed_field
    @property
    def url(self) -> str:
        return f"/catalog/{self.collection}/{self.id}" if self.id else ""

    def document(self) -> dict:
        """The stored fields only, ready for a repository write."""
        return {name: getattr(self, name) for name in self.stored_fields}


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class AuthorRecord(Record):
    stored_fields: ClassVar[tuple[str, ...]] = (
        "first_name", "family_name", "date_of_birth", "date_of_death",
    )
    collection: ClassVar[str] = "author"

    first_name: str = ""
    family_name: str = ""
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None

    @computed_field
    @property
    def name(self) -> str:
        return f"{self.family_name}, {self.first_name}"

    @computed_field
    @property
    def lifespan(self) -> str:
        if self.date_of_birth is None or self.date_of_death is None:
            return ""
        return f"{format_date(self.date_of_birth)} - {format_date(self.date_of_death)}"


class GenreRecord(Record):
    stored_fields: ClassVar[tuple[str, ...]] = ("name",)
    collection: ClassVar[str] = "genre"

    name: str = ""


class BookRecord(Record):
    stored_fields: ClassVar[tuple[str, ...]] = ("title", "author_id", "summary", "isbn", "genre_ids")
    collection: ClassVar[str] = "book"

    title: str = ""
    author_id: str = ""
    summary: str = ""
    isbn: str = ""
    genre_ids: tuple[str, ...] = ()

    # Populated on reads, ignored on writes
    author: Optional[AuthorRecord] = None
    genres: tuple[GenreRecord, ...] = ()


class BookInstanceRecord(Record):
    stored_fields: ClassVar[tuple[str, ...]] = ("book_id", "imprint", "status", "due_back")
    collection: ClassVar[str] = "bookinstance"

    book_id: str = ""
    imprint: str = ""
    status: str = BookInstanceStatus.MAINTENANCE.value
    due_back: Optional[date] = None

    # Populated on reads, ignored on writes
    book: Optional[BookRecord] = None

    @computed_field
    @property
    def due_back_formatted(self) -> str:
        return format_date(self.due_back)
