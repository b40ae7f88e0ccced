"""Test record derived fields."""
from datetime import date

import pytest
from pydantic import ValidationError

from verticals.catalog.models.schemas import (
    AuthorRecord,
    BookInstanceRecord,
    BookRecord,
    GenreRecord,
    format_date,
)


def test_author_name_and_lifespan():
    author = AuthorRecord(
        id="a1",
        first_name="Isaac",
        family_name="Asimov",
        date_of_birth=date(1920, 1, 2),
        date_of_death=date(1992, 4, 6),
    )
    assert author.name == "Asimov, Isaac"
    assert author.lifespan == "January 2nd, 1920 - April 6th, 1992"
    assert author.url == "/catalog/author/a1"


def test_lifespan_empty_without_both_dates():
    assert AuthorRecord(first_name="Ben", family_name="Bova", date_of_birth=date(1932, 11, 8)).lifespan == ""


def test_url_empty_for_unsaved_record():
    assert GenreRecord(name="Fiction").url == ""


def test_due_back_formatted():
    copy = BookInstanceRecord(id="c1", book_id="b1", imprint="Gollancz", due_back=date(2020, 3, 3))
    assert copy.due_back_formatted == "March 3rd, 2020"
    assert copy.status == "Maintenance"
    assert BookInstanceRecord(imprint="x").due_back_formatted == ""
    assert format_date(None) == ""


def test_document_holds_stored_fields_only():
    book = BookRecord(
        id="b1", title="Dune", author_id="a1", summary="Spice.", isbn="1",
        genre_ids=("g1",), author=AuthorRecord(first_name="Frank", family_name="Herbert"),
    )
    assert book.document() == {
        "title": "Dune", "author_id": "a1", "summary": "Spice.", "isbn": "1", "genre_ids": ("g1",),
    }


def test_records_are_immutable():
    genre = GenreRecord(id="g1", name="Fiction")
    with pytest.raises(ValidationError):
        genre.name = "Poetry"


def test_format_date_ordinal_suffixes():
    assert format_date(date(1920, 1, 1)) == "January 1st, 1920"
    assert format_date(date(1920, 1, 2)) == "January 2nd, 1920"
    assert format_date(date(1920, 1, 3)) == "January 3rd, 1920"
    assert format_date(date(1920, 1, 4)) == "January 4th, 1920"
    assert format_date(date(1920, 1, 11)) == "January 11th, 1920"
    assert format_date(date(1920, 1, 12)) == "January 12th, 1920"
    assert format_date(date(1920, 1, 13)) == "January 13th, 1920"
    assert format_date(date(1920, 1, 22)) == "January 22nd, 1920"
    assert format_date(date(1920, 1, 31)) == "January 31st, 1920"
