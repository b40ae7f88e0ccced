"""Catalog validation configuration — one rule list per form.

Each entry is (field, rule, message); see patterns.rules_engine for the
evaluation order. Field kinds decide how each field is sanitized.
"""

from patterns.rules_engine import (
    ALPHANUMERIC,
    ISO_DATE,
    OPTIONAL,
    REQUIRED,
    FieldKind,
    FieldRule,
    max_length,
    one_of,
)
from verticals.catalog.config import config

_NAME_LIMIT = max_length(config.validation.max_name_length)
_LIMIT_MESSAGE = f"must be at most {config.validation.max_name_length} characters."

# ---------------------------------------------------------------------------
# Author
# ---------------------------------------------------------------------------

AUTHOR_KINDS = {
    "first_name": FieldKind.TEXT,
    "family_name": FieldKind.TEXT,
    "date_of_birth": FieldKind.DATE,
    "date_of_death": FieldKind.DATE,
}

AUTHOR_RULES = (
    FieldRule("first_name", REQUIRED, "First name must be specified."),
    FieldRule("first_name", ALPHANUMERIC, "First name has non-alphanumeric characters."),
    FieldRule("first_name", _NAME_LIMIT, f"First name {_LIMIT_MESSAGE}"),
    FieldRule("family_name", REQUIRED, "Family name must be specified."),
    FieldRule("family_name", ALPHANUMERIC, "Family name has non-alphanumeric characters."),
    FieldRule("family_name", _NAME_LIMIT, f"Family name {_LIMIT_MESSAGE}"),
    FieldRule("date_of_birth", OPTIONAL, ""),
    FieldRule("date_of_birth", ISO_DATE, "Invalid date of birth"),
    FieldRule("date_of_death", OPTIONAL, ""),
    FieldRule("date_of_death", ISO_DATE, "Invalid date of death"),
)

# ---------------------------------------------------------------------------
# Genre — update additionally insists on an alphanumeric name
# ---------------------------------------------------------------------------

GENRE_KINDS = {"name": FieldKind.TEXT}

GENRE_CREATE_RULES = (
    FieldRule("name", REQUIRED, "Genre name required"),
    FieldRule("name", _NAME_LIMIT, f"Genre name {_LIMIT_MESSAGE}"),
)

GENRE_UPDATE_RULES = (
    FieldRule("name", REQUIRED, "Name must be specified."),
    FieldRule("name", ALPHANUMERIC, "Name has non-alphanumeric characters."),
    FieldRule("name", _NAME_LIMIT, f"Name {_LIMIT_MESSAGE}"),
)

# ---------------------------------------------------------------------------
# Book
# ---------------------------------------------------------------------------

BOOK_KINDS = {
    "title": FieldKind.TEXT,
    "author": FieldKind.TEXT,
    "summary": FieldKind.TEXT,
    "isbn": FieldKind.TEXT,
    "genre": FieldKind.LIST,
}

BOOK_RULES = (
    FieldRule("title", REQUIRED, "Title must not be empty."),
    FieldRule("author", REQUIRED, "Author must not be empty."),
    FieldRule("summary", REQUIRED, "Summary must not be empty."),
    FieldRule("isbn", REQUIRED, "ISBN must not be empty"),
)

# ---------------------------------------------------------------------------
# BookInstance
# ---------------------------------------------------------------------------

BOOKINSTANCE_KINDS = {
    "book": FieldKind.TEXT,
    "imprint": FieldKind.TEXT,
    "status": FieldKind.TEXT,
    "due_back": FieldKind.DATE,
}

BOOKINSTANCE_RULES = (
    FieldRule("book", REQUIRED, "Book must be specified"),
    FieldRule("imprint", REQUIRED, "Imprint must be specified"),
    FieldRule("status", OPTIONAL, ""),
    FieldRule("status", one_of(config.inventory.statuses), "Invalid status"),
    FieldRule("due_back", OPTIONAL, ""),
    FieldRule("due_back", ISO_DATE, "Invalid date"),
)
