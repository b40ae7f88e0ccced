"""HTML views for the catalog vertical.

Registers one body renderer per view with the template engine. Importing
this module is enough to make the views available.
"""

from typing import Any, Dict

from core.engine.template_engine import (
    bullet_list,
    error_list,
    form,
    link,
    register_view,
    select_input,
    text_input,
)
from verticals.catalog.config import config
from verticals.catalog.models.schemas import BookInstanceStatus


def _date_value(value) -> str:
    return value.isoformat() if value else ""


def _book_line(book) -> str:
    author = f" ({book.author.name})" if book.author else ""
    return link(book.url, book.title) + author


def _copy_line(copy) -> str:
    on_loan = copy.status != BookInstanceStatus.AVAILABLE.value and copy.due_back
    due = f" (Due: {copy.due_back_formatted})" if on_loan else ""
    return f"{link(copy.url, copy.imprint)} - {copy.status}{due}"


def _delete_body(target_label: str, dependents: list, dependent_label: str, render_dependent) -> str:
    if dependents:
        return (
            f"<p><strong>Delete the following {dependent_label} before attempting "
            f"to delete this {target_label}.</strong></p>"
            + bullet_list(render_dependent(d) for d in dependents)
        )
    return f"<p>Do you really want to delete this {target_label}?</p>" + form("", "", "Delete")


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

def render_index(ctx: Dict[str, Any]) -> str:
    counts = [
        f"<strong>Books:</strong> {ctx['book_count']}",
        f"<strong>Copies:</strong> {ctx['book_instance_count']}",
        f"<strong>Copies available:</strong> {ctx['book_instance_available_count']}",
        f"<strong>Authors:</strong> {ctx['author_count']}",
        f"<strong>Genres:</strong> {ctx['genre_count']}",
    ]
    return "<p>The library has the following record counts:</p>" + bullet_list(counts)


def render_error(ctx: Dict[str, Any]) -> str:
    return f"<p>{ctx.get('message', 'Something went wrong.')}</p>"


# ---------------------------------------------------------------------------
# Genre
# ---------------------------------------------------------------------------

def render_genre_list(ctx: Dict[str, Any]) -> str:
    return bullet_list(
        (link(g.url, g.name) for g in ctx["genre_list"]),
        empty="There are no genres.",
    )


def render_genre_detail(ctx: Dict[str, Any]) -> str:
    genre = ctx["genre"]
    return (
        f"<h2>{genre.name}</h2><h3>Books</h3>"
        + bullet_list((_book_line(b) + f"<p>{b.summary}</p>" for b in ctx["genre_books"]),
                      empty="This genre has no books.")
        + f'<p>{link(genre.url + "/delete", "Delete genre")} | '
          f'{link(genre.url + "/update", "Update genre")}</p>'
    )


def render_genre_form(ctx: Dict[str, Any]) -> str:
    genre = ctx.get("genre")
    return form("", text_input("name", "Genre:", genre.name if genre else "")) + error_list(
        ctx.get("errors", [])
    )


def render_genre_delete(ctx: Dict[str, Any]) -> str:
    genre = ctx["genre"]
    return f"<h2>{genre.name}</h2>" + _delete_body("genre", ctx["genre_books"], "books", _book_line)


# ---------------------------------------------------------------------------
# Author
# ---------------------------------------------------------------------------

def render_author_list(ctx: Dict[str, Any]) -> str:
    return bullet_list(
        (link(a.url, a.name) + (f" ({a.lifespan})" if a.lifespan else "") for a in ctx["author_list"]),
        empty="There are no authors.",
    )


def render_author_detail(ctx: Dict[str, Any]) -> str:
    author = ctx["author"]
    return (
        f"<h2>{author.name}</h2><p>{author.lifespan}</p><h3>Books</h3>"
        + bullet_list((link(b.url, b.title) + f"<p>{b.summary}</p>" for b in ctx["author_books"]),
                      empty="This author has no books.")
        + f'<p>{link(author.url + "/delete", "Delete author")} | '
          f'{link(author.url + "/update", "Update author")}</p>'
    )


def render_author_form(ctx: Dict[str, Any]) -> str:
    author = ctx.get("author")
    fields = "".join([
        text_input("first_name", "First Name:", author.first_name if author else ""),
        text_input("family_name", "Family Name:", author.family_name if author else ""),
        text_input("date_of_birth", "Date of birth:",
                   _date_value(author.date_of_birth) if author else "", kind="date"),
        text_input("date_of_death", "Date of death:",
                   _date_value(author.date_of_death) if author else "", kind="date"),
    ])
    return form("", fields) + error_list(ctx.get("errors", []))


def render_author_delete(ctx: Dict[str, Any]) -> str:
    author = ctx["author"]
    return f"<h2>{author.name}</h2>" + _delete_body(
        "author", ctx["author_books"], "books", lambda b: link(b.url, b.title)
    )


# ---------------------------------------------------------------------------
# Book
# ---------------------------------------------------------------------------

def render_book_list(ctx: Dict[str, Any]) -> str:
    return bullet_list((_book_line(b) for b in ctx["book_list"]), empty="There are no books.")


def render_book_detail(ctx: Dict[str, Any]) -> str:
    book = ctx["book"]
    author = link(book.author.url, book.author.name) if book.author else ""
    genres = ", ".join(link(g.url, g.name) for g in book.genres)
    return (
        f"<h2>{book.title}</h2>"
        f"<p><strong>Author:</strong> {author}</p>"
        f"<p><strong>Summary:</strong> {book.summary}</p>"
        f"<p><strong>ISBN:</strong> {book.isbn}</p>"
        f"<p><strong>Genre:</strong> {genres}</p><h3>Copies</h3>"
        + bullet_list((_copy_line(c) for c in ctx["book_instances"]),
                      empty="There are no copies of this book in the library.")
        + f'<p>{link(book.url + "/delete", "Delete book")} | '
          f'{link(book.url + "/update", "Update book")}</p>'
    )


def render_book_form(ctx: Dict[str, Any]) -> str:
    book = ctx.get("book")
    authors = [(a.id, a.name) for a in ctx.get("authors", [])]
    checked = set(book.genre_ids) if book else set()
    genre_boxes = "".join(
        f'<label><input type="checkbox" name="genre" value="{g.id}"'
        f'{" checked" if g.id in checked else ""}> {g.name}</label>'
        for g in ctx.get("genres", [])
    )
    fields = "".join([
        text_input("title", "Title:", book.title if book else ""),
        select_input("author", "Author:", authors, book.author_id if book else ""),
        text_input("summary", "Summary:", book.summary if book else ""),
        text_input("isbn", "ISBN:", book.isbn if book else ""),
        f'<div class="form-group"><span>Genre:</span>{genre_boxes}</div>',
    ])
    return form("", fields) + error_list(ctx.get("errors", []))


def render_book_delete(ctx: Dict[str, Any]) -> str:
    book = ctx["book"]
    return f"<h2>{book.title}</h2>" + _delete_body(
        "book", ctx["book_instances"], "copies", _copy_line
    )


# ---------------------------------------------------------------------------
# BookInstance
# ---------------------------------------------------------------------------

def render_bookinstance_list(ctx: Dict[str, Any]) -> str:
    return bullet_list(
        (f"{link(c.book.url, c.book.title)} : {_copy_line(c)}" if c.book else _copy_line(c)
         for c in ctx["bookinstance_list"]),
        empty="There are no book copies in this library.",
    )


def render_bookinstance_detail(ctx: Dict[str, Any]) -> str:
    copy = ctx["bookinstance"]
    title = link(copy.book.url, copy.book.title) if copy.book else ""
    due = f"<p><strong>Due back:</strong> {copy.due_back_formatted}</p>" if copy.due_back else ""
    return (
        f"<h2>ID: {copy.id}</h2>"
        f"<p><strong>Title:</strong> {title}</p>"
        f"<p><strong>Imprint:</strong> {copy.imprint}</p>"
        f"<p><strong>Status:</strong> {copy.status}</p>{due}"
        f'<p>{link(copy.url + "/delete", "Delete copy")} | '
        f'{link(copy.url + "/update", "Update copy")}</p>'
    )


def render_bookinstance_form(ctx: Dict[str, Any]) -> str:
    copy = ctx.get("bookinstance")
    books = [(b.id, b.title) for b in ctx.get("books", [])]
    statuses = [(s, s) for s in config.inventory.statuses]
    fields = "".join([
        select_input("book", "Book:", books, copy.book_id if copy else ""),
        text_input("imprint", "Imprint:", copy.imprint if copy else ""),
        text_input("due_back", "Date when book available:",
                   _date_value(copy.due_back) if copy else "", kind="date"),
        select_input("status", "Status:", statuses,
                     copy.status if copy else config.inventory.default_status),
    ])
    return form("", fields) + error_list(ctx.get("errors", []))


def render_bookinstance_delete(ctx: Dict[str, Any]) -> str:
    copy = ctx["bookinstance"]
    return f"<p>{_copy_line(copy)}</p>" + _delete_body("copy", [], "", _copy_line)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

for _name, _renderer in {
    "index": render_index,
    "error": render_error,
    "genre_list": render_genre_list,
    "genre_detail": render_genre_detail,
    "genre_form": render_genre_form,
    "genre_delete": render_genre_delete,
    "author_list": render_author_list,
    "author_detail": render_author_detail,
    "author_form": render_author_form,
    "author_delete": render_author_delete,
    "book_list": render_book_list,
    "book_detail": render_book_detail,
    "book_form": render_book_form,
    "book_delete": render_book_delete,
    "bookinstance_list": render_bookinstance_list,
    "bookinstance_detail": render_bookinstance_detail,
    "bookinstance_form": render_bookinstance_form,
    "bookinstance_delete": render_bookinstance_delete,
}.items():
    register_view(_name, _renderer)
