"""Template Engine — turns view models into HTML pages.

Each vertical registers one renderer per view name; the engine dispatches
on that name and wraps the body in the shared page layout. A generic
fallback lists the context keys for any unregistered view.

Values coming out of the catalog were escaped on the way in (see
patterns.rules_engine.sanitize), so renderers interpolate them as-is.
Literal text produced here is markup-safe by construction.
"""

from typing import Any, Callable, Dict, Iterable, Optional


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def link(url: str, text: str) -> str:
    """An anchor, or bare text when there is no URL."""
    if not url:
        return text
    return f'<a href="{url}">{text}</a>'


def bullet_list(items: Iterable[str], empty: str = "None.") -> str:
    """A <ul> of pre-rendered items, or a paragraph when there are none."""
    items = list(items)
    if not items:
        return f"<p>{empty}</p>"
    return "<ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul>"


def error_list(errors: Iterable[Any]) -> str:
    """Validation messages from a list of failed rule results."""
    errors = list(errors)
    if not errors:
        return ""
    return '<ul class="errors">' + "".join(
        f"<li>{e.message}</li>" for e in errors
    ) + "</ul>"


def text_input(name: str, label: str, value: Any = "", kind: str = "text") -> str:
    """A labelled <input>."""
    value = "" if value is None else value
    return (
        f'<div class="form-group"><label for="{name}">{label}</label>'
        f'<input id="{name}" name="{name}" type="{kind}" value="{value}"></div>'
    )


def select_input(name: str, label: str, options: Iterable[tuple[str, str]], selected: Any = "") -> str:
    """A labelled <select> from (value, text) pairs."""
    opts = "".join(
        f'<option value="{value}"{" selected" if value == selected else ""}>{text}</option>'
        for value, text in options
    )
    return (
        f'<div class="form-group"><label for="{name}">{label}</label>'
        f'<select id="{name}" name="{name}">{opts}</select></div>'
    )


def form(action: str, body: str, submit: str = "Submit") -> str:
    """A POST form."""
    return f'<form method="POST" action="{action}">{body}<button type="submit">{submit}</button></form>'


# ---------------------------------------------------------------------------
# Layout and generic fallback
# ---------------------------------------------------------------------------

_NAV = (
    ("/catalog/", "Home"),
    ("/catalog/books", "All books"),
    ("/catalog/authors", "All authors"),
    ("/catalog/genres", "All genres"),
    ("/catalog/bookinstances", "All book-instances"),
    ("/catalog/author/create", "Create new author"),
    ("/catalog/genre/create", "Create new genre"),
    ("/catalog/book/create", "Create new book"),
    ("/catalog/bookinstance/create", "Create new book instance (copy)"),
)


def render_layout(title: str, body: str) -> str:
    """Wrap a page body in the shared layout."""
    nav = bullet_list(link(url, text) for url, text in _NAV)
    return (
        "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"utf-8\">"
        f"<title>{title}</title></head><body>"
        f"<nav>{nav}</nav><main><h1>{title}</h1>{body}</main></body></html>"
    )


def render_generic(view: str, context: Dict[str, Any]) -> str:
    """Fallback body for views without a registered renderer."""
    items = [
        f"<strong>{key}:</strong> {len(value) if isinstance(value, list) else value}"
        for key, value in context.items()
        if not key.startswith("_") and key != "title"
    ]
    return bullet_list(items, empty=f"Nothing to show for {view}.")


# ---------------------------------------------------------------------------
# Renderer type and registry
# ---------------------------------------------------------------------------

ViewRenderer = Callable[[Dict[str, Any]], str]

_VIEW_RENDERERS: Dict[str, ViewRenderer] = {}


def register_view(view: str, renderer: ViewRenderer) -> None:
    """Register the body renderer for a view name.

    Example::

        def render_genre_list(ctx):
            return bullet_list(link(g.url, g.name) for g in ctx["genre_list"])

        register_view("genre_list", render_genre_list)
    """
    _VIEW_RENDERERS[view] = renderer


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TemplateEngine:
    """Renders a named view with a context into a full HTML page.

    Usage::

        html = TemplateEngine.render("genre_detail", {
            "title": "Genre Detail", "genre": genre, "genre_books": books,
        })
    """

    @staticmethod
    def render(view: str, context: Optional[Dict[str, Any]] = None) -> str:
        context = context or {}
        renderer = _VIEW_RENDERERS.get(view)
        body = renderer(context) if renderer else render_generic(view, context)
        return render_layout(context.get("title", view), body)
