"""Response helpers shared by the catalog routers.

Maps pipeline results onto HTTP: redirects are 302s, redisplays and
blocked deletions are ordinary 200 pages.
"""

from typing import Any, Iterable

from fastapi import Request
from fastapi.responses import HTMLResponse, RedirectResponse

from core.engine.template_engine import TemplateEngine
from patterns.deletion import DeletionOutcome
from patterns.mutation import MutationResult, Redirect
from patterns.workflow_states import DeletionState
from verticals.catalog import renderer  # noqa: F401


def render(view: str, context: dict[str, Any], status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(TemplateEngine.render(view, context), status_code=status_code)


def redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=302)


async def read_form(request: Request, multi: Iterable[str] = ()) -> dict[str, Any]:
    """Form body as a plain mapping; fields in `multi` keep every value."""
    form = await request.form()
    multi = set(multi)
    return {
        key: form.getlist(key) if key in multi else form.get(key)
        for key in form.keys()
    }


def mutation_response(result: MutationResult, view: str, title: str, entity_key: str):
    """Redirect on success, otherwise re-render the form with errors."""
    if isinstance(result, Redirect):
        return redirect(result.location)
    return render(view, {
        "title": title,
        entity_key: result.entity,
        "errors": result.errors,
        **result.context,
    })


def deletion_response(
    outcome: DeletionOutcome,
    view: str,
    title: str,
    target_key: str,
    dependents_key: str,
):
    """Redirect when the target is gone, otherwise show the delete page."""
    if outcome.state in (DeletionState.ABSENT, DeletionState.DELETED):
        return redirect(outcome.location)
    return render(view, {
        "title": title,
        target_key: outcome.target,
        dependents_key: outcome.dependents,
    })
