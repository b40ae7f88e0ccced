"""Validate → sanitize → persist pipeline for create and update.

Both flows share one protocol, parameterized by an EntityProfile and an
optional existing identifier:

1. Validate and sanitize the submitted fields.
2. Build a candidate record from the sanitized fields.
3. On failures, fetch the form's reference lists and return a Redisplay
   carrying the candidate, the failures and the lists. Nothing is written.
4. Otherwise persist: create inserts (unless a record with the same natural
   key exists, in which case the existing one is the target), update
   replaces the whole document by identifier. Return a Redirect.

Store faults propagate as StoreFailure; they are not retried.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from core.database import CatalogStore
from patterns.aggregation import aggregate
from patterns.profile import EntityProfile
from patterns.rules_engine import RuleResult, check_fields

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Redisplay:
    """Validation failed: show the form again with the user's input."""

    entity: Any
    errors: list[RuleResult]
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    """Persisted (or found): send the requester to this location."""

    location: str
    entity: Any = None
    created: bool = False


MutationResult = Redisplay | Redirect


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

async def form_context(profile: EntityProfile, store: CatalogStore) -> dict[str, Any]:
    """Reference lists a profile's form needs (e.g. all authors for a book)."""
    if profile.form_lookups is None:
        return {}
    return await aggregate(profile.form_lookups(store))


async def create(
    profile: EntityProfile,
    store: CatalogStore,
    fields: Mapping[str, Any],
) -> MutationResult:
    """Create flow: redirect to the new (or existing) record's detail page."""
    return await _run(profile, store, fields, item_id=None)


async def update(
    profile: EntityProfile,
    store: CatalogStore,
    item_id: str,
    fields: Mapping[str, Any],
) -> MutationResult:
    """Update flow: full replace, then redirect to the collection."""
    return await _run(profile, store, fields, item_id=item_id)


async def _run(
    profile: EntityProfile,
    store: CatalogStore,
    fields: Mapping[str, Any],
    item_id: str | None,
) -> MutationResult:
    updating = item_id is not None
    checked = check_fields(fields, profile.rules_for(updating), profile.kinds)
    candidate = profile.build(checked.cleaned, item_id)

    if not checked.passed:
        logger.info(
            f"{profile.name} form rejected: {sorted(checked.failed_fields())}",
            extra={"entity": profile.name, "item_id": item_id},
        )
        return Redisplay(
            entity=candidate,
            errors=checked.errors,
            context=await form_context(profile, store),
        )

    if updating:
        return await _replace(profile, store, item_id, candidate)
    return await _insert(profile, store, candidate)


async def _insert(profile: EntityProfile, store: CatalogStore, candidate) -> Redirect:
    async with store.session() as session:
        repo = profile.repository(session)
        if profile.natural_key:
            key = profile.natural_key
            existing = await repo.find_one(**{key: getattr(candidate, key)})
            if existing is not None:
                logger.info(
                    f"{profile.name} already exists, redirecting",
                    extra={"entity": profile.name, "item_id": existing.id},
                )
                return Redirect(location=existing.url, entity=existing)
        saved = await repo.create(candidate.document())

    logger.info(
        f"{profile.name} created",
        extra={"entity": profile.name, "item_id": saved.id},
    )
    return Redirect(location=saved.url, entity=saved, created=True)


async def _replace(
    profile: EntityProfile, store: CatalogStore, item_id: str, candidate,
) -> Redirect:
    async with store.session() as session:
        saved = await profile.repository(session).replace(item_id, candidate.document())

    if saved is None:
        logger.warning(
            f"{profile.name} update matched no document",
            extra={"entity": profile.name, "item_id": item_id},
        )
    else:
        logger.info(
            f"{profile.name} updated",
            extra={"entity": profile.name, "item_id": item_id},
        )
    return Redirect(location=profile.collection_url, entity=saved)
