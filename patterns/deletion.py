"""Dependency-checked deletion.

A target is deleted only when nothing references it. The target lookup and
the dependent query run concurrently; the outcome is one of:

- ABSENT: the target does not exist (treated as already deleted)
- BLOCKED: dependents exist; the target and all dependents are returned
- CONFIRMED: no dependents (inspect only; nothing deleted yet)
- DELETED: no dependents and the target was removed

The check and the delete are separate store calls with no lock between
them, so a dependent created in that window is not detected.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from core.database import CatalogStore
from patterns.aggregation import aggregate, in_session
from patterns.profile import EntityProfile
from patterns.workflow_states import DeletionState, DeletionWorkflow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletionOutcome:
    """Final state of a deletion request and what it found."""

    state: DeletionState
    target: Any = None
    dependents: list = field(default_factory=list)
    location: str = ""

    @property
    def blocked(self) -> bool:
        return self.state is DeletionState.BLOCKED


async def _check(profile: EntityProfile, store: CatalogStore, item_id: str):
    workflow = DeletionWorkflow(entity=profile.name, item_id=item_id)
    lookups = {"target": in_session(store, profile.repository, lambda r: r.get(item_id))}
    if profile.dependents is not None:
        dep = profile.dependents
        lookups[dep.key] = in_session(store, dep.repository, lambda r: dep.query(r, item_id))
    results = await aggregate(lookups)

    target = results["target"]
    dependents = results.get(profile.dependents.key, []) if profile.dependents else []

    if target is None:
        workflow.transition(DeletionState.ABSENT)
    elif dependents:
        workflow.transition(DeletionState.BLOCKED, {"dependents": len(dependents)})
    else:
        workflow.transition(DeletionState.CONFIRMED)
    return workflow, target, list(dependents)


def _outcome(profile: EntityProfile, workflow: DeletionWorkflow, target, dependents) -> DeletionOutcome:
    logger.info(
        f"{profile.name} deletion {workflow.current_state.value}",
        extra={
            "entity": profile.name,
            "item_id": workflow.item_id,
            "state": workflow.current_state.value,
        },
    )
    return DeletionOutcome(
        state=workflow.current_state,
        target=target,
        dependents=dependents,
        location=profile.collection_url,
    )


async def inspect(profile: EntityProfile, store: CatalogStore, item_id: str) -> DeletionOutcome:
    """Run the dependency check without deleting (confirmation page)."""
    workflow, target, dependents = await _check(profile, store, item_id)
    return _outcome(profile, workflow, target, dependents)


async def delete(profile: EntityProfile, store: CatalogStore, item_id: str) -> DeletionOutcome:
    """Delete the target if nothing references it."""
    workflow, target, dependents = await _check(profile, store, item_id)
    if workflow.current_state is DeletionState.CONFIRMED:
        async with store.session() as session:
            removed = await profile.repository(session).delete(item_id)
        if not removed:
            logger.debug(
                f"{profile.name} vanished before delete",
                extra={"entity": profile.name, "item_id": item_id},
            )
        workflow.transition(DeletionState.DELETED)
    return _outcome(profile, workflow, target, dependents)
