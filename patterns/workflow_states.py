"""Enum-based workflow state machine pattern.

Defines workflow states as Python enums with explicit transition
validation. The state definitions are independent of whatever drives them.

Domain: dependency-checked deletion of a catalog entity.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# State definitions
# ---------------------------------------------------------------------------

class DeletionState(str, Enum):
    """Deletion workflow states."""

    REQUESTED = "requested"
    ABSENT = "absent"          # target already gone
    BLOCKED = "blocked"        # dependents still reference the target
    CONFIRMED = "confirmed"    # no dependents, safe to delete
    DELETED = "deleted"


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

# Allowed transitions: {current_state: [allowed_next_states]}
_DELETION_TRANSITIONS: dict[DeletionState, list[DeletionState]] = {
    DeletionState.REQUESTED: [
        DeletionState.ABSENT,
        DeletionState.BLOCKED,
        DeletionState.CONFIRMED,
    ],
    DeletionState.CONFIRMED: [DeletionState.DELETED],
    DeletionState.ABSENT: [],   # terminal
    DeletionState.BLOCKED: [],  # terminal
    DeletionState.DELETED: [],  # terminal
}


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass
class WorkflowTransition:
    """Record of a single state transition."""

    from_state: str
    to_state: str
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DeletionWorkflow:
    """One deletion request with state tracking.

    Usage::

        wf = DeletionWorkflow(entity="genre", item_id=genre_id)
        wf.transition(DeletionState.CONFIRMED)
        wf.transition(DeletionState.DELETED)
    """

    entity: str
    item_id: str
    current_state: DeletionState = DeletionState.REQUESTED
    history: list[WorkflowTransition] = field(default_factory=list)

    def can_transition(self, to_state: DeletionState) -> bool:
        """Check if a transition is allowed from the current state."""
        return to_state in _DELETION_TRANSITIONS.get(self.current_state, [])

    def transition(
        self,
        to_state: DeletionState,
        metadata: dict[str, Any] | None = None,
    ) -> WorkflowTransition:
        """Execute a state transition.

        Raises ValueError if the transition is not allowed.
        """
        if not self.can_transition(to_state):
            allowed = _DELETION_TRANSITIONS.get(self.current_state, [])
            allowed_names = [s.value for s in allowed]
            raise ValueError(
                f"Cannot transition from {self.current_state.value} to {to_state.value}. "
                f"Allowed: {allowed_names}"
            )

        record = WorkflowTransition(
            from_state=self.current_state.value,
            to_state=to_state.value,
            timestamp=datetime.now(timezone.utc),
            metadata=metadata or {},
        )
        self.history.append(record)
        self.current_state = to_state
        return record

    @property
    def is_terminal(self) -> bool:
        """Check if the workflow is in a terminal state."""
        return len(_DELETION_TRANSITIONS.get(self.current_state, [])) == 0
