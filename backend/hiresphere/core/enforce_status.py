"""Application Status Policy — single hook deciding whether a status change is allowed.

Invariants:
    - check_status_transition is PURE: raises or returns, never mutates
    - ALLOWED_TRANSITIONS is the single source of truth for the policy
    - Every status may currently follow every status, including itself

Design Decisions:
    - Permissive graph kept until product defines a review workflow; a stricter
      state machine only needs a new ALLOWED_TRANSITIONS table, not new call sites
"""

from hiresphere.core.domain_types import ApplicationStatus
from hiresphere.core.errors import StatusTransitionError


ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    status: frozenset(ApplicationStatus) for status in ApplicationStatus
}


def check_status_transition(
    current: ApplicationStatus,
    requested: ApplicationStatus,
    allowed: dict[ApplicationStatus, frozenset[ApplicationStatus]] = ALLOWED_TRANSITIONS,
) -> None:
    """Raise StatusTransitionError if requested may not follow current."""
    if requested not in allowed.get(current, frozenset()):
        raise StatusTransitionError(current.value, requested.value)
