"""Status Policy — permissive default and pluggable transition table."""

import pytest

from hiresphere.core.domain_types import ApplicationStatus
from hiresphere.core.enforce_status import ALLOWED_TRANSITIONS, check_status_transition
from hiresphere.core.errors import StatusTransitionError


@pytest.mark.parametrize("current", list(ApplicationStatus))
@pytest.mark.parametrize("requested", list(ApplicationStatus))
def test_default_policy_allows_every_transition(current, requested):
    check_status_transition(current, requested)


def test_default_table_covers_every_status():
    assert set(ALLOWED_TRANSITIONS) == set(ApplicationStatus)


def test_custom_table_rejects_unlisted_transition():
    strict = {
        ApplicationStatus.HIRED: frozenset({ApplicationStatus.HIRED}),
    }
    with pytest.raises(StatusTransitionError) as exc:
        check_status_transition(
            ApplicationStatus.HIRED, ApplicationStatus.PENDING, strict,
        )
    assert exc.value.current == "hired"
    assert exc.value.requested == "pending"
    assert exc.value.http_status == 409
