import logging
import threading
import time

import pytest

from assignables.assignable import Assignable
from assignables.policy.do_after_delay_assignment_policy import (
    DoAfterDelayAssignmentPolicy,
)


def test_sets_after_delay() -> None:
    variable = Assignable("before")
    start = time.monotonic()
    DoAfterDelayAssignmentPolicy(50).assign("after", variable)
    assert time.monotonic() - start >= 0.045
    assert variable.get() == "after"


@pytest.mark.timeout(10)
def test_interrupt_skips_the_set(caplog: pytest.LogCaptureFixture) -> None:
    variable = Assignable("before")
    policy = DoAfterDelayAssignmentPolicy(5000)

    thread = threading.Thread(target=policy.assign, args=("after", variable))
    with caplog.at_level(logging.ERROR):
        thread.start()
        time.sleep(0.05)
        policy.interrupt()
        thread.join(timeout=2.0)

    assert not thread.is_alive()
    assert variable.get() == "before"
    assert any(
        "Interrupted during assignment" in record.getMessage()
        for record in caplog.records
    )


def test_interrupt_applies_to_one_step() -> None:
    policy = DoAfterDelayAssignmentPolicy(10)
    policy.interrupt()

    skipped = Assignable("before")
    start = time.monotonic()
    policy.assign("after", skipped)
    assert time.monotonic() - start < 1.0
    assert skipped.get() == "before"

    assigned = Assignable("before")
    policy.assign("after", assigned)
    assert assigned.get() == "after"


def test_equality_by_delay() -> None:
    assert DoAfterDelayAssignmentPolicy(10) == DoAfterDelayAssignmentPolicy(10)
    assert DoAfterDelayAssignmentPolicy(10) != DoAfterDelayAssignmentPolicy(20)
    policies = {
        DoAfterDelayAssignmentPolicy(10),
        DoAfterDelayAssignmentPolicy(10),
    }
    assert len(policies) == 1
    assert (
        repr(DoAfterDelayAssignmentPolicy(10))
        == "DoAfterDelayAssignmentPolicy(delay_ms=10)"
    )
