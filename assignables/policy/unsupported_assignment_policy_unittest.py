import logging

import pytest

from assignables.assignable import Assignable
from assignables.errors import AssignmentUnsupportedError
from assignables.policy.unsupported_assignment_policy import (
    UnsupportedAssignmentPolicy,
)


def test_always_raises_without_mutating(
    caplog: pytest.LogCaptureFixture,
) -> None:
    variable = Assignable("before")
    with caplog.at_level(logging.ERROR):
        with pytest.raises(AssignmentUnsupportedError, match="yet!"):
            UnsupportedAssignmentPolicy().assign("after", variable)

    assert variable.get() == "before"
    assert any(
        "don't support the assignment" in record.getMessage()
        for record in caplog.records
    )
