import pytest

from assignables.assignable import Assignable
from assignables.errors import AssignmentFailedError
from assignables.policy.explosive_assignment_policy import (
    ExplosiveAssignmentPolicy,
)


def test_sets_then_raises() -> None:
    variable = Assignable("before")
    try:
        ExplosiveAssignmentPolicy().assign("after", variable)
    except AssignmentFailedError as e:
        assert variable.get() == "after"
        assert e.value == "after"
        assert e.target is variable
        assert "Correctly assigned value [after]" in str(e)
    else:
        pytest.fail("ExplosiveAssignmentPolicy should always raise.")
