from typing import Any

import pytest

from assignables.assignable import Assignable
from assignables.policy.optional_assignment_policy import (
    OptionalAssignmentPolicy,
)


@pytest.mark.parametrize("value", [None, "", [], {}, (), b""])
def test_absent_values_are_skipped(value: Any) -> None:
    variable = Assignable("kept")
    OptionalAssignmentPolicy().assign(value, variable)
    assert variable.get() == "kept"


@pytest.mark.parametrize("value", [0, False, 0.0, "x", [None], {"k": 1}])
def test_present_values_are_set(value: Any) -> None:
    """Falsy scalars still count as present."""
    variable = Assignable("kept")
    OptionalAssignmentPolicy().assign(value, variable)
    assert variable.get() == value
