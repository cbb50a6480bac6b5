from assignables.assignable import Assignable
from assignables.policy.direct_assignment_policy import DirectAssignmentPolicy


def test_sets_value() -> None:
    variable = Assignable(1)
    DirectAssignmentPolicy().assign(2, variable)
    assert variable.get() == 2


def test_sets_none() -> None:
    variable = Assignable(1)
    DirectAssignmentPolicy().assign(None, variable)
    assert variable.get() is None


def test_repr() -> None:
    assert repr(DirectAssignmentPolicy()) == "DirectAssignmentPolicy()"
