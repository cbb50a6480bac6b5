from typing import Any

import pytest

from assignables.assignable import Assignable
from assignables.policy.assignment_policy import AssignmentPolicy


def test_cannot_instantiate_abstract_policy() -> None:
    with pytest.raises(TypeError):
        AssignmentPolicy()  # type: ignore[abstract]


def test_subclass_gets_default_repr() -> None:
    class DoublingPolicy(AssignmentPolicy):
        def assign(self, value: Any, variable: Assignable) -> None:
            variable.set(value * 2)

    variable = Assignable()
    policy = DoublingPolicy()
    policy.assign(21, variable)
    assert variable.get() == 42
    assert repr(policy) == "DoublingPolicy()"
