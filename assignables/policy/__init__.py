"""Assignment policies: how a single assignment step is performed."""

from assignables.policy.assignment_policy import AssignmentPolicy
from assignables.policy.direct_assignment_policy import DirectAssignmentPolicy
from assignables.policy.do_after_delay_assignment_policy import (
    DoAfterDelayAssignmentPolicy,
)
from assignables.policy.explosive_assignment_policy import (
    ExplosiveAssignmentPolicy,
)
from assignables.policy.md5_assignment_policy import MD5AssignmentPolicy
from assignables.policy.optional_assignment_policy import (
    OptionalAssignmentPolicy,
)
from assignables.policy.stochastic_assignment_policy import (
    StochasticAssignmentPolicy,
)
from assignables.policy.unsupported_assignment_policy import (
    UnsupportedAssignmentPolicy,
)

__all__ = [
    "AssignmentPolicy",
    "DirectAssignmentPolicy",
    "DoAfterDelayAssignmentPolicy",
    "ExplosiveAssignmentPolicy",
    "MD5AssignmentPolicy",
    "OptionalAssignmentPolicy",
    "StochasticAssignmentPolicy",
    "UnsupportedAssignmentPolicy",
]
