"""Assignables: assign a value into a variable, with policies.

The assignment is performed by a pluggable `AssignmentPolicy`, optionally
while holding a lock and optionally on a background thread with a timeout.
"""

from assignables.assignable import Assignable
from assignables.assignables import Assignables, assign
from assignables.config.assignment_config import AssignmentConfig
from assignables.errors import (
    AssignmentError,
    AssignmentFailedError,
    AssignmentTimedOutError,
    AssignmentUnsupportedError,
    ProcessAbortedError,
    TypeMismatchError,
)
from assignables.policy import (
    AssignmentPolicy,
    DirectAssignmentPolicy,
    DoAfterDelayAssignmentPolicy,
    ExplosiveAssignmentPolicy,
    MD5AssignmentPolicy,
    OptionalAssignmentPolicy,
    StochasticAssignmentPolicy,
    UnsupportedAssignmentPolicy,
)

__all__ = [
    "Assignable",
    "Assignables",
    "AssignmentConfig",
    "AssignmentError",
    "AssignmentFailedError",
    "AssignmentPolicy",
    "AssignmentTimedOutError",
    "AssignmentUnsupportedError",
    "DirectAssignmentPolicy",
    "DoAfterDelayAssignmentPolicy",
    "ExplosiveAssignmentPolicy",
    "MD5AssignmentPolicy",
    "OptionalAssignmentPolicy",
    "ProcessAbortedError",
    "StochasticAssignmentPolicy",
    "TypeMismatchError",
    "UnsupportedAssignmentPolicy",
    "assign",
]
