"""Defines `UnsupportedAssignmentPolicy`."""

import logging
from typing import Any

from assignables.assignable import Assignable
from assignables.errors import AssignmentUnsupportedError
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class UnsupportedAssignmentPolicy(AssignmentPolicy):
    """Always raises `AssignmentUnsupportedError`; never sets the variable."""

    def assign(self, value: Any, variable: Assignable) -> None:
        logger.error(
            "We don't support the assignment of value [%s] into variable [%s] "
            "yet!",
            value,
            variable,
        )
        raise AssignmentUnsupportedError(
            f"We don't support the assignment of value [{value}] into "
            f"variable [{variable}] yet!"
        )
