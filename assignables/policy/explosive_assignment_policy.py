"""Defines `ExplosiveAssignmentPolicy`, which fails after assigning."""

import logging
from typing import Any

from assignables.assignable import Assignable
from assignables.errors import AssignmentFailedError
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class ExplosiveAssignmentPolicy(AssignmentPolicy):
    """
    Sets the value, then always raises `AssignmentFailedError`.

    The variable is already updated when the error is raised.
    """

    def assign(self, value: Any, variable: Assignable) -> None:
        variable.set(value)
        logger.error(
            "Correctly assigned value [%s] into variable [%s].",
            value,
            variable,
        )
        raise AssignmentFailedError(
            f"Correctly assigned value [{value}] into variable [{variable}].",
            value=value,
            target=variable,
        )
