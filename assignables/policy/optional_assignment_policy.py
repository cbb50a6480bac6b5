"""Defines `OptionalAssignmentPolicy`, which only assigns present values."""

import logging
from collections.abc import Sized
from typing import Any

from assignables.assignable import Assignable
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class OptionalAssignmentPolicy(AssignmentPolicy):
    """
    Sets the value only if it is present.

    None and empty containers or strings count as absent, in which case the
    variable is left untouched.
    """

    def assign(self, value: Any, variable: Assignable) -> None:
        if self.is_present(value):
            logger.debug(
                "Value [%s] is present, setting into variable [%s].",
                value,
                variable,
            )
            variable.set(value)
        else:
            logger.debug(
                "Value [%r] is absent, not setting into variable [%s].",
                value,
                variable,
            )

    @staticmethod
    def is_present(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, Sized):
            return len(value) > 0
        return True
