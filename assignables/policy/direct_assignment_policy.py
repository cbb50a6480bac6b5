"""Defines `DirectAssignmentPolicy`, a plain set."""

import logging
from typing import Any

from assignables.assignable import Assignable
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class DirectAssignmentPolicy(AssignmentPolicy):
    """Sets the value as-is. Never fails."""

    def assign(self, value: Any, variable: Assignable) -> None:
        logger.debug("Setting value [%s] into variable [%s].", value, variable)
        variable.set(value)
