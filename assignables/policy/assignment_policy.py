"""
Defines the `AssignmentPolicy` abstract base class.

An `AssignmentPolicy` decides how a single assignment step puts a value into
an `Assignable`. `Assignables.execute()` invokes it once per loop iteration,
either on the calling thread or on a background worker.
"""

from abc import ABC, abstractmethod
from typing import Any

from assignables.assignable import Assignable


# pylint: disable=too-few-public-methods # Abstract interface definition.
class AssignmentPolicy(ABC):
    """
    Strategy for performing one assignment step.

    Implementations may block, may raise, and are not required to return.
    """

    @abstractmethod
    def assign(self, value: Any, variable: Assignable) -> None:
        """
        Puts |value| into |variable|.

        Args:
            value: The value to assign.
            variable: The cell receiving the value.

        Raises:
            Exception: Any failure of the step. `Assignables.execute()` wraps
                it into an `AssignmentFailedError`.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
