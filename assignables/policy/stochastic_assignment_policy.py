"""Defines `StochasticAssignmentPolicy`, a fault-injection policy.

Each step draws an integer in [0, 10) and picks one of five outcomes:

    0     raises AttributeError, as dereferencing None would
    1-2   raises ProcessAbortedError
    3-7   sets the value
    8     raises ValueError
    9     enters a self-delegating route that never sets anything and ends
          with RecursionError once |max_route_depth| hops are exceeded

It exists to exercise the failure, abort and timeout paths of `Assignables`.
"""

import logging
import random
from collections.abc import Callable
from typing import Any

from assignables.assignable import Assignable
from assignables.errors import ProcessAbortedError
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)

OUTCOME_COUNT = 10


class StochasticAssignmentPolicy(AssignmentPolicy):
    """Assignment policy with randomized behavior."""

    def __init__(
        self,
        random_factory: Callable[[], random.Random] = random.Random,
        max_route_depth: int = 100,
    ) -> None:
        """
        Initializes the policy.

        Args:
            random_factory: Creates the generator used by a single step. A new
                one is created for every step, so steps share no RNG state.
            max_route_depth: Hops the self-delegating route may take before it
                gives up with RecursionError.
        """
        self.__random_factory = random_factory
        self.__max_route_depth = max_route_depth

    def assign(self, value: Any, variable: Assignable) -> None:
        outcome = self.__random_factory().randrange(OUTCOME_COUNT)
        if outcome == 0:
            logger.error("null")
            raise AttributeError("'NoneType' object has no attribute 'set'")

        if outcome in (1, 2):
            logger.critical(
                "Halting while assigning [%s] into [%s].", value, variable
            )
            raise ProcessAbortedError(
                f"Process aborted while assigning [{value}] into [{variable}]."
            )

        if outcome == 8:
            logger.error("Cannot assign [%s] into [%s]!", value, variable)
            raise ValueError(f"Cannot assign {value} on {variable}!")

        if outcome == 9:
            self._try_assignment_route(0)
            return

        logger.debug("Setting value [%s] into variable [%s].", value, variable)
        variable.set(value)

    def _try_assignment_route(self, depth: int) -> None:
        self._delegate_assignment_internal(depth + 1)

    def _delegate_assignment_internal(self, depth: int) -> None:
        self._dispatch_assignment_processor(depth + 1)

    def _dispatch_assignment_processor(self, depth: int) -> None:
        if depth >= self.__max_route_depth:
            raise RecursionError(
                f"Assignment route did not terminate after [{depth}] hops."
            )
        self._try_assignment_route(depth + 1)

    def __repr__(self) -> str:
        return (
            "StochasticAssignmentPolicy("
            f"max_route_depth={self.__max_route_depth})"
        )
