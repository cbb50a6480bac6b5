"""Defines `DoAfterDelayAssignmentPolicy`, which waits before assigning."""

import logging
import threading
from typing import Any

from assignables.assignable import Assignable
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class DoAfterDelayAssignmentPolicy(AssignmentPolicy):
    """
    Sleeps for a fixed delay, then sets the value.

    The sleep can be cut short with `interrupt()`. An interrupted step logs the
    interruption and skips the set instead of raising. An interrupt is consumed
    by the step it wakes, or by the next step if none is sleeping; later steps
    sleep and set as usual.

    `Assignables` never interrupts a policy on its own; a timed-out background
    assignment leaves the sleep running until it ends.
    """

    def __init__(self, delay_ms: int) -> None:
        """
        Initializes the policy.

        Args:
            delay_ms: Milliseconds to wait before each set.
        """
        self.__delay_ms = delay_ms
        self.__interrupted = threading.Event()

    @property
    def delay_ms(self) -> int:
        return self.__delay_ms

    def assign(self, value: Any, variable: Assignable) -> None:
        logger.warning(
            "Going to sleep for [%s] milliseconds before setting value [%s] "
            "into variable [%s].",
            self.__delay_ms,
            value,
            variable,
        )
        if self.__interrupted.wait(self.__delay_ms / 1000):
            self.__interrupted.clear()
            logger.error(
                "Interrupted during assignment of value [%s] into variable "
                "[%s] with [%s] milliseconds delay. Skipping the assignment.",
                value,
                variable,
                self.__delay_ms,
            )
            return

        variable.set(value)

    def interrupt(self) -> None:
        """Wakes up any sleeping step. May be called from any thread."""
        self.__interrupted.set()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DoAfterDelayAssignmentPolicy):
            return NotImplemented
        return self.__delay_ms == other.delay_ms

    def __hash__(self) -> int:
        return hash(self.__delay_ms)

    def __repr__(self) -> str:
        return f"DoAfterDelayAssignmentPolicy(delay_ms={self.__delay_ms})"
