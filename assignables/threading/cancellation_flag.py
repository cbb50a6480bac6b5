"""Defines `CancellationFlag`, the cooperative stop signal of an assignment."""

import threading


class CancellationFlag:
    """
    Tracks whether an assignment loop has been asked to stop.

    Cancellation is cooperative: the flag is only consulted between two
    invocations of a policy, so an invocation already in progress (for
    instance one sleeping in `DoAfterDelayAssignmentPolicy`) runs to
    completion. May be used from any thread.
    """

    def __init__(self) -> None:
        self.__requested = threading.Event()

    @property
    def is_requested(self) -> bool:
        """Returns whether cancellation has been requested."""
        return self.__requested.is_set()

    def request(self) -> None:
        """Requests cancellation. Further calls have no effect."""
        self.__requested.set()
