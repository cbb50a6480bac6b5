"""Lock abstraction used by `Assignables.require_exclusive_access()`."""

import threading
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LockHandle(Protocol):
    """
    Anything that can be acquired and released.

    `threading.Lock`, `threading.RLock` and `threading.Semaphore` all qualify.
    Sharing one handle between several assignments makes them mutually
    exclusive; assignments with distinct handles do not exclude each other,
    even when they target the same `Assignable`.
    """

    def acquire(self, *args: Any, **kwargs: Any) -> Any: ...

    def release(self) -> None: ...


def create_default_lock() -> LockHandle:
    """Creates the lock used when the caller did not supply one."""
    return threading.RLock()
