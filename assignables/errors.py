"""Exception hierarchy for assignment operations.

Every error raised by the library derives from `AssignmentError`, except
`ProcessAbortedError`, which is a fatal sentinel and deliberately sits outside
the `Exception` tree so ordinary handlers do not swallow it.
"""

from typing import Any, Optional


class AssignmentError(Exception):
    """Base exception for all assignment errors."""


class TypeMismatchError(AssignmentError, TypeError):
    """The contents of an `Assignable` were read as an incompatible type."""

    def __init__(self, expected: type, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot read value [{actual!r}] of type "
            f"[{type(actual).__name__}] as [{expected.__name__}]."
        )


class AssignmentUnsupportedError(AssignmentError, NotImplementedError):
    """The requested assignment is not supported."""


class AssignmentFailedError(AssignmentError):
    """
    Generic wrapper for a failed assignment.

    Raised by `Assignables.execute()` for any error escaping the policy loop,
    with the original error chained as `__cause__`. Policies may also raise it
    directly.
    """

    def __init__(
        self,
        message: str,
        value: Any = None,
        target: Any = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.value = value
        self.target = target
        self.cause = cause


class AssignmentTimedOutError(AssignmentError, TimeoutError):
    """Background execution of an assignment exceeded its timeout."""

    def __init__(self, message: str, timeout_ms: int) -> None:
        super().__init__(message)
        self.timeout_ms = timeout_ms


class ProcessAbortedError(BaseException):
    """
    Fatal event requesting that the embedding application terminate.

    Derives from `BaseException` (like `SystemExit`) so that it passes through
    `except Exception` blocks, including the dispatcher's own error wrapping.
    The library never terminates the interpreter itself; what to do with this
    signal is up to the application.
    """
