import pytest

from assignables.errors import (
    AssignmentError,
    AssignmentFailedError,
    AssignmentTimedOutError,
    AssignmentUnsupportedError,
    ProcessAbortedError,
    TypeMismatchError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        AssignmentFailedError,
        AssignmentTimedOutError,
        AssignmentUnsupportedError,
        TypeMismatchError,
    ],
)
def test_library_errors_share_a_base(error_type: type) -> None:
    assert issubclass(error_type, AssignmentError)


def test_builtin_bases() -> None:
    assert issubclass(TypeMismatchError, TypeError)
    assert issubclass(AssignmentUnsupportedError, NotImplementedError)
    assert issubclass(AssignmentTimedOutError, TimeoutError)


def test_process_aborted_escapes_exception_handlers() -> None:
    assert not issubclass(ProcessAbortedError, Exception)

    with pytest.raises(ProcessAbortedError):
        try:
            raise ProcessAbortedError("halt")
        except Exception:  # pylint: disable=broad-exception-caught
            pytest.fail("ProcessAbortedError must not be caught here.")


def test_assignment_failed_carries_context() -> None:
    cause = ValueError("bad")
    error = AssignmentFailedError("failed", value=1, target="t", cause=cause)
    assert error.value == 1
    assert error.target == "t"
    assert error.cause is cause
    assert str(error) == "failed"


def test_timed_out_carries_bound() -> None:
    assert AssignmentTimedOutError("late", timeout_ms=50).timeout_ms == 50
