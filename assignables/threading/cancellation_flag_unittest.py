import threading

import pytest

from assignables.threading.cancellation_flag import CancellationFlag


@pytest.fixture
def flag() -> CancellationFlag:
    """Fixture to create a CancellationFlag instance."""
    return CancellationFlag()


def test_initially_not_requested(flag: CancellationFlag) -> None:
    assert not flag.is_requested


def test_request_is_idempotent(flag: CancellationFlag) -> None:
    flag.request()
    assert flag.is_requested
    flag.request()
    assert flag.is_requested


def test_request_visible_across_threads(flag: CancellationFlag) -> None:
    observed = threading.Event()

    def watch() -> None:
        while not flag.is_requested:
            pass
        observed.set()

    thread = threading.Thread(target=watch, daemon=True)
    thread.start()
    flag.request()
    assert observed.wait(timeout=2.0)
    thread.join(timeout=2.0)
