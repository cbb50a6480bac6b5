import threading
import time
from concurrent.futures import Future, wait
from typing import Any, List

import pytest

from assignables.errors import ProcessAbortedError
from assignables.threading.assignment_worker import AssignmentWorker


class CustomException(Exception):
    """A custom exception for testing."""


def successful_task(value: Any, delay: float = 0) -> Any:
    """A task that succeeds after an optional delay."""
    if delay > 0:
        time.sleep(delay)
    return value


def failing_task(message: str = "Task failed") -> None:
    raise CustomException(message)


class TestAssignmentWorker:
    def setup_method(self) -> None:
        self.errors_received: List[Exception] = []
        self.error_callback_lock = threading.Lock()

    def error_callback(self, e: Exception) -> None:
        with self.error_callback_lock:
            self.errors_received.append(e)

    def test_successful_task_execution(self) -> None:
        with AssignmentWorker(error_cb=self.error_callback) as worker:
            future: Future[Any] = worker.submit(successful_task, "success")
            assert future.result(timeout=1.0) == "success"

        assert not self.errors_received

    def test_exception_reported_and_reraised(self) -> None:
        with AssignmentWorker(error_cb=self.error_callback) as worker:
            future = worker.submit(failing_task, "Task failed as intended")
            with pytest.raises(CustomException, match="failed as intended"):
                future.result(timeout=1.0)

        assert len(self.errors_received) == 1
        assert isinstance(self.errors_received[0], CustomException)

    def test_process_aborted_bypasses_callback(self) -> None:
        def abort() -> None:
            raise ProcessAbortedError("halt")

        with AssignmentWorker(error_cb=self.error_callback) as worker:
            future = worker.submit(abort)
            with pytest.raises(ProcessAbortedError):
                future.result(timeout=1.0)

        assert not self.errors_received

    def test_runs_tasks_on_one_named_thread(self) -> None:
        def thread_name() -> str:
            return threading.current_thread().name

        with AssignmentWorker(
            error_cb=self.error_callback, thread_name_prefix="Probe"
        ) as worker:
            names = {
                worker.submit(thread_name).result(timeout=1.0)
                for _ in range(5)
            }

        assert len(names) == 1
        assert names.pop().startswith("Probe")

    def test_abandon_does_not_wait(self) -> None:
        started = threading.Event()
        release = threading.Event()

        def block() -> bool:
            started.set()
            return release.wait(5.0)

        worker = AssignmentWorker(error_cb=self.error_callback)
        running = worker.submit(block)
        assert started.wait(timeout=1.0)
        pending = worker.submit(successful_task, "never")

        start = time.monotonic()
        worker.abandon()
        assert time.monotonic() - start < 1.0

        assert pending.cancelled()
        assert not running.done()

        release.set()
        done, _ = wait([running], timeout=2.0)
        assert running in done

    def test_submit_after_abandon_raises_runtime_error(self) -> None:
        worker = AssignmentWorker(error_cb=self.error_callback)
        worker.abandon()
        with pytest.raises(RuntimeError):
            worker.submit(successful_task, 1)
