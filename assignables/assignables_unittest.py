import logging
import threading
import time
from typing import Any, List

import pytest
from pytest_mock import MockerFixture

from assignables.assignable import Assignable
from assignables.assignables import Assignables, assign
from assignables.config.assignment_config import AssignmentConfig
from assignables.errors import (
    AssignmentFailedError,
    AssignmentTimedOutError,
    AssignmentUnsupportedError,
    ProcessAbortedError,
)
from assignables.policy.assignment_policy import AssignmentPolicy
from assignables.policy.direct_assignment_policy import DirectAssignmentPolicy
from assignables.policy.do_after_delay_assignment_policy import (
    DoAfterDelayAssignmentPolicy,
)
from assignables.policy.explosive_assignment_policy import (
    ExplosiveAssignmentPolicy,
)
from assignables.policy.md5_assignment_policy import MD5AssignmentPolicy
from assignables.policy.optional_assignment_policy import (
    OptionalAssignmentPolicy,
)
from assignables.policy.stochastic_assignment_policy import (
    StochasticAssignmentPolicy,
)
from assignables.policy.unsupported_assignment_policy import (
    UnsupportedAssignmentPolicy,
)

pytestmark = pytest.mark.timeout(20)


# --- Helper Policies ---


class CountingPolicy(AssignmentPolicy):
    """Sets the value and counts invocations. Fails on |fail_on| if given."""

    def __init__(self, fail_on: int = 0, sleep_s: float = 0) -> None:
        self.calls = 0
        self.thread_names: List[str] = []
        self.__fail_on = fail_on
        self.__sleep_s = sleep_s

    def assign(self, value: Any, variable: Assignable) -> None:
        self.calls += 1
        self.thread_names.append(threading.current_thread().name)
        if self.calls == self.__fail_on:
            raise RuntimeError(f"Failure on call {self.calls}")
        if self.__sleep_s > 0:
            time.sleep(self.__sleep_s)
        variable.set(value)


class IncrementingPolicy(AssignmentPolicy):
    """Non-atomic read-modify-write increment that tracks overlap."""

    def __init__(self) -> None:
        self.__guard = threading.Lock()
        self.__inside = 0
        self.max_inside = 0

    def assign(self, value: Any, variable: Assignable) -> None:
        with self.__guard:
            self.__inside += 1
            self.max_inside = max(self.max_inside, self.__inside)

        current = variable.get_as_int() or 0
        time.sleep(0.005)  # Widen the race window.
        variable.set(current + value)

        with self.__guard:
            self.__inside -= 1


class BarrierPolicy(AssignmentPolicy):
    """Only returns if |parties| invocations are in flight at once."""

    def __init__(self, parties: int) -> None:
        self.barrier = threading.Barrier(parties, timeout=5.0)

    def assign(self, value: Any, variable: Assignable) -> None:
        self.barrier.wait()
        variable.set(value)


class AbortingPolicy(AssignmentPolicy):
    def assign(self, value: Any, variable: Assignable) -> None:
        raise ProcessAbortedError("abort")


class TimingOutPolicy(AssignmentPolicy):
    """Raises the same error type a dispatcher timeout does."""

    def assign(self, value: Any, variable: Assignable) -> None:
        raise AssignmentTimedOutError("nested timeout", timeout_ms=10)


# --- Basic assignment ---


@pytest.mark.parametrize(
    "value", [0, 42, -7, "text", "", 3.5, True, None, b"raw", [1, 2]]
)
def test_direct_policy_sets_value(value: Any) -> None:
    variable = Assignable("before")
    assign(value).into(variable).run_once().execute(DirectAssignmentPolicy())
    assert variable.get() == value


def test_legacy_alias_chain_with_md5() -> None:
    """The legacy builder aliases still work end to end."""
    b = Assignable(0)
    Assignables.assign(10).into(
        b
    ).enforce_thread_safety_policy().end().with_assignment_policy(
        MD5AssignmentPolicy()
    )
    assert b.get() == "d3d9446802a44259755d38e6d163e820"


def test_optional_policy_leaves_variable_unchanged_for_none() -> None:
    variable = Assignable("kept")
    assign(None).into(variable).run_once().execute(OptionalAssignmentPolicy())
    assert variable.get() == "kept"


def test_optional_policy_sets_present_value() -> None:
    variable = Assignable("kept")
    assign("new").into(variable).run_once().execute(
        OptionalAssignmentPolicy()
    )
    assert variable.get() == "new"


def test_config_can_be_supplied_up_front() -> None:
    variable = Assignable()
    policy = CountingPolicy()
    assign(5, config=AssignmentConfig(end=True)).into(variable).execute(
        policy
    )
    assert variable.get() == 5
    assert policy.calls == 1


def test_execute_can_be_repeated() -> None:
    variable = Assignable()
    policy = CountingPolicy()
    request = assign(1).into(variable).run_once()
    request.execute(policy)
    request.execute(policy)
    assert policy.calls == 2
    assert variable.get() == 1


def test_run_until_cancelled_undoes_run_once() -> None:
    request = assign(1).run_once().run_until_cancelled()
    assert request.config.end is False


# --- Failure reporting ---


def test_explosive_policy_sets_before_failing() -> None:
    variable = Assignable("before")
    with pytest.raises(AssignmentFailedError) as exc_info:
        assign("after").into(variable).run_once().execute(
            ExplosiveAssignmentPolicy()
        )

    # Set before the error reached the caller.
    assert variable.get() == "after"
    assert isinstance(exc_info.value.__cause__, AssignmentFailedError)
    assert exc_info.value.cause is exc_info.value.__cause__
    assert exc_info.value.value == "after"
    assert exc_info.value.target is variable


def test_unsupported_policy_never_mutates() -> None:
    variable = Assignable("before")
    with pytest.raises(AssignmentFailedError) as exc_info:
        assign("after").into(variable).run_once().execute(
            UnsupportedAssignmentPolicy()
        )

    assert isinstance(exc_info.value.__cause__, AssignmentUnsupportedError)
    assert variable.get() == "before"


def test_loop_forever_stops_on_second_failure() -> None:
    """Without run_once(), the policy repeats until it fails."""
    variable = Assignable("before")
    policy = CountingPolicy(fail_on=2)

    with pytest.raises(AssignmentFailedError) as exc_info:
        assign("after").into(variable).execute(policy)

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert policy.calls == 2
    assert variable.get() == "after"


def test_loop_forever_repeats_until_failure_in_background() -> None:
    variable = Assignable()
    policy = CountingPolicy(fail_on=50)

    with pytest.raises(AssignmentFailedError):
        assign(1).into(variable).run_in_background().execute(policy)

    assert policy.calls == 50


def test_stochastic_route_is_bounded(mocker: MockerFixture) -> None:
    rng = mocker.MagicMock()
    rng.randrange.return_value = 9
    policy = StochasticAssignmentPolicy(
        random_factory=lambda: rng, max_route_depth=32
    )
    variable = Assignable("before")

    with pytest.raises(AssignmentFailedError) as exc_info:
        assign("after").into(variable).run_once().execute(policy)

    assert isinstance(exc_info.value.__cause__, RecursionError)
    assert variable.get() == "before"


@pytest.mark.parametrize(
    "request_factory",
    [
        lambda: assign(1).into(Assignable()).run_once(),
        lambda: assign(1).into(Assignable()).run_once().run_in_background(),
    ],
    ids=["current_thread", "background"],
)
def test_process_aborted_is_never_wrapped(request_factory: Any) -> None:
    lock = threading.Lock()
    request = request_factory().require_exclusive_access(lock)

    with pytest.raises(ProcessAbortedError):
        request.execute(AbortingPolicy())

    assert lock.acquire(blocking=False), "Lock should have been released."
    lock.release()


def test_missing_policy_fails_at_execute() -> None:
    with pytest.raises(AssignmentFailedError) as exc_info:
        assign(1).into(Assignable()).execute(None)  # type: ignore[arg-type]
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_missing_variable_fails_at_execute() -> None:
    with pytest.raises(AssignmentFailedError) as exc_info:
        assign(1).run_once().execute(DirectAssignmentPolicy())
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_negative_timeout_fails_at_execute() -> None:
    variable = Assignable("before")
    request = assign(1).into(variable).run_once().timeout(-5)

    with pytest.raises(AssignmentFailedError) as exc_info:
        request.execute(DirectAssignmentPolicy())

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert variable.get() == "before"


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="assignables.assignables"):
        with pytest.raises(AssignmentFailedError):
            assign("x").into(Assignable()).run_once().execute(
                UnsupportedAssignmentPolicy()
            )

    assert any(
        "Error while assigning value [x]" in record.getMessage()
        for record in caplog.records
    )


# --- Background execution and timeout ---


def test_background_runs_on_worker_thread() -> None:
    variable = Assignable()
    policy = CountingPolicy()

    assign("bg").into(variable).run_once().run_in_background().execute(policy)

    assert variable.get() == "bg"
    assert policy.thread_names[0].startswith("Assignables")
    assert policy.thread_names[0] != threading.current_thread().name


def test_background_failure_is_wrapped() -> None:
    variable = Assignable("before")
    with pytest.raises(AssignmentFailedError) as exc_info:
        assign("after").into(variable).run_once().parallel_processing(
            threading.current_thread()
        ).execute(UnsupportedAssignmentPolicy())

    assert isinstance(exc_info.value.__cause__, AssignmentUnsupportedError)
    assert variable.get() == "before"


def test_policy_timeout_error_is_wrapped() -> None:
    request = assign(1).into(Assignable()).run_once()
    with pytest.raises(AssignmentFailedError) as exc_info:
        request.execute(TimingOutPolicy())

    assert isinstance(exc_info.value.__cause__, AssignmentTimedOutError)
    assert not request.is_cancel_requested


def test_policy_timeout_error_is_wrapped_in_background() -> None:
    request = (
        assign(1)
        .into(Assignable())
        .run_once()
        .run_in_background()
        .timeout(5000)
    )
    with pytest.raises(AssignmentFailedError) as exc_info:
        request.execute(TimingOutPolicy())

    assert isinstance(exc_info.value.__cause__, AssignmentTimedOutError)
    assert not request.is_cancel_requested


def test_background_failure_is_logged_once_at_error(
    caplog: pytest.LogCaptureFixture,
) -> None:
    request = assign("x").into(Assignable()).run_once().run_in_background()
    with caplog.at_level(logging.DEBUG, logger="assignables.assignables"):
        with pytest.raises(AssignmentFailedError):
            request.execute(UnsupportedAssignmentPolicy())

    errors = [
        record
        for record in caplog.records
        if record.name == "assignables.assignables"
        and record.levelno >= logging.ERROR
    ]
    assert len(errors) == 1
    assert "Error while assigning value [x]" in errors[0].getMessage()


def test_delayed_assignment_recovers_after_interrupt() -> None:
    policy = DoAfterDelayAssignmentPolicy(10)
    policy.interrupt()

    skipped = Assignable("before")
    assign("a").into(skipped).run_once().execute(policy)
    assert skipped.get() == "before"

    assigned = Assignable("before")
    assign("b").into(assigned).run_once().execute(policy)
    assert assigned.get() == "b"


def test_timeout_aborts_delayed_assignment() -> None:
    variable = Assignable("before")
    policy = DoAfterDelayAssignmentPolicy(5000)
    request = assign("after").into(variable).run_in_background().timeout(50)

    start = time.monotonic()
    try:
        with pytest.raises(AssignmentTimedOutError) as exc_info:
            request.execute(policy)
        elapsed = time.monotonic() - start

        assert 0.04 <= elapsed < 2.0
        assert exc_info.value.timeout_ms == 50
        assert not isinstance(exc_info.value, AssignmentFailedError)
        assert variable.get() == "before"
        assert request.is_cancel_requested
    finally:
        policy.interrupt()


def test_timeout_stops_further_iterations() -> None:
    variable = Assignable()
    policy = CountingPolicy(sleep_s=0.001)

    with pytest.raises(AssignmentTimedOutError):
        assign(1).into(variable).run_in_background().timeout(100).execute(
            policy
        )

    # The in-flight iteration may still finish; after that the loop stops.
    time.sleep(0.2)
    calls_after_timeout = policy.calls
    time.sleep(0.2)
    assert policy.calls == calls_after_timeout
    assert calls_after_timeout > 0


def test_timeout_releases_lock() -> None:
    lock = threading.Lock()
    policy = DoAfterDelayAssignmentPolicy(5000)
    try:
        with pytest.raises(AssignmentTimedOutError):
            assign(1).into(Assignable()).require_exclusive_access(
                lock
            ).run_in_background().timeout(20).execute(policy)
        assert lock.acquire(blocking=False)
        lock.release()
    finally:
        policy.interrupt()


def test_timeout_ignored_on_current_thread() -> None:
    variable = Assignable()
    policy = CountingPolicy(sleep_s=0.05)
    assign("done").into(variable).run_once().timeout(1).execute(policy)
    assert variable.get() == "done"


def test_zero_timeout_waits_for_completion() -> None:
    variable = Assignable()
    policy = CountingPolicy(sleep_s=0.1)
    request = assign("done").into(variable).run_once().run_in_background()
    request.timeout(0).execute(policy)
    assert variable.get() == "done"
    assert not request.is_cancel_requested


# --- Exclusive access ---


def test_shared_lock_serializes_assignments() -> None:
    num_threads = 8
    lock = threading.Lock()
    variable = Assignable(0)
    policy = IncrementingPolicy()
    errors: List[BaseException] = []

    def run() -> None:
        try:
            assign(1).into(variable).require_exclusive_access(
                lock
            ).run_once().execute(policy)
        except AssignmentFailedError as e:
            errors.append(e)

    threads = [threading.Thread(target=run) for _ in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5.0)

    assert not errors
    assert variable.get() == num_threads
    assert policy.max_inside == 1


def test_private_locks_do_not_exclude_each_other() -> None:
    """Two requests with their own locks run concurrently."""
    variable = Assignable()
    policy = BarrierPolicy(parties=2)
    errors: List[BaseException] = []

    def run(value: str) -> None:
        try:
            assign(value).into(variable).require_exclusive_access().run_once(
            ).execute(policy)
        except AssignmentFailedError as e:
            errors.append(e)

    threads = [
        threading.Thread(target=run, args=(v,)) for v in ("one", "two")
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10.0)

    assert not errors, "Barrier broke, so the requests were serialized."
    assert variable.get() in ("one", "two")


def test_lock_released_after_failure() -> None:
    lock = threading.Lock()
    with pytest.raises(AssignmentFailedError):
        assign(1).into(Assignable()).require_exclusive_access(
            lock
        ).run_once().execute(UnsupportedAssignmentPolicy())

    assert lock.acquire(blocking=False), "Lock should have been released."
    lock.release()


def test_lock_is_held_around_policy(mocker: MockerFixture) -> None:
    manager = mocker.MagicMock()
    lock = manager.lock
    policy = mocker.MagicMock(spec=AssignmentPolicy)
    manager.attach_mock(policy.assign, "assign")
    variable = Assignable()

    assign(3).into(variable).require_exclusive_access(lock).run_once().execute(
        policy
    )

    assert manager.mock_calls == [
        mocker.call.lock.acquire(),
        mocker.call.assign(3, variable),
        mocker.call.lock.release(),
    ]


def test_private_lock_is_created_once_and_reused() -> None:
    request = assign(1).into(Assignable()).require_exclusive_access()
    request.run_once()
    assert request.config.lock is None

    request.execute(DirectAssignmentPolicy())
    created = request.config.lock
    assert created is not None

    request.execute(DirectAssignmentPolicy())
    assert request.config.lock is created


def test_no_lock_without_exclusive_access(mocker: MockerFixture) -> None:
    create = mocker.patch(
        "assignables.assignables.create_default_lock", autospec=True
    )
    assign(1).into(Assignable()).run_once().execute(DirectAssignmentPolicy())
    create.assert_not_called()


def test_lifecycle_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="assignables"):
        assign(1).into(Assignable()).require_exclusive_access().run_once(
        ).execute(DirectAssignmentPolicy())

    messages = [record.getMessage() for record in caplog.records]
    assert any("Generating a new lock" in m for m in messages)
    assert any(m.startswith("Acquiring current thread") for m in messages)
    assert any(m.startswith("Releasing current thread") for m in messages)
    assert any("completed" in m for m in messages)


def test_repr_lists_options() -> None:
    request = assign(7).into(Assignable(1)).run_once().timeout(30)
    text = repr(request)
    assert "value=7" in text
    assert "variable=Assignable(1)" in text
    assert "end=True" in text
    assert "timeout_ms=30" in text
