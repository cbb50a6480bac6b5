"""Defines `Assignables`, the fluent entry point for assigning a value.

Usage:

    variable = Assignable(0)
    assign(10).into(variable).require_exclusive_access().run_once().execute(
        MD5AssignmentPolicy()
    )

`execute()` runs the dispatch sequence:

1. If exclusive access is enforced, acquire the lock (creating a private one
   if none was supplied). The wait is unbounded.
2. Run the policy loop, either on the calling thread or on a dedicated worker
   thread whose result is awaited, bounded by the timeout if one is set.
3. Release the lock, whether step 2 succeeded or not.

The policy loop invokes the policy once and then keeps invoking it until the
request is ended (`run_once()` / `end()`), a timeout cancels it, or the policy
raises. Note that NOT ending a request means the policy is repeated forever.
"""

import logging
import threading
from concurrent.futures import wait
from dataclasses import replace
from typing import Any, Optional

from assignables.assignable import Assignable
from assignables.config.assignment_config import AssignmentConfig
from assignables.errors import AssignmentFailedError, AssignmentTimedOutError
from assignables.policy.assignment_policy import AssignmentPolicy
from assignables.threading.assignment_worker import AssignmentWorker
from assignables.threading.cancellation_flag import CancellationFlag
from assignables.threading.lock_handle import LockHandle, create_default_lock

logger = logging.getLogger(__name__)


class Assignables:
    """
    Builder and dispatcher for assigning one value into one `Assignable`.

    Configuration calls may come in any order and return the builder itself;
    nothing is validated until `execute()`. The builder is meant to be
    configured from a single thread.
    """

    def __init__(
        self, value: Any, config: Optional[AssignmentConfig] = None
    ) -> None:
        """
        Initializes a request. Prefer `assign()`.

        Args:
            value: The value to assign.
            config: Options to start from. Defaults to `AssignmentConfig()`.
        """
        self.__value = value
        self.__variable: Optional[Assignable] = None
        self.__config = config if config is not None else AssignmentConfig()
        self.__policy: Optional[AssignmentPolicy] = None
        self.__cancellation = CancellationFlag()

    @classmethod
    def assign(
        cls, value: Any, config: Optional[AssignmentConfig] = None
    ) -> "Assignables":
        """Starts a request that assigns |value|."""
        return cls(value, config)

    @property
    def value(self) -> Any:
        return self.__value

    @property
    def variable(self) -> Optional[Assignable]:
        return self.__variable

    @property
    def config(self) -> AssignmentConfig:
        return self.__config

    @property
    def is_cancel_requested(self) -> bool:
        """Whether the last dispatch was cancelled by a timeout."""
        return self.__cancellation.is_requested

    def into(self, variable: Assignable) -> "Assignables":
        """Sets the variable receiving the value."""
        self.__variable = variable
        return self

    def require_exclusive_access(
        self, lock: Optional[LockHandle] = None
    ) -> "Assignables":
        """
        Executes the assignment while holding a lock.

        Args:
            lock: Lock to hold. Assignments sharing a lock exclude each other.
                If omitted, a lock private to this request is created on
                first use, which only protects against re-entry of this
                request.
        """
        if lock is None:
            self.__config = replace(
                self.__config, enforce_exclusive_access=True
            )
        else:
            self.__config = replace(
                self.__config, enforce_exclusive_access=True, lock=lock
            )
        return self

    def enforce_thread_safety_policy(
        self, lock: Optional[LockHandle] = None
    ) -> "Assignables":
        """Alias of `require_exclusive_access()`."""
        return self.require_exclusive_access(lock)

    def loop_until_end(self) -> "Assignables":
        """
        Ends the request after a single policy invocation.

        Without this call the policy is invoked repeatedly until it raises or
        the request times out.
        """
        self.__config = replace(self.__config, end=True)
        return self

    def end(self) -> "Assignables":
        """Alias of `loop_until_end()`."""
        return self.loop_until_end()

    def run_once(self) -> "Assignables":
        """Alias of `loop_until_end()`."""
        return self.loop_until_end()

    def run_until_cancelled(self) -> "Assignables":
        """
        Repeats the policy until it raises or a timeout cancels the request.

        This is the default; the call makes the choice explicit and undoes a
        previous `run_once()`.
        """
        self.__config = replace(self.__config, end=False)
        return self

    def run_in_background(
        self, ignored_thread: Optional[threading.Thread] = None
    ) -> "Assignables":
        """
        Runs the policy loop on a dedicated worker thread.

        `execute()` still blocks until the worker is done or the timeout
        expires.

        Args:
            ignored_thread: Accepted for compatibility and ignored. A new
                worker is always created.
        """
        self.__config = replace(self.__config, run_in_background=True)
        return self

    def parallel_processing(
        self, ignored_thread: Optional[threading.Thread] = None
    ) -> "Assignables":
        """Alias of `run_in_background()`."""
        return self.run_in_background(ignored_thread)

    def timeout(self, milliseconds: int) -> "Assignables":
        """
        Bounds the wait for background execution. 0 disables the bound.

        Has no effect unless `run_in_background()` is also called.
        """
        self.__config = replace(self.__config, timeout_ms=milliseconds)
        return self

    def execute(self, policy: AssignmentPolicy) -> None:
        """
        Performs the assignment with |policy|.

        Blocks until the dispatch is complete, lock release included. May be
        called again to repeat the whole dispatch.

        Raises:
            AssignmentTimedOutError: Background execution exceeded the
                timeout.
            AssignmentFailedError: Anything else went wrong. The original
                error is chained as the cause.
            ProcessAbortedError: Raised by the policy. Never wrapped.
        """
        self.__policy = policy
        try:
            self.__dispatch_assignment()
        except AssignmentTimedOutError as e:
            # Only the timeout this dispatch detected itself passes through.
            if self.__cancellation.is_requested:
                raise
            self.__raise_assignment_failed(e)
        except Exception as e:
            self.__raise_assignment_failed(e)

    def with_assignment_policy(self, policy: AssignmentPolicy) -> None:
        """Alias of `execute()`."""
        self.execute(policy)

    def __raise_assignment_failed(self, e: Exception) -> None:
        logger.error(
            "Error while assigning value [%s] into variable [%s].",
            self.__value,
            self.__variable,
            exc_info=True,
        )
        raise AssignmentFailedError(
            f"Error while assigning value [{self.__value}] into variable "
            f"[{self.__variable}]: {e!r}",
            value=self.__value,
            target=self.__variable,
            cause=e,
        ) from e

    def __dispatch_assignment(self) -> None:
        self.__config.validate()
        if self.__policy is None:
            raise ValueError("No assignment policy specified.")
        if self.__variable is None:
            raise ValueError("No variable specified. Call into() first.")

        cancellation = CancellationFlag()
        self.__cancellation = cancellation
        lock = self.__acquire_lock()
        try:
            if self.__config.run_in_background:
                self.__do_parallel_processing_assignment(cancellation)
            else:
                if self.__config.timeout_ms != 0:
                    logger.debug(
                        "Ignoring timeout [%s] for assignment on the current "
                        "thread.",
                        self.__config.timeout_ms,
                    )
                logger.warning(
                    "Starting assignment of [%s] into variable [%s] on "
                    "current thread. This may take a while.",
                    self.__value,
                    self.__variable,
                )
                self.__do_assignment(cancellation)
        finally:
            if lock is not None:
                logger.warning(
                    "Releasing current thread [%s] lock for assigning value "
                    "[%s] into [%s].",
                    threading.current_thread().name,
                    self.__value,
                    self.__variable,
                )
                lock.release()

        logger.debug(
            "Assignment of [%s] into [%s] completed.",
            self.__value,
            self.__variable,
        )

    def __acquire_lock(self) -> Optional[LockHandle]:
        """Acquires the lock if exclusive access is enforced."""
        if not self.__config.enforce_exclusive_access:
            return None

        lock = self.__config.lock
        if lock is None:
            logger.debug(
                "No lock specified for current assignment. Generating a new "
                "lock."
            )
            lock = create_default_lock()
            self.__config = replace(self.__config, lock=lock)
            logger.debug("Generated lock [%s].", lock)

        logger.warning(
            "Acquiring current thread [%s] lock for assigning value [%s] "
            "into [%s].",
            threading.current_thread().name,
            self.__value,
            self.__variable,
        )
        lock.acquire()
        return lock

    def __do_parallel_processing_assignment(
        self, cancellation: CancellationFlag
    ) -> None:
        """Runs the policy loop on a new worker and waits for it."""
        timeout_ms = self.__config.timeout_ms
        worker = AssignmentWorker(
            error_cb=self.__on_worker_error,
            thread_name_prefix="Assignables",
        )
        try:
            future = worker.submit(self.__do_assignment, cancellation)
            if timeout_ms != 0:
                logger.debug(
                    "Starting parallel assignment of [%s] into [%s] on a "
                    "different thread with timeout [%s].",
                    self.__value,
                    self.__variable,
                    timeout_ms,
                )
            else:
                logger.debug(
                    "Starting parallel assignment of [%s] into [%s] on a "
                    "different thread.",
                    self.__value,
                    self.__variable,
                )

            done, _ = wait([future], timeout=self.__config.timeout_seconds)
            if not done:
                cancellation.request()
                logger.error(
                    "Transaction ABEND for [%s]: The assignment of [%s] into "
                    "[%s] took more than [%s] milliseconds. Aborting.",
                    future,
                    self.__value,
                    self.__variable,
                    timeout_ms,
                )
                raise AssignmentTimedOutError(
                    f"Transaction ABEND: The assignment of {self.__value} "
                    f"into {self.__variable} took more than {timeout_ms} "
                    "milliseconds. Aborting.",
                    timeout_ms=timeout_ms,
                )

            future.result()
        finally:
            logger.debug("Shutting down the assignment worker.")
            worker.abandon()

    def __do_assignment(self, cancellation: CancellationFlag) -> None:
        """Invokes the policy until the request ends or is cancelled."""
        policy = self.__policy
        variable = self.__variable
        assert policy is not None
        assert variable is not None

        logger.debug(
            "Starting assignment of [%s] into [%s]. Delegating to policy "
            "[%s].",
            self.__value,
            variable,
            policy,
        )
        while True:
            policy.assign(self.__value, variable)
            if self.__config.end or cancellation.is_requested:
                break

    def __on_worker_error(self, e: Exception) -> None:
        logger.debug(
            "Assignment worker failed while assigning [%s] into [%s]: %r",
            self.__value,
            self.__variable,
            e,
        )

    def __repr__(self) -> str:
        config = self.__config
        return (
            f"Assignables(value={self.__value!r}, "
            f"variable={self.__variable!r}, "
            f"enforce_exclusive_access={config.enforce_exclusive_access}, "
            f"end={config.end}, "
            f"run_in_background={config.run_in_background}, "
            f"timeout_ms={config.timeout_ms}, "
            f"policy={self.__policy!r}, "
            f"lock={config.lock!r}, "
            f"cancel_requested={self.__cancellation.is_requested})"
        )


assign = Assignables.assign
