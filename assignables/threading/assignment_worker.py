"""Single-threaded executor that runs an assignment off the calling thread."""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")


# Reports exceptions from the submitted assignment, then re-raises them.
class AssignmentWorker(ThreadPoolExecutor):
    """
    `ThreadPoolExecutor` pinned to exactly one worker thread.

    Submitted callables are wrapped so that an `Exception` raised on the
    worker is passed to |error_cb| before being re-raised into the `Future`.
    `BaseException`s that are not `Exception`s (e.g. `ProcessAbortedError`)
    bypass the callback and reach the `Future` untouched.

    One instance backs a single `Assignables.execute()` call; it is not
    shared or reused.
    """

    def __init__(
        self,
        error_cb: Callable[[Exception], None],
        thread_name_prefix: str = "AssignmentWorker",
    ) -> None:
        """
        Initializes an AssignmentWorker.

        Args:
            error_cb: Callback for exceptions raised by a submitted task.
            thread_name_prefix: Prefix for the worker thread's name.
        """
        assert error_cb is not None, "error_cb cannot be None"
        self.__error_cb = error_cb
        super().__init__(max_workers=1, thread_name_prefix=thread_name_prefix)

    def submit(
        self, fn: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs
    ) -> Future[T]:
        """
        Submits |fn| to the worker thread.

        Returns:
            A `Future` that raises the original exception on `result()` if
            |fn| failed.
        """

        def wrapper(*args2: P.args, **kwargs2: P.kwargs) -> T:
            try:
                return fn(*args2, **kwargs2)
            except Exception as e:
                self.__error_cb(e)
                raise

        return super().submit(wrapper, *args, **kwargs)

    def abandon(self) -> None:
        """
        Tears the worker down without waiting for it.

        Pending work is cancelled. A task already running keeps running until
        it returns on its own; its result is discarded.
        """
        self.shutdown(wait=False, cancel_futures=True)
