"""Threading utils for assignables: cancellation, workers and locks."""

from assignables.threading.assignment_worker import AssignmentWorker
from assignables.threading.cancellation_flag import CancellationFlag
from assignables.threading.lock_handle import LockHandle, create_default_lock

__all__ = [
    "AssignmentWorker",
    "CancellationFlag",
    "LockHandle",
    "create_default_lock",
]
