# assignables/config/assignment_config.py
from dataclasses import dataclass
from typing import Optional

from assignables.threading.lock_handle import LockHandle


@dataclass(frozen=True)
class AssignmentConfig:
    """Execution options for one `Assignables` request.

    Nothing is validated when the options are set; `validate()` runs when the
    assignment is executed.
    """

    # Whether execution happens while holding |lock|.
    enforce_exclusive_access: bool = False

    # Lock shared with other assignments. If None while exclusive access is
    # enforced, a private lock is created on first use.
    lock: Optional[LockHandle] = None

    # True runs the policy exactly once. False (the default) repeats it until
    # it fails or the assignment is cancelled by a timeout.
    end: bool = False

    # Whether the policy loop runs on a dedicated worker thread.
    run_in_background: bool = False

    # Bound on the background wait, in milliseconds. 0 waits forever. Ignored
    # unless |run_in_background| is set.
    timeout_ms: int = 0

    def validate(self) -> None:
        """Raises ValueError if the options cannot be executed."""
        if self.timeout_ms < 0:
            raise ValueError(
                f"timeout must not be negative, got [{self.timeout_ms}] ms."
            )

    @property
    def timeout_seconds(self) -> Optional[float]:
        """The background wait bound as accepted by `Future.result()`."""
        if self.timeout_ms == 0:
            return None
        return self.timeout_ms / 1000
