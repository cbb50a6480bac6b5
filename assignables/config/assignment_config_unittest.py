import dataclasses
import threading

import pytest

from assignables.config.assignment_config import AssignmentConfig


def test_defaults() -> None:
    config = AssignmentConfig()
    assert config.enforce_exclusive_access is False
    assert config.lock is None
    assert config.end is False
    assert config.run_in_background is False
    assert config.timeout_ms == 0
    assert config.timeout_seconds is None


def test_frozen() -> None:
    config = AssignmentConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.end = True  # type: ignore[misc]


def test_replace_keeps_other_fields() -> None:
    lock = threading.Lock()
    config = AssignmentConfig(enforce_exclusive_access=True, lock=lock)
    updated = dataclasses.replace(config, timeout_ms=250)
    assert updated.lock is lock
    assert updated.enforce_exclusive_access
    assert updated.timeout_seconds == pytest.approx(0.25)


def test_validate_accepts_zero_and_positive() -> None:
    AssignmentConfig(timeout_ms=0).validate()
    AssignmentConfig(timeout_ms=1).validate()


def test_validate_rejects_negative_timeout() -> None:
    with pytest.raises(ValueError, match="-1"):
        AssignmentConfig(timeout_ms=-1).validate()
