import random
from typing import Callable

import pytest
from pytest_mock import MockerFixture

from assignables.assignable import Assignable
from assignables.errors import ProcessAbortedError
from assignables.policy.stochastic_assignment_policy import (
    OUTCOME_COUNT,
    StochasticAssignmentPolicy,
)

FixedRandom = Callable[[int], Callable[[], random.Random]]


@pytest.fixture
def fixed_random(mocker: MockerFixture) -> FixedRandom:
    """Returns a factory producing generators that always draw |outcome|."""

    def make(outcome: int) -> Callable[[], random.Random]:
        rng = mocker.MagicMock(spec=random.Random)
        rng.randrange.return_value = outcome
        return lambda: rng

    return make


@pytest.mark.parametrize("outcome", [3, 4, 5, 6, 7])
def test_normal_outcomes_set(outcome: int, fixed_random: FixedRandom) -> None:
    variable = Assignable("before")
    StochasticAssignmentPolicy(fixed_random(outcome)).assign("after", variable)
    assert variable.get() == "after"


@pytest.mark.parametrize(
    "outcome, error_type",
    [
        (0, AttributeError),
        (1, ProcessAbortedError),
        (2, ProcessAbortedError),
        (8, ValueError),
        (9, RecursionError),
    ],
)
def test_failing_outcomes_leave_variable_untouched(
    outcome: int,
    error_type: type,
    fixed_random: FixedRandom,
) -> None:
    variable = Assignable("before")
    policy = StochasticAssignmentPolicy(fixed_random(outcome))
    with pytest.raises(error_type):
        policy.assign("after", variable)
    assert variable.get() == "before"


def test_draws_from_ten_outcomes(mocker: MockerFixture) -> None:
    rng = mocker.MagicMock(spec=random.Random)
    rng.randrange.return_value = 5
    StochasticAssignmentPolicy(lambda: rng).assign(1, Assignable())
    rng.randrange.assert_called_once_with(OUTCOME_COUNT)
    assert OUTCOME_COUNT == 10


def test_fresh_generator_per_step(mocker: MockerFixture) -> None:
    rng = mocker.MagicMock(spec=random.Random)
    rng.randrange.return_value = 3
    factory = mocker.MagicMock(return_value=rng)

    policy = StochasticAssignmentPolicy(factory)
    for _ in range(3):
        policy.assign(1, Assignable())

    assert factory.call_count == 3


def test_route_depth_is_configurable(fixed_random: FixedRandom) -> None:
    policy = StochasticAssignmentPolicy(fixed_random(9), max_route_depth=5)
    with pytest.raises(RecursionError, match="did not terminate"):
        policy.assign(1, Assignable())


def test_default_generator_draws_valid_outcomes() -> None:
    """With a real RNG every step either sets or raises a known error."""
    policy = StochasticAssignmentPolicy(lambda: random.Random(1234))
    variable = Assignable()
    try:
        policy.assign("x", variable)
    except (AttributeError, ValueError, RecursionError, ProcessAbortedError):
        assert variable.get() is None
    else:
        assert variable.get() == "x"
