import re
from typing import Any

import pytest

from assignables.assignable import Assignable
from assignables.policy.md5_assignment_policy import MD5AssignmentPolicy


@pytest.mark.parametrize(
    "value, expected",
    [
        (10, "d3d9446802a44259755d38e6d163e820"),
        ("10", "d3d9446802a44259755d38e6d163e820"),
        ("", "d41d8cd98f00b204e9800998ecf8427e"),
        ("hello", "5d41402abc4b2a76b9719d911017c592"),
    ],
)
def test_known_digests(value: Any, expected: str) -> None:
    variable = Assignable()
    MD5AssignmentPolicy().assign(value, variable)
    assert variable.get() == expected


def test_deterministic_lowercase_hex() -> None:
    first = MD5AssignmentPolicy.hash({"a": [1, 2.5]})
    second = MD5AssignmentPolicy.hash({"a": [1, 2.5]})
    assert first == second
    assert re.fullmatch(r"[0-9a-f]{32}", first)


def test_original_value_is_discarded() -> None:
    variable = Assignable()
    MD5AssignmentPolicy().assign("secret", variable)
    assert variable.get() != "secret"
    assert variable.get() == MD5AssignmentPolicy.hash("secret")
