"""Defines `Assignable`, a mutable cell into which values are assigned.

The cell holds a single value of any type. Typed views (`get_as_int()`,
`get_as_str()`, ...) return the value unchanged if it already has the requested
type and raise `TypeMismatchError` otherwise; they never convert.

`Assignable` is not thread-safe. Callers sharing one between threads must
provide their own exclusion, e.g. through
`Assignables.require_exclusive_access()` with a shared lock.
"""

from typing import Any, Optional, Type, TypeVar

from assignables.errors import TypeMismatchError

ValueTypeT = TypeVar("ValueTypeT")


class Assignable:
    """A boxed, mutable value."""

    def __init__(self, value: Any = None) -> None:
        """
        Initializes the cell.

        Args:
            value: The initial contents. Defaults to None (an empty cell).
        """
        self.__value: Any = value

    def get(self) -> Any:
        """Returns the current contents. Never fails."""
        return self.__value

    def set(self, value: Any) -> None:
        """Replaces the current contents, discarding the previous value."""
        self.__value = value

    def get_as(self, type_: Type[ValueTypeT]) -> Optional[ValueTypeT]:
        """
        Returns the contents typed as |type_|.

        An empty cell satisfies every type and returns None. A `bool` is not
        accepted as an `int`, even though Python treats it as one.

        Raises:
            TypeMismatchError: If the contents are not an instance of |type_|.
        """
        value = self.__value
        if value is None:
            return None

        if isinstance(value, bool) and type_ is int:
            raise TypeMismatchError(type_, value)

        if not isinstance(value, type_):
            raise TypeMismatchError(type_, value)

        return value

    def get_as_int(self) -> Optional[int]:
        return self.get_as(int)

    def get_as_str(self) -> Optional[str]:
        return self.get_as(str)

    def get_as_float(self) -> Optional[float]:
        return self.get_as(float)

    def get_as_bool(self) -> Optional[bool]:
        return self.get_as(bool)

    def get_as_bytes(self) -> Optional[bytes]:
        return self.get_as(bytes)

    def get_as_char(self) -> Optional[str]:
        """Returns the contents as a single-character string."""
        value = self.get_as(str)
        if value is not None and len(value) != 1:
            raise TypeMismatchError(str, value)
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignable):
            return NotImplemented
        return bool(self.__value == other.get())

    # Mutable, so not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Assignable({self.__value!r})"
