"""
Result Type Implementation.

A small Ok/Err pair used where a failure is an expected outcome rather than
an exceptional one, such as a remote parse that may be unavailable.
Callers branch on ``is_ok()`` instead of catching exceptions.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful computation."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self):
        raise ValueError(f"Called unwrap_err on Ok: {self.value!r}")


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a failed computation."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]


def map_ok(result: Result[T, E], func: Callable[[T], U]) -> Result[U, E]:
    """Apply a function to the contained value if Ok, otherwise return Err."""
    if isinstance(result, Ok):
        return Ok(func(result.value))
    return result  # type: ignore
