"""Result types for railway-oriented programming.

This module implements the Result pattern to handle operations that can fail
without using exceptions. This approach makes error handling explicit and
testable.

Adapter operations that a backend may choose not to implement use a third
variant, ``Unsupported``. It is neither a success nor an error: callers
treat it as a no-op.

Usage:
    def divide(a: float, b: float) -> Result[float, str]:
        if b == 0:
            return Failure(error="Division by zero")
        return Success(value=a / b)

    result = divide(10, 2)
    match result:
        case Success(value=value):
            print(f"Result: {value}")
        case Failure(error=error):
            print(f"Error: {error}")

    outcome = adapter.add_policy("p", "p", ("alice", "data1", "read"))
    match outcome:
        case Unsupported():
            pass  # backend has no incremental writes
        case Failure(error=error):
            print(f"Write failed: {error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


@dataclass(frozen=True, slots=True, kw_only=True)
class Unsupported:
    """Represents an operation the callee intentionally does not implement.

    Distinct from Failure: nothing went wrong, the capability simply
    does not exist.
    """


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]

# Type alias for operations backed by an optional capability
type OptionalResult[T, E] = Success[T] | Failure[E] | Unsupported
