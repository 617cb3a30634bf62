"""Policy manager lifecycle error.

Returned when an operation is called in a state that does not allow it,
e.g. load_policy() before bind().
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class LifecycleError(DomainError):
    """Operation not allowed in the current lifecycle state.

    Attributes:
        code: ErrorCode enum (POLICY_MANAGER_NOT_BOUND).
        message: Human-readable message.
        state: Lifecycle state at the time of the call.
        details: Additional context.
    """

    state: str | None = None
