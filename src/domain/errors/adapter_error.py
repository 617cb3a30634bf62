"""Adapter (persistence backend) error.

Backend-specific failure reported by an adapter: I/O, connectivity,
constraint violations. The policy manager propagates it verbatim and never
retries.

Usage:
    from src.domain.errors import AdapterError
    from src.core.enums import ErrorCode

    return Failure(error=AdapterError(
        code=ErrorCode.ADAPTER_SAVE_FAILED,
        message="connection reset",
        operation="save_policy",
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AdapterError(DomainError):
    """Persistence backend failure.

    Attributes:
        code: ErrorCode enum (ADAPTER_LOAD_FAILED, ADAPTER_SAVE_FAILED, ...).
        message: Human-readable message.
        operation: Adapter operation that failed (load_policy, add_policy, ...).
        details: Additional context.
    """

    operation: str | None = None
