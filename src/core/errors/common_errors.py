"""Common error classes used across all domains and layers.

These are generic errors that don't belong to any specific domain.
They are used throughout the application for common failure scenarios.

Error Types:
- ValidationError: Input validation failures (rule arity, filters, policy lines)

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.POLICY_ARITY_MISMATCH,
        message="Rule has 2 fields, p expects 3",
        field="rule",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None
