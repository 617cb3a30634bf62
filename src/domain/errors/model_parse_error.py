"""Model text parsing error.

Returned by the model parser when the text does not follow the model grammar.
Parsing is all-or-nothing: a ModelParseError means no Model was produced.

Usage:
    from src.domain.errors import ModelParseError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ModelParseError(
        code=ErrorCode.MODEL_DUPLICATE_KEY,
        message="Duplicate key 'p' in section 'policy_definition'",
        line_number=4,
    ))
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ModelParseError(DomainError):
    """Model text does not follow the grammar.

    Attributes:
        code: ErrorCode enum (MODEL_DUPLICATE_KEY, MODEL_MISSING_SEPARATOR, etc.).
        message: Human-readable message.
        line_number: 1-based line of the offending text, None for file errors.
        details: Additional context (offending line, section, path).
    """

    line_number: int | None = None

    def __str__(self) -> str:
        """String representation including the line number."""
        if self.line_number is None:
            return f"{self.code.value}: {self.message}"
        return f"{self.code.value}: line {self.line_number}: {self.message}"
