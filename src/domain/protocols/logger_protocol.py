"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the policy core while
remaining backend-agnostic. Implementations MUST ensure logs are structured
(key-value context). Rule fields may identify people (subjects), so log the
(sec, ptype) pair and counts above DEBUG level rather than full rules.

Log Levels (standard 5-level hierarchy):
    - DEBUG: Detailed diagnostic info (rule fields, Unsupported outcomes)
    - INFO: Lifecycle events (bind, load, save)
    - WARNING: Memory and storage may have diverged
    - ERROR: Operation failed
    - CRITICAL: Unrecoverable failure

Context Binding:
    Use bind() or with_context() to create scoped loggers with permanent
    context (component, adapter name) automatically included in all logs.

Usage:
    from src.core.container import get_logger
    from src.domain.protocols.logger_protocol import LoggerProtocol

    logger: LoggerProtocol = get_logger()
    logger.info("policy_loaded", rule_count=12)

    manager_logger = logger.bind(component="policy_manager")
    manager_logger.warning("policy_adapter_write_failed", sec="p", ptype="p")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls MUST be structured: message + key-value context.
    Supports 5 standard log levels and context binding.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (snake_case, no f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message.

        Args:
            message: Event name (snake_case, no f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Args:
            message: Event name (snake_case, no f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for unrecoverable failures.

        Args:
            message: Event name.
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind() - return logger with bound context.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
