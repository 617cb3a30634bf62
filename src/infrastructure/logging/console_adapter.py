"""Console logging adapter.

Structured logs to stdout through structlog:
- development/production: colored key-value lines
- testing/ci: one JSON object per line

Event names are snake_case verbs (``policy_loaded``, ``policy_adapter_write_failed``)
and context is passed as keyword arguments, never formatted into the message.

Implementation intentionally does NOT inherit from LoggerProtocol (PEP 544
structural subtyping).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog


def _resolve_level(level: str) -> int:
    """Map a level name to its numeric value; unknown names give INFO."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def _processors(use_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def _with_exception(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context


class ConsoleAdapter:
    """Structured console logger.

    Args:
        use_json (bool): JSON output when True (testing/ci), colored console otherwise.
        level (str): Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        context (Mapping[str, Any] | None): Fields bound to every event
            (for example ``app`` and ``version``).
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        structlog.configure(
            processors=_processors(use_json),
            wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        self._logger = structlog.get_logger()
        if context:
            self._logger = self._logger.bind(**context)

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug message."""
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info message."""
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning message."""
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error, flattening ``error`` into error_type/error_message."""
        self._logger.error(message, **_with_exception(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical event, flattening ``error`` like error()."""
        self._logger.critical(message, **_with_exception(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter whose events all carry ``context``.

        The receiver is left unchanged.
        """
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter

    def with_context(self, **context: Any) -> ConsoleAdapter:
        """Alias for bind()."""
        return self.bind(**context)
