"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console, JSON in testing/ci)

Reference:
    Factories are the only place concrete adapters are chosen; everything
    else depends on the protocols in src/domain/protocols.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    env = (
        settings.environment.value
        if hasattr(settings.environment, "value")
        else str(settings.environment)
    )

    use_json = env in {"testing", "ci"}
    return ConsoleAdapter(
        use_json=use_json,
        level=settings.effective_log_level,
        context={"app": settings.app_name, "version": settings.app_version},
    )
