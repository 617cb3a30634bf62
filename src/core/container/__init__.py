"""Container module - Centralized dependency injection.

All factory functions are re-exported here:

    from src.core.container import build_policy_manager, get_logger

The container is organized into modules by concern:
- infrastructure: Core services (logging)
- authorization: Policy manager composition
"""

# Infrastructure services
from src.core.container.infrastructure import get_logger

# Authorization
from src.core.container.authorization import DEFAULT_MODEL_PATH, build_policy_manager

__all__ = [
    # Infrastructure
    "get_logger",
    # Authorization
    "DEFAULT_MODEL_PATH",
    "build_policy_manager",
]
