"""Policy manager lifecycle states.

UNBOUND -> MODEL_LOADED (bind) -> READY (load_policy).
"""

from enum import Enum


class LifecycleState(str, Enum):
    """Lifecycle state of a PolicyManager."""

    UNBOUND = "unbound"
    MODEL_LOADED = "model_loaded"
    READY = "ready"
