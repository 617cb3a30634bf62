"""Domain enums for the policy core.

This package contains enumerations used throughout the domain layer.
Enums are centralized here for discoverability and maintainability.

Available Enums:
    - ModelSection: Conventional model section names
    - AdapterCapability: Optional incremental adapter operations
    - LifecycleState: PolicyManager lifecycle states
"""

from src.domain.enums.adapter_capability import ALL_CAPABILITIES, AdapterCapability
from src.domain.enums.lifecycle_state import LifecycleState
from src.domain.enums.model_section import (
    DEFINITION_SECTIONS,
    RULE_SECTIONS,
    ModelSection,
)

__all__ = [
    "ALL_CAPABILITIES",
    "AdapterCapability",
    "DEFINITION_SECTIONS",
    "LifecycleState",
    "ModelSection",
    "RULE_SECTIONS",
]
