"""Domain value objects with validation.

Immutable value objects that enforce model and rule constraints.
"""

from src.domain.value_objects.assertion import Assertion
from src.domain.value_objects.policy_filter import PolicyFilter

__all__ = [
    "Assertion",
    "PolicyFilter",
]
