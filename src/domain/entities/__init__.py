"""Domain entities for the policy core.

Pure entities with no framework dependencies.
"""

from src.domain.entities.model import Model
from src.domain.entities.policy_store import PolicyStore, resolve_arity, validate_rule

__all__ = [
    "Model",
    "PolicyStore",
    "resolve_arity",
    "validate_rule",
]
