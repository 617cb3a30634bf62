"""Authorization infrastructure: model parsing and policy adapters."""

from src.infrastructure.authorization.base_adapter import BasePolicyAdapter
from src.infrastructure.authorization.memory_adapter import InMemoryPolicyAdapter
from src.infrastructure.authorization.model_parser import ModelParser, parse_model

__all__ = [
    "BasePolicyAdapter",
    "InMemoryPolicyAdapter",
    "ModelParser",
    "parse_model",
]
