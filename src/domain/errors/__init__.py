"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from src.domain.errors import AdapterError, LifecycleError, ModelParseError
"""

from src.domain.errors.adapter_error import AdapterError
from src.domain.errors.lifecycle_error import LifecycleError
from src.domain.errors.model_parse_error import ModelParseError

__all__ = [
    "AdapterError",
    "LifecycleError",
    "ModelParseError",
]
