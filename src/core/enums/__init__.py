"""Core enums: error codes and runtime environments.

Usage:
    from src.core.enums import Environment, ErrorCode
"""

from src.core.enums.environment import Environment
from src.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
