"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import LoggerProtocol, PolicyAdapterProtocol
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_adapter_protocol import PolicyAdapterProtocol

__all__ = [
    "LoggerProtocol",
    "PolicyAdapterProtocol",
]
