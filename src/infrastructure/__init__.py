"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Model text parsing
- Policy adapters (in-memory reference backend, base class for others)
- Structured logging (structlog)

Structure:
- authorization/: Model parser, policy line helpers, policy adapters
- logging/: Logger adapters

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
