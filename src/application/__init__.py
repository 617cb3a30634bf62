"""Application layer - Policy lifecycle orchestration.

Coordinates the domain (Model, PolicyStore) with a policy adapter:
- services/policy_manager.py: bind, load, save and auto-saved mutations

The application layer orchestrates domain logic but contains no business rules.
"""
