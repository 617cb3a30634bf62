"""Domain layer - Pure policy model and rule logic.

This layer contains the model and rule-store entities, value objects,
protocols (ports) and domain errors. The domain layer has NO dependencies on
any framework or infrastructure - it is pure Python.

Structure:
- entities/: Model and PolicyStore (mutable)
- value_objects/: Assertion and PolicyFilter (immutable)
- protocols/: Ports (policy adapter, logger)
- errors/: Domain error dataclasses
- enums/: Section names, adapter capabilities, lifecycle states

The domain layer defines WHAT a policy model is, not HOW it is stored.
"""
