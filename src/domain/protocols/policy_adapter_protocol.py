"""Policy adapter protocol (port) for policy persistence.

This protocol defines the contract between the policy manager and a storage
backend. Infrastructure adapters implement it; the manager only ever sees
the protocol.

Capabilities:
    - load_policy / save_policy: mandatory.
    - add_policy / remove_policy / remove_filtered_policy: optional. An
      adapter without the capability returns Unsupported() (never a
      Failure) and leaves it out of ``capabilities``.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides ADAPTERS (InMemoryPolicyAdapter, SQL/file
  backends living in their own packages)
- Application layer uses the protocol (PolicyManager)

Usage:
    from src.domain.protocols import PolicyAdapterProtocol

    adapter: PolicyAdapterProtocol = InMemoryPolicyAdapter()
    match adapter.load_policy(model):
        case Success(value=groups):
            ...
        case Failure(error=error):
            ...
"""

from collections.abc import Sequence
from typing import Protocol

from src.core.result import OptionalResult, Result
from src.domain.entities.model import Model
from src.domain.enums import AdapterCapability
from src.domain.errors import AdapterError
from src.domain.types import RuleGroups


class PolicyAdapterProtocol(Protocol):
    """Protocol for policy persistence backends.

    Adapters own no state visible to the core beyond what they persist, and
    must not keep references to the model or rule groups they receive.

    Error Handling:
        Failures are returned as Failure(AdapterError), never raised.
        Missing optional operations return Unsupported().
    """

    @property
    def capabilities(self) -> frozenset[AdapterCapability]:
        """Optional operations this adapter implements."""
        ...

    def load_policy(self, model: Model) -> Result[RuleGroups, AdapterError]:
        """Load every persisted rule.

        Args:
            model: Bound model, for arity context.

        Returns:
            Success(rule_groups): All persisted rules grouped by (sec, ptype).
            Failure(AdapterError): Backend failure.
        """
        ...

    def save_policy(self, model: Model, groups: RuleGroups) -> Result[None, AdapterError]:
        """Replace every persisted rule with ``groups``.

        Destructive full replace (delete all, insert all). Not transactional:
        a partial failure may leave the backend with a mix of old and new
        rules.

        Args:
            model: Bound model.
            groups: Complete read-only rule set.

        Returns:
            Success(None) or Failure(AdapterError).
        """
        ...

    def add_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Persist one rule.

        Returns:
            Success(None), Failure(AdapterError) or Unsupported().
        """
        ...

    def remove_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Delete one matching rule.

        Returns:
            Success(None), Failure(AdapterError) or Unsupported().
        """
        ...

    def remove_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        field_values: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Delete every rule matching a positional filter.

        A rule matches when, for every value in ``field_values``, the field
        at ``field_index + offset`` equals it; "" is a wildcard.

        Returns:
            Success(None), Failure(AdapterError) or Unsupported().
        """
        ...
