"""In-memory policy adapter.

Implements PolicyAdapterProtocol over a plain dictionary. Suitable for tests,
local development and seeding from policy lines. For durable storage, use a
database or file backend implementing the same protocol.

Architecture:
    - Implements PolicyAdapterProtocol (hexagonal adapter pattern)
    - Dictionary-based storage ((sec, ptype) -> list of rules)
    - Declared capabilities are configurable so a test can emulate a
      backend supporting only part of the incremental operations

Usage:
    >>> adapter = InMemoryPolicyAdapter({("p", "p"): [("alice", "data1", "read")]})
    >>> manager.bind(model, adapter)
    >>> manager.load_policy()
"""

from collections.abc import Iterable, Sequence

from src.core.errors import ValidationError
from src.core.result import Failure, OptionalResult, Result, Success, Unsupported
from src.domain.entities.model import Model
from src.domain.enums import ALL_CAPABILITIES, AdapterCapability
from src.domain.errors import AdapterError
from src.domain.types import PolicyKey, Rule, RuleGroups
from src.domain.value_objects.policy_filter import PolicyFilter
from src.infrastructure.authorization.base_adapter import BasePolicyAdapter
from src.infrastructure.authorization.policy_lines import (
    dump_policy_lines,
    load_policy_lines,
)


class InMemoryPolicyAdapter(BasePolicyAdapter):
    """Policy storage held in process memory.

    Thread Safety:
        - NOT thread-safe (single owner, like the PolicyManager using it)

    Attributes:
        _rules: (sec, ptype) -> stored rules, insertion order preserved.
        capabilities: Incremental operations this instance answers.
    """

    def __init__(
        self,
        groups: RuleGroups | None = None,
        *,
        capabilities: Iterable[AdapterCapability] = ALL_CAPABILITIES,
    ) -> None:
        """Initialize adapter storage.

        Args:
            groups: Initial rules (copied).
            capabilities: Incremental operations to support; the others
                answer Unsupported().
        """
        self._rules: dict[PolicyKey, list[Rule]] = {}
        if groups is not None:
            self._replace(groups)
        self.capabilities = frozenset(capabilities)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        capabilities: Iterable[AdapterCapability] = ALL_CAPABILITIES,
    ) -> Result["InMemoryPolicyAdapter", ValidationError]:
        """Create an adapter seeded from policy lines.

        Returns:
            Success(adapter) or Failure(ValidationError) for the first bad line.
        """
        match load_policy_lines(lines):
            case Success(value=groups):
                return Success(value=cls(groups, capabilities=capabilities))
            case Failure(error=error):
                return Failure(error=error)

    def _replace(self, groups: RuleGroups) -> None:
        self._rules = {key: [tuple(rule) for rule in rules] for key, rules in groups.items()}

    def load_policy(self, model: Model) -> Result[RuleGroups, AdapterError]:
        """Return a copy of every stored rule."""
        return Success(value={key: list(rules) for key, rules in self._rules.items() if rules})

    def save_policy(self, model: Model, groups: RuleGroups) -> Result[None, AdapterError]:
        """Replace all stored rules with a copy of ``groups``."""
        self._replace(groups)
        return Success(value=None)

    def add_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Store one rule."""
        if AdapterCapability.ADD_POLICY not in self.capabilities:
            return Unsupported()
        self._rules.setdefault((sec, ptype), []).append(tuple(rule))
        return Success(value=None)

    def remove_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Delete the first stored copy of a rule (no-op if absent)."""
        if AdapterCapability.REMOVE_POLICY not in self.capabilities:
            return Unsupported()
        group = self._rules.get((sec, ptype), [])
        target = tuple(rule)
        if target in group:
            group.remove(target)
        return Success(value=None)

    def remove_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        field_values: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Delete every stored rule matching the positional filter."""
        if AdapterCapability.REMOVE_FILTERED_POLICY not in self.capabilities:
            return Unsupported()
        policy_filter = PolicyFilter.of(field_index, field_values)
        group = self._rules.get((sec, ptype))
        if group:
            group[:] = [rule for rule in group if not policy_filter.matches(rule)]
        return Success(value=None)

    def rules(self, sec: str, ptype: str) -> list[Rule]:
        """Stored rules of one group (copy), for inspection."""
        return list(self._rules.get((sec, ptype), ()))

    def to_lines(self) -> list[str]:
        """Stored rules rendered as policy lines."""
        return dump_policy_lines(self._rules)
