"""Policy rule store entity.

In-memory working set of policy rules grouped by (section, ptype). Insertion
order is preserved inside each group and duplicates are allowed.

The store itself does not know the model; validate_rule() checks a rule
against a Model before it enters the store.

Usage:
    from src.domain.entities import Model, PolicyStore, validate_rule

    store = PolicyStore()
    match validate_rule(model, "p", "p", ("alice", "data1", "read")):
        case Success():
            store.add_rule("p", "p", ("alice", "data1", "read"))
"""

from collections.abc import Iterable, Sequence
from types import MappingProxyType

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.model import Model
from src.domain.enums import RULE_SECTIONS
from src.domain.types import PolicyKey, Rule, RuleGroups
from src.domain.value_objects.policy_filter import PolicyFilter


def resolve_arity(model: Model, sec: str, ptype: str) -> Result[int, ValidationError]:
    """Look up the arity of a (sec, ptype) rule group.

    Args:
        model: Model providing arities.
        sec: Rule section letter ("p" or "g").
        ptype: Rule type (p, p2, g, g2, ...).

    Returns:
        Success(arity) or Failure(ValidationError) for an unknown section
        letter or a ptype the model does not define.
    """
    if sec not in RULE_SECTIONS:
        return Failure(
            error=ValidationError(
                code=ErrorCode.POLICY_SECTION_INVALID,
                message=f"Unknown rule section '{sec}', expected one of {sorted(RULE_SECTIONS)}",
                field="sec",
                details={"sec": sec},
            )
        )

    arity = model.arity(sec, ptype)
    if arity is None:
        return Failure(
            error=ValidationError(
                code=ErrorCode.POLICY_TYPE_UNKNOWN,
                message=f"Policy type '{ptype}' is not defined in {RULE_SECTIONS[sec]}",
                field="ptype",
                details={"sec": sec, "ptype": ptype},
            )
        )

    return Success(value=arity)


def validate_rule(
    model: Model,
    sec: str,
    ptype: str,
    rule: Sequence[str],
) -> Result[int, ValidationError]:
    """Check a rule's shape against the model.

    Returns:
        Success(arity): Rule length matches the declared arity.
        Failure(ValidationError): Unknown section, undefined ptype, or
            arity mismatch.
    """
    match resolve_arity(model, sec, ptype):
        case Failure() as failure:
            return failure
        case Success(value=arity) if len(rule) != arity:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.POLICY_ARITY_MISMATCH,
                    message=f"Rule has {len(rule)} fields, {ptype} expects {arity}",
                    field="rule",
                    details={
                        "sec": sec,
                        "ptype": ptype,
                        "expected": str(arity),
                        "actual": str(len(rule)),
                    },
                )
            )
        case success:
            return success


class PolicyStore:
    """Rule groups keyed by (section, ptype).

    Rules are stored as tuples so snapshots handed to adapters cannot be
    mutated from outside.

    Thread Safety:
        - NOT thread-safe; the owning PolicyManager is the single writer.
    """

    def __init__(self) -> None:
        """Create an empty store."""
        self._groups: dict[PolicyKey, list[Rule]] = {}

    @classmethod
    def from_groups(cls, groups: RuleGroups) -> "PolicyStore":
        """Build a store from rule groups (copied, order preserved)."""
        store = cls()
        for (sec, ptype), rules in groups.items():
            store.add_rules(sec, ptype, rules)
        return store

    def add_rule(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Append a rule to its group."""
        self._groups.setdefault((sec, ptype), []).append(tuple(rule))

    def add_rules(self, sec: str, ptype: str, rules: Iterable[Sequence[str]]) -> None:
        """Append several rules to one group, keeping their order."""
        group = self._groups.setdefault((sec, ptype), [])
        group.extend(tuple(rule) for rule in rules)

    def remove_rule(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Remove the first exact positional match.

        Returns:
            bool: True if a rule was removed, False if none matched.
        """
        group = self._groups.get((sec, ptype))
        if not group:
            return False
        target = tuple(rule)
        try:
            group.remove(target)
        except ValueError:
            return False
        return True

    def remove_filtered(
        self,
        sec: str,
        ptype: str,
        policy_filter: PolicyFilter,
    ) -> list[Rule]:
        """Remove every rule of a group matching the filter.

        Returns:
            list[Rule]: Removed rules, in their previous order.
        """
        group = self._groups.get((sec, ptype))
        if not group:
            return []
        removed = [rule for rule in group if policy_filter.matches(rule)]
        if removed:
            group[:] = [rule for rule in group if not policy_filter.matches(rule)]
        return removed

    def has_rule(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Check whether an exact rule is present."""
        return tuple(rule) in self._groups.get((sec, ptype), ())

    def rules(self, sec: str, ptype: str) -> list[Rule]:
        """Rules of one group (copy)."""
        return list(self._groups.get((sec, ptype), ()))

    def filtered_rules(
        self,
        sec: str,
        ptype: str,
        policy_filter: PolicyFilter,
    ) -> list[Rule]:
        """Rules of one group matching the filter."""
        return [rule for rule in self._groups.get((sec, ptype), ()) if policy_filter.matches(rule)]

    def keys(self) -> tuple[PolicyKey, ...]:
        """Group keys in first-insertion order."""
        return tuple(self._groups)

    def snapshot(self) -> RuleGroups:
        """Read-only copy of every group, for adapters."""
        return MappingProxyType({key: tuple(rules) for key, rules in self._groups.items()})

    def clear(self) -> None:
        """Drop every rule."""
        self._groups.clear()

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._groups.values())

    def __repr__(self) -> str:
        sizes = {f"{sec}.{ptype}": len(rules) for (sec, ptype), rules in self._groups.items()}
        return f"PolicyStore({sizes})"
