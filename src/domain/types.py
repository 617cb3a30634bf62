"""Shared type aliases for policy rules.

Usage:
    from src.domain.types import PolicyKey, Rule, RuleGroups

    groups: RuleGroups = {("p", "p"): [("alice", "data1", "read")]}
"""

from collections.abc import Mapping, Sequence

# One policy rule: ordered string fields
type Rule = tuple[str, ...]

# (section letter, ptype), e.g. ("p", "p"), ("g", "g2")
type PolicyKey = tuple[str, str]

# Rule groups as exchanged with adapters
type RuleGroups = Mapping[PolicyKey, Sequence[Rule]]
