"""Positional rule filter.

Selects rules by comparing a run of consecutive fields, starting at
``field_index``, with ``field_values``. An empty string in ``field_values``
is a wildcard for that position.

Usage:
    from src.domain.value_objects import PolicyFilter

    by_subject = PolicyFilter(field_index=0, field_values=("alice",))
    by_subject.matches(("alice", "data1", "read"))  # True

    any_subject_write = PolicyFilter(field_index=1, field_values=("", "write"))
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyFilter:
    """Positional filter over rule fields (value object).

    Attributes:
        field_index: Position of the first compared field.
        field_values: Expected values; "" matches anything.
    """

    field_index: int
    field_values: tuple[str, ...]

    @classmethod
    def of(cls, field_index: int, field_values: Sequence[str]) -> "PolicyFilter":
        """Build a filter from any sequence of values."""
        return cls(field_index=field_index, field_values=tuple(field_values))

    @property
    def span_end(self) -> int:
        """Index one past the last compared field."""
        return self.field_index + len(self.field_values)

    def fits(self, arity: int) -> bool:
        """Check the filter addresses positions that exist for this arity."""
        return (
            self.field_index >= 0
            and len(self.field_values) > 0
            and self.span_end <= arity
        )

    def matches(self, rule: Sequence[str]) -> bool:
        """Check whether a rule satisfies the filter.

        Args:
            rule: Rule fields.

        Returns:
            bool: True if every non-wildcard value equals the rule field at
                the same offset. Rules too short to cover the span never match.
        """
        if len(rule) < self.span_end:
            return False
        for offset, expected in enumerate(self.field_values):
            if expected and rule[self.field_index + offset] != expected:
                return False
        return True
