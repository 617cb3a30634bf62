"""Model entity.

Structured form of a model definition: an ordered mapping from section name
to an ordered mapping from assertion key to Assertion. Built by the model
parser or programmatically via add_assertion().

A Model is replaced wholesale by the policy manager, never merged.

Usage:
    from src.domain.entities import Model
    from src.domain.value_objects import Assertion

    model = Model()
    model.add_assertion("policy_definition", Assertion(key="p", value=("sub", "obj", "act")))
    model.arity("p", "p")  # 3
"""

from collections.abc import Mapping
from types import MappingProxyType

from src.domain.enums import RULE_SECTIONS
from src.domain.value_objects.assertion import Assertion


class Model:
    """Parsed policy model.

    Section and key insertion order is preserved; equality is structural
    (same sections, same keys, same values with the same field order).

    Attributes:
        _sections: Section name -> (key -> Assertion).
    """

    def __init__(self) -> None:
        """Create an empty model."""
        self._sections: dict[str, dict[str, Assertion]] = {}

    def add_section(self, section: str) -> None:
        """Declare a section (no-op if it already exists)."""
        self._sections.setdefault(section, {})

    def add_assertion(self, section: str, assertion: Assertion) -> bool:
        """Add an assertion to a section, creating the section if needed.

        Args:
            section: Section name (e.g. "policy_definition").
            assertion: Assertion to add.

        Returns:
            bool: True if added, False if the key already exists in the section.
        """
        entries = self._sections.setdefault(section, {})
        if assertion.key in entries:
            return False
        entries[assertion.key] = assertion
        return True

    def get(self, section: str, key: str) -> Assertion | None:
        """Look up one assertion."""
        return self._sections.get(section, {}).get(key)

    def has_section(self, section: str) -> bool:
        """Check whether a section is declared."""
        return section in self._sections

    def section_names(self) -> tuple[str, ...]:
        """Section names in declaration order."""
        return tuple(self._sections)

    def keys(self, section: str) -> tuple[str, ...]:
        """Assertion keys of a section in declaration order."""
        return tuple(self._sections.get(section, {}))

    @property
    def sections(self) -> Mapping[str, Mapping[str, Assertion]]:
        """Read-only view of all sections."""
        return MappingProxyType(
            {name: MappingProxyType(entries) for name, entries in self._sections.items()}
        )

    def policy_types(self, sec: str) -> tuple[str, ...]:
        """Ptypes declared for a rule section letter.

        Args:
            sec: "p" or "g".

        Returns:
            tuple[str, ...]: Keys of policy_definition / role_definition,
                empty for unknown letters.
        """
        section = RULE_SECTIONS.get(sec)
        if section is None:
            return ()
        return self.keys(section)

    def arity(self, sec: str, ptype: str) -> int | None:
        """Number of fields a rule of (sec, ptype) must carry.

        Returns:
            int | None: Arity, or None if sec/ptype is not defined.
        """
        section = RULE_SECTIONS.get(sec)
        if section is None:
            return None
        assertion = self.get(section, ptype)
        if assertion is None or assertion.is_expression:
            return None
        return assertion.arity

    def copy(self) -> "Model":
        """Independent copy (assertions are immutable and shared)."""
        clone = Model()
        for name, entries in self._sections.items():
            clone._sections[name] = dict(entries)
        return clone

    def to_text(self) -> str:
        """Render the model in the model text format.

        Parsing the result yields a model equal to this one.
        """
        blocks = []
        for name, entries in self._sections.items():
            lines = [f"[{name}]"]
            lines.extend(assertion.to_text() for assertion in entries.values())
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n" if blocks else ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return list(self._sections.items()) == list(other._sections.items())

    def __repr__(self) -> str:
        return f"Model(sections={list(self._sections)})"
