"""Assertion value object.

One ``key = value`` entry of a model section. Definition sections
(request_definition, policy_definition, role_definition) hold an ordered
tuple of field names; every other section holds a raw expression string
that is passed through untouched to the evaluation engine.

Usage:
    from src.domain.value_objects import Assertion

    p = Assertion(key="p", value=("sub", "obj", "act"))
    p.arity  # 3

    m = Assertion(key="m", value="r.sub == p.sub")
    m.is_expression  # True
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Assertion:
    """Single model assertion (value object).

    Field order is significant: it defines the positional meaning of rule
    fields for the matching ptype.

    Attributes:
        key: Assertion key (r, p, g, e, m, p2, g2, ...).
        value: Field names for definition sections, expression otherwise.

    Raises:
        ValueError: If key is empty, the field tuple is empty, or a field
            name is empty.
    """

    key: str
    value: tuple[str, ...] | str

    def __post_init__(self) -> None:
        """Validate the assertion shape."""
        if not self.key:
            raise ValueError("Assertion key must not be empty")
        if isinstance(self.value, tuple):
            if not self.value:
                raise ValueError(f"Assertion '{self.key}' must declare at least one field")
            if any(not name for name in self.value):
                raise ValueError(f"Assertion '{self.key}' has an empty field name")

    @property
    def is_expression(self) -> bool:
        """True when the value is a raw expression string."""
        return isinstance(self.value, str)

    @property
    def fields(self) -> tuple[str, ...]:
        """Field names, empty for expressions."""
        if isinstance(self.value, tuple):
            return self.value
        return ()

    @property
    def expression(self) -> str | None:
        """Expression text, None for field definitions."""
        if isinstance(self.value, str):
            return self.value
        return None

    @property
    def arity(self) -> int:
        """Number of fields a rule of this type carries."""
        return len(self.fields)

    def to_text(self) -> str:
        """Render as a model text line."""
        if isinstance(self.value, tuple):
            return f"{self.key} = {', '.join(self.value)}"
        return f"{self.key} = {self.value}"
