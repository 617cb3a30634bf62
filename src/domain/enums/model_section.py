"""Model section names and rule section letters.

A model text is organized in named sections. Three of them declare field
names (request, policy and role shapes); the others hold raw expressions
consumed by the evaluation engine.

Policy rules are grouped by a short section letter: "p" for rules shaped by
policy_definition, "g" for rules shaped by role_definition.
"""

from enum import Enum


class ModelSection(str, Enum):
    """Conventional model section names."""

    REQUEST_DEFINITION = "request_definition"
    POLICY_DEFINITION = "policy_definition"
    ROLE_DEFINITION = "role_definition"
    POLICY_EFFECT = "policy_effect"
    MATCHERS = "matchers"


# Sections whose values are comma-separated field names
DEFINITION_SECTIONS: frozenset[str] = frozenset(
    {
        ModelSection.REQUEST_DEFINITION.value,
        ModelSection.POLICY_DEFINITION.value,
        ModelSection.ROLE_DEFINITION.value,
    }
)

# Rule section letter -> model section that defines its arity
RULE_SECTIONS: dict[str, str] = {
    "p": ModelSection.POLICY_DEFINITION.value,
    "g": ModelSection.ROLE_DEFINITION.value,
}
