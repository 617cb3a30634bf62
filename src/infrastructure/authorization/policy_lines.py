"""Policy line helpers.

Policy rules are commonly exchanged as CSV lines whose first token is the
ptype:

    p, alice, data1, read
    g, alice, admin
    p2, "data, archived", read

The section letter is the first character of the ptype ("p2" -> "p").
Blank lines and lines starting with "#" are skipped. Tokens containing
commas or quotes use CSV double-quote escaping.

Usage:
    from src.infrastructure.authorization.policy_lines import load_policy_lines

    match load_policy_lines(Path("policy.csv").read_text().splitlines()):
        case Success(value=groups):
            adapter = InMemoryPolicyAdapter(groups)
"""

import csv
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success
from src.domain.enums import RULE_SECTIONS
from src.domain.types import PolicyKey, Rule, RuleGroups

COMMENT_MARKER = "#"


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyLine:
    """One parsed policy line.

    Attributes:
        sec: Section letter ("p" or "g").
        ptype: Rule type (p, p2, g, ...).
        rule: Rule fields.
    """

    sec: str
    ptype: str
    rule: Rule


def _invalid(message: str, line: str, line_number: int | None) -> Failure[ValidationError]:
    details = {"line": line}
    if line_number is not None:
        details["line_number"] = str(line_number)
    return Failure(
        error=ValidationError(
            code=ErrorCode.POLICY_LINE_INVALID,
            message=message,
            field="line",
            details=details,
        )
    )


def parse_policy_line(
    line: str,
    line_number: int | None = None,
) -> Result[PolicyLine | None, ValidationError]:
    """Parse one policy line.

    Args:
        line: Raw line.
        line_number: Optional 1-based line number for error details.

    Returns:
        Success(PolicyLine): Parsed rule.
        Success(None): Blank or comment line.
        Failure(ValidationError): Missing fields or unknown section letter.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_MARKER):
        return Success(value=None)

    try:
        tokens = next(csv.reader([stripped], skipinitialspace=True))
    except csv.Error as e:
        return _invalid(f"Malformed policy line: {e}", stripped, line_number)

    tokens = [token.strip() for token in tokens]
    ptype, fields = tokens[0], tuple(tokens[1:])

    if not ptype or ptype[0] not in RULE_SECTIONS:
        return _invalid(f"Unknown policy type '{ptype}'", stripped, line_number)
    if not fields:
        return _invalid(f"Policy line for '{ptype}' has no fields", stripped, line_number)

    return Success(value=PolicyLine(sec=ptype[0], ptype=ptype, rule=fields))


def load_policy_lines(
    lines: Iterable[str],
) -> Result[dict[PolicyKey, list[Rule]], ValidationError]:
    """Parse policy lines into rule groups.

    Returns:
        Success(groups): Rules grouped by (sec, ptype) in line order.
        Failure(ValidationError): First invalid line.
    """
    groups: dict[PolicyKey, list[Rule]] = {}
    for number, line in enumerate(lines, start=1):
        result = parse_policy_line(line, number)
        match result:
            case Failure():
                return result
            case Success(value=None):
                continue
            case Success(value=parsed):
                groups.setdefault((parsed.sec, parsed.ptype), []).append(parsed.rule)
    return Success(value=groups)


def _quote(token: str) -> str:
    if any(char in token for char in ',"') or token != token.strip():
        return '"' + token.replace('"', '""') + '"'
    return token


def rule_to_line(ptype: str, rule: Sequence[str]) -> str:
    """Render one rule as a policy line."""
    return ", ".join(_quote(token) for token in (ptype, *rule))


def dump_policy_lines(groups: RuleGroups) -> list[str]:
    """Render rule groups as policy lines, group by group."""
    return [
        rule_to_line(ptype, rule)
        for (_sec, ptype), rules in groups.items()
        for rule in rules
    ]
