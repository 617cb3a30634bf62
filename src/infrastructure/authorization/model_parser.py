"""Model definition parser.

Turns model text into a Model.

Grammar:
    [section_name]          section header, name matches [A-Za-z_][A-Za-z0-9_]*
    key = value             assignment, split at the first "=", both sides stripped
    # comment / ; comment   ignored
    (blank line)            ignored
    value \\                 trailing backslash joins the next line

Values of request_definition, policy_definition and role_definition are
split on "," into field names. Every other section keeps the value verbatim:
it is an expression for the evaluation engine, not for this parser.

Parsing is pure: no logging, no I/O (except parse_file, which reads the
file and then delegates to parse). Failures are returned, never raised.

Example:
    >>> parser = ModelParser()
    >>> result = parser.parse(RBAC_MODEL_TEXT)
    >>> match result:
    ...     case Success(value=model):
    ...         model.arity("p", "p")
    ...     case Failure(error=error):
    ...         print(error)
"""

import re
from dataclasses import dataclass
from pathlib import Path

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.model import Model
from src.domain.enums import DEFINITION_SECTIONS
from src.domain.errors import ModelParseError
from src.domain.value_objects.assertion import Assertion

COMMENT_MARKERS = ("#", ";")
CONTINUATION = "\\"
SECTION_HEADER = re.compile(r"^\[([A-Za-z_][A-Za-z0-9_]*)\]$")


@dataclass(frozen=True, slots=True, kw_only=True)
class _LogicalLine:
    """A line after joining continuations.

    Attributes:
        number: 1-based number of the first physical line.
        text: Stripped text.
    """

    number: int
    text: str


def _logical_lines(text: str) -> list[_LogicalLine]:
    """Strip lines, drop blanks and comments, join continuations."""
    lines: list[_LogicalLine] = []
    pending: list[str] = []
    pending_start = 0

    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not pending and (not stripped or stripped.startswith(COMMENT_MARKERS)):
            continue

        if stripped.endswith(CONTINUATION):
            if not pending:
                pending_start = number
            pending.append(stripped[: -len(CONTINUATION)].strip())
            continue

        if pending:
            pending.append(stripped)
            joined = " ".join(part for part in pending if part)
            lines.append(_LogicalLine(number=pending_start, text=joined))
            pending = []
        else:
            lines.append(_LogicalLine(number=number, text=stripped))

    # Continuation on the last line: keep what was collected
    if pending:
        joined = " ".join(part for part in pending if part)
        if joined:
            lines.append(_LogicalLine(number=pending_start, text=joined))

    return lines


def _error(
    code: ErrorCode,
    message: str,
    line: _LogicalLine,
    **details: str,
) -> Failure[ModelParseError]:
    return Failure(
        error=ModelParseError(
            code=code,
            message=message,
            line_number=line.number,
            details={"line": line.text, **details},
        )
    )


class ModelParser:
    """Parser for model definition text.

    Stateless: one instance can be reused for any number of texts.

    Example:
        >>> result = ModelParser().parse("[request_definition]\\nr = sub, obj, act\\n")
        >>> result.value.get("request_definition", "r").fields
        ('sub', 'obj', 'act')
    """

    def parse(self, text: str) -> Result[Model, ModelParseError]:
        """Parse model text.

        Args:
            text: Model definition text.

        Returns:
            Success(Model): Parsed model, sections and keys in text order.
            Failure(ModelParseError): First grammar violation found.
        """
        model = Model()
        section: str | None = None

        for line in _logical_lines(text):
            if line.text.startswith("["):
                match = SECTION_HEADER.match(line.text)
                if match is None:
                    return _error(
                        ErrorCode.MODEL_INVALID_SECTION_HEADER,
                        f"Invalid section header: {line.text}",
                        line,
                    )
                section = match.group(1)
                model.add_section(section)
                continue

            if section is None:
                return _error(
                    ErrorCode.MODEL_LINE_OUTSIDE_SECTION,
                    "Assignment appears before any section header",
                    line,
                )

            key, separator, value = line.text.partition("=")
            if not separator:
                return _error(
                    ErrorCode.MODEL_MISSING_SEPARATOR,
                    f"Expected 'key = value' in section '{section}'",
                    line,
                    section=section,
                )

            key = key.strip()
            value = value.strip()
            if not key:
                return _error(
                    ErrorCode.MODEL_EMPTY_KEY,
                    f"Assignment without a key in section '{section}'",
                    line,
                    section=section,
                )
            if not value:
                return _error(
                    ErrorCode.MODEL_EMPTY_VALUE,
                    f"Key '{key}' in section '{section}' has no value",
                    line,
                    section=section,
                )

            if section in DEFINITION_SECTIONS:
                fields = tuple(token.strip() for token in value.split(","))
                if any(not name for name in fields):
                    return _error(
                        ErrorCode.MODEL_EMPTY_FIELD,
                        f"Key '{key}' in section '{section}' has an empty field name",
                        line,
                        section=section,
                    )
                assertion = Assertion(key=key, value=fields)
            else:
                assertion = Assertion(key=key, value=value)

            if not model.add_assertion(section, assertion):
                return _error(
                    ErrorCode.MODEL_DUPLICATE_KEY,
                    f"Duplicate key '{key}' in section '{section}'",
                    line,
                    section=section,
                )

        return Success(value=model)

    def parse_file(self, path: str | Path) -> Result[Model, ModelParseError]:
        """Read a UTF-8 model file and parse it.

        Args:
            path: Model file path.

        Returns:
            Success(Model) or Failure(ModelParseError). Unreadable files
            return MODEL_FILE_UNREADABLE.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Failure(
                error=ModelParseError(
                    code=ErrorCode.MODEL_FILE_UNREADABLE,
                    message=f"Cannot read model file: {e}",
                    details={"path": str(path)},
                )
            )
        return self.parse(text)


def parse_model(text: str) -> Result[Model, ModelParseError]:
    """Parse model text with a default parser (module-level shortcut)."""
    return ModelParser().parse(text)
