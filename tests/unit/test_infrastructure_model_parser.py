"""Unit tests for ModelParser.

Tests cover:
- Canonical RBAC model (5 sections, field splitting, verbatim expressions)
- Comments, blank lines and line continuation
- Every grammar error with its line number
- Determinism and text round-trip
- parse_file() success and unreadable files
"""

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import ModelParseError
from src.infrastructure.authorization.model_parser import ModelParser, parse_model


@pytest.fixture
def parser() -> ModelParser:
    """Fresh parser."""
    return ModelParser()


@pytest.mark.unit
class TestModelParserCanonicalModel:
    """Test parsing the canonical RBAC model."""

    def test_parses_five_sections(self, parser, rbac_model_text):
        """Test all sections in text order."""
        result = parser.parse(rbac_model_text)

        assert isinstance(result, Success)
        assert result.value.section_names() == (
            "request_definition",
            "policy_definition",
            "role_definition",
            "policy_effect",
            "matchers",
        )

    def test_definition_sections_are_split_into_fields(self, parser, rbac_model_text):
        """Test request, policy and role definitions become field tuples."""
        model = parser.parse(rbac_model_text).value

        assert model.get("request_definition", "r").fields == ("sub", "obj", "act")
        assert model.get("policy_definition", "p").fields == ("sub", "obj", "act")
        assert model.get("role_definition", "g").fields == ("_", "_")

    def test_expressions_are_verbatim(self, parser, rbac_model_text):
        """Test effect and matcher keep their text, including '=' and ','."""
        model = parser.parse(rbac_model_text).value

        assert model.get("policy_effect", "e").expression == "some(where (p.eft == allow))"
        assert model.get("matchers", "m").expression == (
            "g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act"
        )

    def test_parse_is_deterministic(self, parser, rbac_model_text):
        """Test two parses of the same text give equal models."""
        assert parser.parse(rbac_model_text).value == parser.parse(rbac_model_text).value

    def test_to_text_round_trip(self, parser, rbac_model_text):
        """Test a rendered model parses back to an equal model."""
        model = parser.parse(rbac_model_text).value

        assert parser.parse(model.to_text()).value == model

    def test_module_shortcut(self, rbac_model_text):
        """Test parse_model() matches ModelParser().parse()."""
        assert parse_model(rbac_model_text) == ModelParser().parse(rbac_model_text)


@pytest.mark.unit
class TestModelParserLexing:
    """Test comments, whitespace and continuation."""

    def test_comments_and_blank_lines_are_ignored(self, parser):
        """Test '#' and ';' comments anywhere."""
        text = "# header\n\n[matchers]\n  ; note\nm = r.sub == p.sub\n"

        model = parser.parse(text).value

        assert model.keys("matchers") == ("m",)

    def test_whitespace_is_stripped(self, parser):
        """Test keys, values and field names are trimmed."""
        model = parser.parse("[policy_definition]\n   p   =   sub ,obj,  act   \n").value

        assert model.get("policy_definition", "p").fields == ("sub", "obj", "act")

    def test_line_continuation(self, parser):
        """Test a trailing backslash joins the next line."""
        text = "[matchers]\nm = r.sub == p.sub && \\\n    r.obj == p.obj\n"

        model = parser.parse(text).value

        assert model.get("matchers", "m").expression == "r.sub == p.sub && r.obj == p.obj"

    def test_empty_text_gives_empty_model(self, parser):
        """Test no sections for empty input."""
        assert parser.parse("").value.section_names() == ()

    def test_empty_section_is_kept(self, parser):
        """Test a header without assignments still declares the section."""
        model = parser.parse("[policy_effect]\n").value

        assert model.has_section("policy_effect")
        assert model.keys("policy_effect") == ()

    def test_repeated_header_reopens_section(self, parser):
        """Test a second header for the same section adds to it."""
        text = "[policy_definition]\np = sub, obj\n[matchers]\nm = true\n[policy_definition]\np2 = sub\n"

        model = parser.parse(text).value

        assert model.keys("policy_definition") == ("p", "p2")
        assert model.section_names() == ("policy_definition", "matchers")

    def test_custom_section_keeps_value_verbatim(self, parser):
        """Test sections outside the definitions are not split."""
        model = parser.parse("[custom]\nx = a, b\n").value

        assert model.get("custom", "x").expression == "a, b"


@pytest.mark.unit
class TestModelParserErrors:
    """Test grammar violations."""

    @pytest.mark.parametrize(
        "text,code,line_number",
        [
            ("r = sub\n", ErrorCode.MODEL_LINE_OUTSIDE_SECTION, 1),
            ("[matchers\nm = x\n", ErrorCode.MODEL_INVALID_SECTION_HEADER, 1),
            ("[1abc]\n", ErrorCode.MODEL_INVALID_SECTION_HEADER, 1),
            ("[matchers]\n\nm r.sub\n", ErrorCode.MODEL_MISSING_SEPARATOR, 3),
            ("[matchers]\n = r.sub\n", ErrorCode.MODEL_EMPTY_KEY, 2),
            ("[matchers]\nm =   \n", ErrorCode.MODEL_EMPTY_VALUE, 2),
            ("[request_definition]\nr = sub, , act\n", ErrorCode.MODEL_EMPTY_FIELD, 2),
            ("[policy_definition]\np = a\n# c\np = b\n", ErrorCode.MODEL_DUPLICATE_KEY, 4),
        ],
    )
    def test_error_codes_and_lines(self, parser, text, code, line_number):
        """Test each violation maps to its code and physical line."""
        result = parser.parse(text)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ModelParseError)
        assert result.error.code == code
        assert result.error.line_number == line_number

    def test_error_details_include_line_text(self, parser):
        """Test the offending line is reported."""
        result = parser.parse("[matchers]\nm r.sub\n")

        assert result.error.details["line"] == "m r.sub"
        assert "line 2" in str(result.error)

    def test_duplicate_key_after_reopened_section(self, parser):
        """Test duplicate detection spans re-opened sections."""
        text = "[policy_definition]\np = a\n[matchers]\nm = x\n[policy_definition]\np = b\n"

        assert parser.parse(text).error.code == ErrorCode.MODEL_DUPLICATE_KEY

    def test_continuation_error_reports_first_line(self, parser):
        """Test a joined line is numbered by its first physical line."""
        result = parser.parse("[matchers]\nm \\\n r.sub\n")

        assert result.error.code == ErrorCode.MODEL_MISSING_SEPARATOR
        assert result.error.line_number == 2


@pytest.mark.unit
class TestModelParserFiles:
    """Test parse_file()."""

    def test_parse_file(self, parser, rbac_model_text, tmp_path):
        """Test a model file is read and parsed."""
        path = tmp_path / "model.conf"
        path.write_text(rbac_model_text, encoding="utf-8")

        assert parser.parse_file(path).value == parser.parse(rbac_model_text).value

    def test_missing_file(self, parser, tmp_path):
        """Test a missing file is a Failure, not an exception."""
        result = parser.parse_file(tmp_path / "missing.conf")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.MODEL_FILE_UNREADABLE
        assert result.error.line_number is None
        assert result.error.details["path"].endswith("missing.conf")

    def test_undecodable_file(self, parser, tmp_path):
        """Test non UTF-8 content is reported as unreadable."""
        path = tmp_path / "model.conf"
        path.write_bytes(b"\xff\xfe\x00[matchers]")

        assert parser.parse_file(path).error.code == ErrorCode.MODEL_FILE_UNREADABLE
