"""Pytest configuration and shared fixtures.

Provides:
1. Test markers (unit, integration)
2. A mock logger implementing LoggerProtocol
3. The canonical RBAC model text and parsed Model
4. Adapter doubles for the adapter contract:
   - RecordingAdapter: supports every operation and records each call
   - UnsupportedAdapter: full load/save only, every optional call Unsupported
   - FailingWriteAdapter: every optional call fails with AdapterError
"""

from collections.abc import Sequence
from unittest.mock import Mock

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, OptionalResult, Result, Success
from src.domain.entities import Model
from src.domain.enums import ALL_CAPABILITIES
from src.domain.errors import AdapterError
from src.domain.types import RuleGroups
from src.infrastructure.authorization.base_adapter import BasePolicyAdapter
from src.infrastructure.authorization.model_parser import ModelParser


RBAC_MODEL_TEXT = """\
[request_definition]
r = sub, obj, act

[policy_definition]
p = sub, obj, act

[role_definition]
g = _, _

[policy_effect]
e = some(where (p.eft == allow))

[matchers]
m = g(r.sub, p.sub) && r.obj == p.obj && r.act == p.act
"""


# ============================================================================
# Adapter doubles
# ============================================================================


class UnsupportedAdapter(BasePolicyAdapter):
    """Full load/save only; optional operations inherit Unsupported()."""

    def __init__(self, groups: RuleGroups | None = None) -> None:
        self.groups: dict = dict(groups or {})
        self.calls: list[tuple] = []

    def load_policy(self, model: Model) -> Result[RuleGroups, AdapterError]:
        self.calls.append(("load_policy",))
        return Success(value=dict(self.groups))

    def save_policy(self, model: Model, groups: RuleGroups) -> Result[None, AdapterError]:
        self.calls.append(("save_policy", dict(groups)))
        self.groups = dict(groups)
        return Success(value=None)


class RecordingAdapter(UnsupportedAdapter):
    """Declares every capability and records each optional call."""

    capabilities = ALL_CAPABILITIES

    def add_policy(
        self, sec: str, ptype: str, rule: Sequence[str]
    ) -> OptionalResult[None, AdapterError]:
        self.calls.append(("add_policy", sec, ptype, tuple(rule)))
        return Success(value=None)

    def remove_policy(
        self, sec: str, ptype: str, rule: Sequence[str]
    ) -> OptionalResult[None, AdapterError]:
        self.calls.append(("remove_policy", sec, ptype, tuple(rule)))
        return Success(value=None)

    def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, field_values: Sequence[str]
    ) -> OptionalResult[None, AdapterError]:
        self.calls.append(
            ("remove_filtered_policy", sec, ptype, field_index, tuple(field_values))
        )
        return Success(value=None)

    @property
    def optional_calls(self) -> list[tuple]:
        """Recorded calls except load/save."""
        return [call for call in self.calls if call[0] not in {"load_policy", "save_policy"}]


class FailingWriteAdapter(RecordingAdapter):
    """Records each optional call, then fails it with AdapterError."""

    def _fail(self, operation: str) -> Failure[AdapterError]:
        return Failure(
            error=AdapterError(
                code=ErrorCode.ADAPTER_WRITE_FAILED,
                message="backend unavailable",
                operation=operation,
            )
        )

    def add_policy(self, sec, ptype, rule):
        super().add_policy(sec, ptype, rule)
        return self._fail("add_policy")

    def remove_policy(self, sec, ptype, rule):
        super().remove_policy(sec, ptype, rule)
        return self._fail("remove_policy")

    def remove_filtered_policy(self, sec, ptype, field_index, field_values):
        super().remove_filtered_policy(sec, ptype, field_index, field_values)
        return self._fail("remove_filtered_policy")


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_logger():
    """Mock logger implementing LoggerProtocol."""
    logger = Mock()
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def rbac_model_text() -> str:
    """Canonical RBAC model text (5 sections)."""
    return RBAC_MODEL_TEXT


@pytest.fixture
def rbac_model() -> Model:
    """Parsed canonical RBAC model."""
    return ModelParser().parse(RBAC_MODEL_TEXT).value


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    """Adapter supporting every operation, recording calls."""
    return RecordingAdapter()


@pytest.fixture
def unsupported_adapter() -> UnsupportedAdapter:
    """Adapter answering Unsupported() to every optional operation."""
    return UnsupportedAdapter()


@pytest.fixture
def failing_adapter() -> FailingWriteAdapter:
    """Adapter failing every optional operation."""
    return FailingWriteAdapter()


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests across layers with real adapters"
    )
