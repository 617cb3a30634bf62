"""Unit tests for PolicyStore and rule validation.

Tests cover:
- validate_rule / resolve_arity against a model
- Append, exact remove (first match), filtered remove
- Queries, snapshots, ordering and duplicates
"""

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities import PolicyStore, resolve_arity, validate_rule
from src.domain.value_objects import PolicyFilter


@pytest.mark.unit
class TestValidateRule:
    """Test rule validation against the RBAC model."""

    def test_valid_rule(self, rbac_model):
        """Test a rule of the right arity passes."""
        assert validate_rule(rbac_model, "p", "p", ("alice", "data1", "read")) == Success(value=3)

    def test_arity_mismatch(self, rbac_model):
        """Test a short rule is rejected with expected/actual details."""
        result = validate_rule(rbac_model, "g", "g", ("alice",))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_ARITY_MISMATCH
        assert result.error.details["expected"] == "2"
        assert result.error.details["actual"] == "1"

    def test_unknown_ptype(self, rbac_model):
        """Test a ptype missing from the model is rejected."""
        result = validate_rule(rbac_model, "p", "p2", ("alice", "data1", "read"))

        assert result.error.code == ErrorCode.POLICY_TYPE_UNKNOWN

    def test_unknown_section(self, rbac_model):
        """Test section letters other than p and g are rejected."""
        result = resolve_arity(rbac_model, "r", "r")

        assert result.error.code == ErrorCode.POLICY_SECTION_INVALID
        assert result.error.field == "sec"


@pytest.mark.unit
class TestPolicyStoreMutations:
    """Test adding and removing rules."""

    def test_add_keeps_order_and_duplicates(self):
        """Test rules are appended, duplicates allowed."""
        store = PolicyStore()
        store.add_rule("p", "p", ["alice", "data1", "read"])
        store.add_rule("p", "p", ["bob", "data2", "write"])
        store.add_rule("p", "p", ["alice", "data1", "read"])

        assert store.rules("p", "p") == [
            ("alice", "data1", "read"),
            ("bob", "data2", "write"),
            ("alice", "data1", "read"),
        ]
        assert len(store) == 3

    def test_remove_rule_removes_first_match_only(self):
        """Test exact remove drops one copy."""
        store = PolicyStore()
        store.add_rules("g", "g", [("alice", "admin"), ("alice", "admin")])

        assert store.remove_rule("g", "g", ["alice", "admin"]) is True
        assert store.rules("g", "g") == [("alice", "admin")]

    def test_remove_missing_rule_returns_false(self):
        """Test removing an absent rule is a no-op."""
        store = PolicyStore()
        store.add_rule("p", "p", ("alice", "data1", "read"))

        assert store.remove_rule("p", "p", ("alice", "data1", "write")) is False
        assert store.remove_rule("g", "g", ("alice", "admin")) is False
        assert len(store) == 1

    def test_remove_filtered(self):
        """Test filtered remove returns removed rules and keeps the rest in order."""
        store = PolicyStore()
        store.add_rules(
            "p",
            "p",
            [
                ("alice", "data1", "read"),
                ("bob", "data2", "write"),
                ("alice", "data2", "write"),
            ],
        )

        removed = store.remove_filtered("p", "p", PolicyFilter.of(0, ["alice"]))

        assert removed == [("alice", "data1", "read"), ("alice", "data2", "write")]
        assert store.rules("p", "p") == [("bob", "data2", "write")]

    def test_remove_filtered_on_empty_group(self):
        """Test filtered remove on a missing group removes nothing."""
        assert PolicyStore().remove_filtered("p", "p", PolicyFilter.of(0, ["x"])) == []

    def test_clear(self):
        """Test clear drops every group."""
        store = PolicyStore.from_groups({("p", "p"): [("a", "b", "c")], ("g", "g"): [("a", "r")]})

        store.clear()

        assert len(store) == 0
        assert store.keys() == ()


@pytest.mark.unit
class TestPolicyStoreQueries:
    """Test read access."""

    def test_groups_are_independent(self):
        """Test rules are scoped by (sec, ptype)."""
        store = PolicyStore()
        store.add_rule("p", "p", ("alice", "data1", "read"))
        store.add_rule("p", "p2", ("alice", "read"))

        assert store.has_rule("p", "p", ("alice", "data1", "read"))
        assert not store.has_rule("p", "p2", ("alice", "data1", "read"))
        assert store.keys() == (("p", "p"), ("p", "p2"))

    def test_filtered_rules_do_not_mutate(self):
        """Test filtered query leaves the store unchanged."""
        store = PolicyStore.from_groups(
            {("p", "p"): [("alice", "data1", "read"), ("bob", "data1", "read")]}
        )

        assert store.filtered_rules("p", "p", PolicyFilter.of(1, ["data1", "read"])) == [
            ("alice", "data1", "read"),
            ("bob", "data1", "read"),
        ]
        assert len(store) == 2

    def test_rules_returns_copy(self):
        """Test the returned list is detached from the store."""
        store = PolicyStore.from_groups({("p", "p"): [("a", "b", "c")]})

        store.rules("p", "p").clear()

        assert len(store) == 1

    def test_snapshot_is_read_only_and_detached(self):
        """Test snapshot cannot mutate the store and ignores later changes."""
        store = PolicyStore.from_groups({("p", "p"): [("a", "b", "c")]})

        snapshot = store.snapshot()
        store.add_rule("p", "p", ("d", "e", "f"))

        assert snapshot[("p", "p")] == (("a", "b", "c"),)
        with pytest.raises(TypeError):
            snapshot[("g", "g")] = ()  # type: ignore[index]

    def test_from_groups_copies_input(self):
        """Test the store does not alias the source lists."""
        source = {("p", "p"): [("a", "b", "c")]}
        store = PolicyStore.from_groups(source)

        source[("p", "p")].append(("x", "y", "z"))

        assert len(store) == 1
