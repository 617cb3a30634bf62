"""Base policy adapter with the optional operations stubbed out.

Backends that only support full load/save inherit from this class and
implement load_policy() and save_policy(). Every incremental operation
answers Unsupported(), and ``capabilities`` is empty, so the policy manager
keeps mutations in memory only.

Pattern: Composition over inheritance - adapters can inherit or implement
PolicyAdapterProtocol directly.
"""

from collections.abc import Sequence

from src.core.result import OptionalResult, Result, Unsupported
from src.domain.entities.model import Model
from src.domain.enums import AdapterCapability
from src.domain.errors import AdapterError
from src.domain.types import RuleGroups


class BasePolicyAdapter:
    """Base adapter: mandatory operations abstract, optional ones Unsupported.

    Subclasses must implement:
        - load_policy(model) -> Result[RuleGroups, AdapterError]
        - save_policy(model, groups) -> Result[None, AdapterError]

    Subclasses implementing an incremental operation override it AND add
    the matching AdapterCapability to ``capabilities``.
    """

    capabilities: frozenset[AdapterCapability] = frozenset()

    def load_policy(self, model: Model) -> Result[RuleGroups, AdapterError]:
        """Load every persisted rule (must be implemented by subclass)."""
        raise NotImplementedError("Subclass must implement load_policy()")

    def save_policy(self, model: Model, groups: RuleGroups) -> Result[None, AdapterError]:
        """Replace every persisted rule (must be implemented by subclass)."""
        raise NotImplementedError("Subclass must implement save_policy()")

    def add_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Not supported by default."""
        return Unsupported()

    def remove_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Not supported by default."""
        return Unsupported()

    def remove_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        field_values: Sequence[str],
    ) -> OptionalResult[None, AdapterError]:
        """Not supported by default."""
        return Unsupported()
