"""Policy lifecycle manager.

Coordinates a Model, the in-memory PolicyStore and a policy adapter:
full load/save of the rule set and incremental mutations mirrored to the
adapter when auto-save is on.

Lifecycle:
    UNBOUND --bind()--> MODEL_LOADED --load_policy()--> READY

Consistency rules:
    - load_policy() swaps in a fresh store only after the adapter load and
      rule validation both succeed; otherwise memory is untouched.
    - save_policy() never modifies memory.
    - add/remove validate first, then mutate memory, then (auto-save only)
      call the adapter. Unsupported() is swallowed. An AdapterError is
      returned AFTER the memory mutation, which is NOT rolled back: the
      caller must treat memory and storage as possibly diverged and
      reconcile with load_policy() or save_policy().

Following hexagonal architecture:
- The manager depends on PolicyAdapterProtocol, never on a backend
- Adapters are injected (bind or constructor), never discovered

Usage:
    manager = PolicyManager(logger=get_logger())
    manager.bind(model, InMemoryPolicyAdapter())
    manager.load_policy()

    match manager.add_policy("p", "p", ["alice", "data1", "read"]):
        case Success():
            ...
        case Failure(error=AdapterError() as error):
            # memory has the rule, storage may not
            ...
"""

from collections.abc import Sequence

from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, OptionalResult, Result, Success, Unsupported
from src.domain.entities import Model, PolicyStore, resolve_arity, validate_rule
from src.domain.enums import LifecycleState
from src.domain.errors import AdapterError, LifecycleError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.policy_adapter_protocol import PolicyAdapterProtocol
from src.domain.value_objects import PolicyFilter
from src.infrastructure.authorization.model_parser import ModelParser


class PolicyManager:
    """Owner of the model, the rule set and the adapter binding.

    Thread Safety:
        - NOT thread-safe. Concurrent mutating calls race on the rule set;
          callers needing concurrency must serialize access themselves.

    Blocking:
        - Every adapter call is synchronous and made at most once per
          operation (no retries, no timeouts at this layer).

    Attributes:
        _model: Bound model, None while UNBOUND.
        _adapter: Bound adapter, None while UNBOUND.
        _store: Current rule set.
        _auto_save: Mirror single-rule mutations to the adapter.
        _state: Lifecycle state.
        _logger: Structured logger.
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        model: Model | None = None,
        adapter: PolicyAdapterProtocol | None = None,
        auto_save: bool | None = None,
        parser: ModelParser | None = None,
    ) -> None:
        """Initialize manager, optionally binding right away.

        Args:
            logger: Structured logger.
            model: Model to bind (requires adapter).
            adapter: Adapter to bind (requires model).
            auto_save: Explicit auto-save flag; None derives it from the
                adapter's declared capabilities.
            parser: Parser used by load_model_from_text().

        Raises:
            ValueError: If only one of model/adapter is given.
        """
        if (model is None) != (adapter is None):
            raise ValueError("model and adapter must be provided together")

        self._logger = logger
        self._parser = parser or ModelParser()
        self._model: Model | None = None
        self._adapter: PolicyAdapterProtocol | None = None
        self._store = PolicyStore()
        self._auto_save = False
        self._state = LifecycleState.UNBOUND

        if model is not None and adapter is not None:
            self.bind(model, adapter, auto_save=auto_save)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        """Current lifecycle state."""
        return self._state

    @property
    def model(self) -> Model | None:
        """Bound model."""
        return self._model

    @property
    def adapter(self) -> PolicyAdapterProtocol | None:
        """Bound adapter."""
        return self._adapter

    @property
    def auto_save(self) -> bool:
        """Whether single-rule mutations are mirrored to the adapter."""
        return self._auto_save

    @property
    def rule_count(self) -> int:
        """Number of rules currently in memory."""
        return len(self._store)

    def enable_auto_save(self, enabled: bool) -> None:
        """Toggle auto-save for subsequent mutations.

        No retroactive effect: rules that already diverged stay diverged.
        """
        self._auto_save = enabled
        self._logger.info("policy_auto_save_toggled", auto_save=enabled)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind(
        self,
        model: Model,
        adapter: PolicyAdapterProtocol,
        *,
        auto_save: bool | None = None,
    ) -> None:
        """Bind a model and an adapter; rules start empty.

        Rebinding is allowed from any state and discards the current rules.

        Args:
            model: Parsed or programmatically built model.
            adapter: Persistence backend.
            auto_save: Explicit flag; None enables auto-save only when the
                adapter declares at least one optional capability.
        """
        self._model = model
        self._adapter = adapter
        self._store = PolicyStore()
        self._auto_save = bool(adapter.capabilities) if auto_save is None else auto_save
        self._state = LifecycleState.MODEL_LOADED

        self._logger.info(
            "policy_manager_bound",
            adapter=type(adapter).__name__,
            capabilities=sorted(capability.value for capability in adapter.capabilities),
            auto_save=self._auto_save,
            sections=list(model.section_names()),
        )

    def load_model(self, model: Model) -> Result[None, LifecycleError]:
        """Replace the bound model, leaving loaded rules untouched.

        Rules loaded under the previous model may no longer match the new
        arities until load_policy() is run again.
        """
        if self._adapter is None:
            return self._not_bound("load_model")

        self._model = model
        self._logger.info(
            "policy_model_replaced",
            sections=list(model.section_names()),
            rule_count=len(self._store),
        )
        return Success(value=None)

    def load_model_from_text(self, text: str) -> Result[Model, DomainError]:
        """Parse model text and replace the bound model with it.

        A parse failure leaves the current model in place.
        """
        if self._adapter is None:
            return self._not_bound("load_model_from_text")

        match self._parser.parse(text):
            case Failure(error=error):
                self._logger.error(
                    "policy_model_parse_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                    line_number=error.line_number,
                )
                return Failure(error=error)
            case Success(value=model):
                self.load_model(model)
                return Success(value=model)

    def load_policy(self) -> Result[int, DomainError]:
        """Replace the in-memory rule set with the adapter's.

        Returns:
            Success(rule_count): Store replaced, state READY.
            Failure(AdapterError | ValidationError | LifecycleError): Store
                and state unchanged.
        """
        if self._model is None or self._adapter is None:
            return self._not_bound("load_policy")

        # 1. Load from backend
        match self._adapter.load_policy(self._model):
            case Failure(error=error):
                self._logger.error(
                    "policy_load_failed",
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)
            case Success(value=groups):
                pass

        # 2. Validate every rule before touching memory
        for (sec, ptype), rules in groups.items():
            for rule in rules:
                match validate_rule(self._model, sec, ptype, rule):
                    case Failure(error=error):
                        self._logger.error(
                            "policy_load_rejected",
                            sec=sec,
                            ptype=ptype,
                            error_code=error.code.value,
                            error_message=error.message,
                        )
                        return Failure(error=error)

        # 3. Swap in the fresh store
        self._store = PolicyStore.from_groups(groups)
        self._state = LifecycleState.READY

        self._logger.info(
            "policy_loaded",
            rule_count=len(self._store),
            groups=[f"{sec}.{ptype}" for sec, ptype in self._store.keys()],
        )
        return Success(value=len(self._store))

    def save_policy(self) -> Result[None, DomainError]:
        """Overwrite the adapter's rules with the in-memory rule set.

        Memory is never modified, whatever the outcome. The backend write
        is not transactional.
        """
        if self._model is None or self._adapter is None:
            return self._not_bound("save_policy")

        rule_count = len(self._store)
        match self._adapter.save_policy(self._model, self._store.snapshot()):
            case Failure(error=error):
                self._logger.error(
                    "policy_save_failed",
                    rule_count=rule_count,
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)
            case _:
                self._logger.info("policy_saved", rule_count=rule_count)
                return Success(value=None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> Result[bool, DomainError]:
        """Append a rule, mirroring it to the adapter when auto-save is on.

        Args:
            sec: Section letter ("p" or "g").
            ptype: Rule type.
            rule: Rule fields; length must equal the ptype's arity.

        Returns:
            Success(True): Rule added (and persisted or Unsupported).
            Failure(ValidationError): Rejected, nothing changed.
            Failure(AdapterError): Rule IS in memory, adapter write failed.
        """
        if self._model is None or self._adapter is None:
            return self._not_bound("add_policy")

        fields = tuple(rule)
        match validate_rule(self._model, sec, ptype, fields):
            case Failure(error=error):
                return Failure(error=error)

        self._store.add_rule(sec, ptype, fields)
        self._logger.debug("policy_added", sec=sec, ptype=ptype, rule=list(fields))

        if self._auto_save:
            outcome = self._adapter.add_policy(sec, ptype, fields)
            failure = self._mirror("add_policy", sec, ptype, outcome)
            if failure is not None:
                return failure

        return Success(value=True)

    def remove_policy(
        self,
        sec: str,
        ptype: str,
        rule: Sequence[str],
    ) -> Result[bool, DomainError]:
        """Remove the first exact match, mirroring to the adapter.

        Returns:
            Success(True): Rule removed (and persisted or Unsupported).
            Success(False): No such rule; no-op, adapter not called.
            Failure(ValidationError): Rejected, nothing changed.
            Failure(AdapterError): Rule IS gone from memory, adapter
                delete failed.
        """
        if self._model is None or self._adapter is None:
            return self._not_bound("remove_policy")

        fields = tuple(rule)
        match validate_rule(self._model, sec, ptype, fields):
            case Failure(error=error):
                return Failure(error=error)

        if not self._store.remove_rule(sec, ptype, fields):
            return Success(value=False)
        self._logger.debug("policy_removed", sec=sec, ptype=ptype, rule=list(fields))

        if self._auto_save:
            outcome = self._adapter.remove_policy(sec, ptype, fields)
            failure = self._mirror("remove_policy", sec, ptype, outcome)
            if failure is not None:
                return failure

        return Success(value=True)

    def remove_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        field_values: Sequence[str],
    ) -> Result[int, DomainError]:
        """Remove every rule matching a positional filter.

        A rule matches when each non-empty value equals the rule field at
        ``field_index + offset``; "" is a wildcard.

        Returns:
            Success(count): Number of rules removed from memory. The adapter
                is only called when count > 0.
            Failure(ValidationError): Unknown group or filter outside the
                ptype's fields, nothing changed.
            Failure(AdapterError): Rules ARE gone from memory, adapter
                delete failed.
        """
        if self._model is None or self._adapter is None:
            return self._not_bound("remove_filtered_policy")

        match resolve_arity(self._model, sec, ptype):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=arity):
                pass

        policy_filter = PolicyFilter.of(field_index, field_values)
        if not policy_filter.fits(arity):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.POLICY_FILTER_INVALID,
                    message=(
                        f"Filter at index {field_index} with {len(policy_filter.field_values)} "
                        f"values does not fit {ptype} ({arity} fields)"
                    ),
                    field="field_values",
                    details={"sec": sec, "ptype": ptype, "field_index": str(field_index)},
                )
            )

        removed = self._store.remove_filtered(sec, ptype, policy_filter)
        if not removed:
            return Success(value=0)
        self._logger.debug(
            "policy_filtered_removed",
            sec=sec,
            ptype=ptype,
            field_index=field_index,
            removed=len(removed),
        )

        if self._auto_save:
            outcome = self._adapter.remove_filtered_policy(
                sec, ptype, field_index, policy_filter.field_values
            )
            failure = self._mirror("remove_filtered_policy", sec, ptype, outcome)
            if failure is not None:
                return failure

        return Success(value=len(removed))

    def clear_policy(self) -> None:
        """Drop every in-memory rule; the adapter is not touched."""
        self._store.clear()
        self._logger.info("policy_cleared")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_policy(self, ptype: str = "p") -> list[list[str]]:
        """Rules of a policy (``p``) group."""
        return [list(rule) for rule in self._store.rules("p", ptype)]

    def get_grouping_policy(self, ptype: str = "g") -> list[list[str]]:
        """Rules of a role (``g``) group."""
        return [list(rule) for rule in self._store.rules("g", ptype)]

    def get_filtered_policy(
        self,
        sec: str,
        ptype: str,
        field_index: int,
        field_values: Sequence[str],
    ) -> list[list[str]]:
        """Rules of a group matching a positional filter.

        An empty or negative-index filter matches nothing.
        """
        if field_index < 0 or not field_values:
            return []
        policy_filter = PolicyFilter.of(field_index, field_values)
        return [list(rule) for rule in self._store.filtered_rules(sec, ptype, policy_filter)]

    def has_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> bool:
        """Check whether an exact rule is in memory."""
        return self._store.has_rule(sec, ptype, rule)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _mirror(
        self,
        operation: str,
        sec: str,
        ptype: str,
        outcome: OptionalResult[None, AdapterError],
    ) -> Failure[AdapterError] | None:
        """Interpret an incremental adapter outcome.

        Returns:
            None when persisted or Unsupported, the Failure otherwise.
        """
        match outcome:
            case Unsupported():
                self._logger.debug(
                    "policy_adapter_unsupported",
                    operation=operation,
                    sec=sec,
                    ptype=ptype,
                )
                return None
            case Failure(error=error):
                self._logger.warning(
                    "policy_adapter_write_failed",
                    operation=operation,
                    sec=sec,
                    ptype=ptype,
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Failure(error=error)
            case _:
                return None

    def _not_bound(self, operation: str) -> Failure[LifecycleError]:
        self._logger.warning("policy_manager_not_bound", operation=operation)
        return Failure(
            error=LifecycleError(
                code=ErrorCode.POLICY_MANAGER_NOT_BOUND,
                message=f"{operation}() requires bind() first",
                state=self._state.value,
            )
        )
