"""Authorization dependency factories.

Builds a PolicyManager ready for use: model parsed, adapter bound,
auto-save resolved, policy loaded.

Model source, first match wins:
    1. ``model_text`` argument
    2. ``settings.model_path`` (MODEL_PATH)
    3. infrastructure/authorization/model.conf (bundled RBAC model)
"""

from pathlib import Path
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.infrastructure import get_logger
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success

if TYPE_CHECKING:
    from src.application.services.policy_manager import PolicyManager
    from src.domain.protocols.policy_adapter_protocol import PolicyAdapterProtocol


# Bundled model path (relative to src/core/container/)
DEFAULT_MODEL_PATH = (
    Path(__file__).parent / ".." / ".." / "infrastructure" / "authorization" / "model.conf"
).resolve()


# ============================================================================
# Authorization (policy lifecycle)
# ============================================================================


def build_policy_manager(
    adapter: "PolicyAdapterProtocol",
    *,
    model_text: str | None = None,
) -> Result["PolicyManager", DomainError]:
    """Create a PolicyManager bound to ``adapter`` with its policy loaded.

    Auto-save follows POLICY_AUTO_SAVE when set, otherwise the adapter's
    declared capabilities.

    Args:
        adapter: Persistence backend implementing PolicyAdapterProtocol.
        model_text: Model definition; defaults to MODEL_PATH or the bundled
            RBAC model.

    Returns:
        Success(PolicyManager): State READY.
        Failure(ModelParseError | AdapterError | ValidationError): Model
            could not be parsed or the policy could not be loaded.

    Usage:
        match build_policy_manager(InMemoryPolicyAdapter()):
            case Success(value=manager):
                manager.add_policy("p", "p", ["alice", "data1", "read"])
            case Failure(error=error):
                logger.error("policy_init_failed", error_code=error.code.value)
    """
    from src.application.services.policy_manager import PolicyManager
    from src.infrastructure.authorization.model_parser import ModelParser

    logger = get_logger()
    parser = ModelParser()

    if model_text is not None:
        parsed = parser.parse(model_text)
        source = "text"
    else:
        model_path = settings.model_path or DEFAULT_MODEL_PATH
        parsed = parser.parse_file(model_path)
        source = str(model_path)

    match parsed:
        case Failure(error=error):
            logger.error(
                "policy_model_parse_failed",
                source=source,
                error_code=error.code.value,
                error_message=error.message,
            )
            return Failure(error=error)
        case Success(value=model):
            pass

    manager = PolicyManager(logger=logger, parser=parser)
    manager.bind(model, adapter, auto_save=settings.policy_auto_save)

    match manager.load_policy():
        case Failure(error=error):
            return Failure(error=error)
        case _:
            return Success(value=manager)
