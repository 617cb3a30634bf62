"""Optional adapter capabilities.

Loading and saving the full policy are mandatory for every adapter. The
incremental operations below are optional; an adapter lists the ones it
implements in its ``capabilities`` attribute.
"""

from enum import Enum


class AdapterCapability(str, Enum):
    """Incremental operations an adapter may implement."""

    ADD_POLICY = "add_policy"
    REMOVE_POLICY = "remove_policy"
    REMOVE_FILTERED_POLICY = "remove_filtered_policy"


ALL_CAPABILITIES: frozenset[AdapterCapability] = frozenset(AdapterCapability)
