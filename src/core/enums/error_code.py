"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (VALIDATION_*)
- Model text errors (MODEL_*)
- Policy rule errors (POLICY_*)
- Adapter errors (ADAPTER_*)
- Lifecycle errors (POLICY_MANAGER_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"

    # Model text errors
    MODEL_LINE_OUTSIDE_SECTION = "model_line_outside_section"
    MODEL_INVALID_SECTION_HEADER = "model_invalid_section_header"
    MODEL_DUPLICATE_KEY = "model_duplicate_key"
    MODEL_MISSING_SEPARATOR = "model_missing_separator"
    MODEL_EMPTY_KEY = "model_empty_key"
    MODEL_EMPTY_VALUE = "model_empty_value"
    MODEL_EMPTY_FIELD = "model_empty_field"
    MODEL_FILE_UNREADABLE = "model_file_unreadable"

    # Policy rule errors
    POLICY_SECTION_INVALID = "policy_section_invalid"
    POLICY_TYPE_UNKNOWN = "policy_type_unknown"
    POLICY_ARITY_MISMATCH = "policy_arity_mismatch"
    POLICY_FILTER_INVALID = "policy_filter_invalid"
    POLICY_LINE_INVALID = "policy_line_invalid"

    # Adapter errors
    ADAPTER_LOAD_FAILED = "adapter_load_failed"
    ADAPTER_SAVE_FAILED = "adapter_save_failed"
    ADAPTER_WRITE_FAILED = "adapter_write_failed"

    # Lifecycle errors
    POLICY_MANAGER_NOT_BOUND = "policy_manager_not_bound"
