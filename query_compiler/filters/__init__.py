"""Filter operator metadata, validation and normalisation."""

from query_compiler.filters.operators import (
    ALL_OPERATORS,
    BOOLEAN_OPERATORS,
    DATE_OPERATORS,
    NUMERIC_OPERATORS,
    OPERATOR_LABELS,
    OPERATOR_METADATA,
    STRING_OPERATORS,
    get_operator_metadata,
    get_operators_for_type,
    is_operator_valid_for_type,
    operator_needs_comma_separated,
    operator_needs_two_values,
    operator_needs_value,
    parse_in_values,
)
from query_compiler.filters.validation import (
    are_filters_valid,
    create_filter,
    get_filter_errors,
    is_filter_empty,
    normalize_filter,
    remove_empty_filters,
    validate_filter,
    validate_filters,
)

__all__ = [
    "ALL_OPERATORS",
    "BOOLEAN_OPERATORS",
    "DATE_OPERATORS",
    "NUMERIC_OPERATORS",
    "OPERATOR_LABELS",
    "OPERATOR_METADATA",
    "STRING_OPERATORS",
    "get_operator_metadata",
    "get_operators_for_type",
    "is_operator_valid_for_type",
    "operator_needs_comma_separated",
    "operator_needs_two_values",
    "operator_needs_value",
    "parse_in_values",
    "are_filters_valid",
    "create_filter",
    "get_filter_errors",
    "is_filter_empty",
    "normalize_filter",
    "remove_empty_filters",
    "validate_filter",
    "validate_filters",
]
