"""
Filter operator definitions and utilities.

Static registry describing each logical operator (arity, value requirements,
applicable column types) plus the type-based operator lists a UI uses to
populate its operator picker.
"""

from typing import Any, Dict, List, Union

from query_compiler.core.models import FilterOperator, OperatorMetadata


OPERATOR_METADATA: Dict[FilterOperator, OperatorMetadata] = {
    FilterOperator.EQUALS: OperatorMetadata(
        label="Equals",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string", "number", "date", "boolean", "any"],
    ),
    FilterOperator.NOT_EQUALS: OperatorMetadata(
        label="Not Equals",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string", "number", "date", "boolean", "any"],
    ),
    FilterOperator.CONTAINS: OperatorMetadata(
        label="Contains",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string"],
    ),
    FilterOperator.NOT_CONTAINS: OperatorMetadata(
        label="Does Not Contain",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string"],
    ),
    FilterOperator.STARTS_WITH: OperatorMetadata(
        label="Starts With",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string"],
    ),
    FilterOperator.ENDS_WITH: OperatorMetadata(
        label="Ends With",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["string"],
    ),
    FilterOperator.GREATER_THAN: OperatorMetadata(
        label="Greater Than",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["number", "date"],
    ),
    FilterOperator.LESS_THAN: OperatorMetadata(
        label="Less Than",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["number", "date"],
    ),
    FilterOperator.GREATER_OR_EQUAL: OperatorMetadata(
        label="Greater or Equal",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["number", "date"],
    ),
    FilterOperator.LESS_OR_EQUAL: OperatorMetadata(
        label="Less or Equal",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["number", "date"],
    ),
    FilterOperator.IS_NULL: OperatorMetadata(
        label="Is NULL",
        needs_value=False,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["any"],
    ),
    FilterOperator.IS_NOT_NULL: OperatorMetadata(
        label="Is Not NULL",
        needs_value=False,
        needs_two_values=False,
        needs_comma_separated=False,
        applicable_types=["any"],
    ),
    FilterOperator.IN: OperatorMetadata(
        label="In List",
        needs_value=True,
        needs_two_values=False,
        needs_comma_separated=True,
        applicable_types=["string", "number"],
    ),
    FilterOperator.BETWEEN: OperatorMetadata(
        label="Between",
        needs_value=True,
        needs_two_values=True,
        needs_comma_separated=False,
        applicable_types=["number", "date"],
    ),
}

STRING_OPERATORS: List[FilterOperator] = [
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.CONTAINS,
    FilterOperator.NOT_CONTAINS,
    FilterOperator.STARTS_WITH,
    FilterOperator.ENDS_WITH,
    FilterOperator.IN,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
]

NUMERIC_OPERATORS: List[FilterOperator] = [
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.GREATER_THAN,
    FilterOperator.LESS_THAN,
    FilterOperator.GREATER_OR_EQUAL,
    FilterOperator.LESS_OR_EQUAL,
    FilterOperator.BETWEEN,
    FilterOperator.IN,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
]

DATE_OPERATORS: List[FilterOperator] = [
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.GREATER_THAN,
    FilterOperator.LESS_THAN,
    FilterOperator.GREATER_OR_EQUAL,
    FilterOperator.LESS_OR_EQUAL,
    FilterOperator.BETWEEN,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
]

BOOLEAN_OPERATORS: List[FilterOperator] = [
    FilterOperator.EQUALS,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
]

ALL_OPERATORS: List[FilterOperator] = list(FilterOperator)

OPERATOR_LABELS: Dict[FilterOperator, str] = {
    op: meta.label for op, meta in OPERATOR_METADATA.items()
}

# Operators whose value may not be blank once trimmed
TEXT_VALUE_OPERATORS = frozenset(
    {
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
        FilterOperator.IN,
    }
)

_NUMERIC_TYPE_MARKERS = ("int", "numeric", "decimal", "real", "double", "float", "money")
_NUMERIC_TYPE_NAMES = {"number", "bigint", "smallint", "tinyint"}
_DATE_TYPE_MARKERS = ("date", "time")
_BOOLEAN_TYPE_NAMES = {"boolean", "bool", "bit"}


def get_operators_for_type(data_type: str) -> List[FilterOperator]:
    """
    Get the operators that make sense for a column data type.

    Args:
        data_type: Database column type (e.g. "integer", "varchar", "timestamp")

    Returns:
        List of applicable operators; unknown types get the string operators
    """
    normalized = (data_type or "").lower()

    if any(marker in normalized for marker in _NUMERIC_TYPE_MARKERS) or normalized in _NUMERIC_TYPE_NAMES:
        return NUMERIC_OPERATORS

    if any(marker in normalized for marker in _DATE_TYPE_MARKERS):
        return DATE_OPERATORS

    if normalized in _BOOLEAN_TYPE_NAMES:
        return BOOLEAN_OPERATORS

    return STRING_OPERATORS


def _as_operator(operator: Union[FilterOperator, str]) -> FilterOperator:
    return operator if isinstance(operator, FilterOperator) else FilterOperator(operator)


def get_operator_metadata(operator: Union[FilterOperator, str]) -> OperatorMetadata:
    """
    Get metadata for an operator.

    Raises:
        ValueError: If the operator is not a known FilterOperator
    """
    return OPERATOR_METADATA[_as_operator(operator)]


def operator_needs_value(operator: Union[FilterOperator, str]) -> bool:
    return get_operator_metadata(operator).needs_value


def operator_needs_two_values(operator: Union[FilterOperator, str]) -> bool:
    return get_operator_metadata(operator).needs_two_values


def operator_needs_comma_separated(operator: Union[FilterOperator, str]) -> bool:
    return get_operator_metadata(operator).needs_comma_separated


def is_operator_valid_for_type(operator: Union[FilterOperator, str], data_type: str) -> bool:
    try:
        op = _as_operator(operator)
    except ValueError:
        return False
    return op in get_operators_for_type(data_type)


def parse_in_values(value: Any) -> List[Any]:
    """
    Parse the operand of an IN condition into an ordered list.

    Sequences keep their element types (strings are trimmed); delimited
    strings are split on commas. Blank and None entries are dropped,
    duplicates are kept.
    """
    if isinstance(value, (list, tuple)):
        items = [v.strip() if isinstance(v, str) else v for v in value]
        return [v for v in items if v is not None and v != ""]

    if value is None:
        return []

    return [part.strip() for part in str(value).split(",") if part.strip() != ""]
