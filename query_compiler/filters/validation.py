"""
Filter validation and normalisation.

Validation accumulates every problem with a condition instead of stopping at
the first one, so a filter form can highlight all of them at once. Nothing
here raises for bad input: errors are returned as messages.
"""

import time
import uuid
from typing import Any, List, Sequence, Union

from query_compiler.core.models import (
    ConditionInput,
    FilterCondition,
    FilterOperator,
    FilterValidationResult,
)
from query_compiler.filters.operators import (
    TEXT_VALUE_OPERATORS,
    operator_needs_two_values,
    operator_needs_value,
)

# Operators whose value requirement is checked by a dedicated rule, or that
# take no value at all.
_VALUE_RULE_EXEMPT = frozenset(
    {FilterOperator.BETWEEN, FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL}
)

_NULL_CHECK_OPERATORS = frozenset({FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL})


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() == ""


def validate_filter(condition: ConditionInput) -> FilterValidationResult:
    """
    Validate a single filter condition.

    Args:
        condition: Condition model or mapping to validate

    Returns:
        FilterValidationResult with every error found; the normalised
        condition is attached only when the condition is valid.

    Example:
        >>> validate_filter({"id": "1", "columnName": "age",
        ...                  "operator": "greater_than", "value": 18}).valid
        True
    """
    condition = FilterCondition.coerce(condition)
    errors: List[str] = []

    if not condition.id:
        errors.append("Filter must have an id")

    if condition.column_name.strip() == "":
        errors.append("Column name is required")

    operator = condition.filter_operator
    if not condition.operator:
        errors.append("Operator is required")
    elif operator is None:
        errors.append(f"Invalid operator: {condition.operator}")

    if operator is not None:
        if operator_needs_value(operator) and operator not in _VALUE_RULE_EXEMPT:
            if condition.value is None:
                errors.append(f"Operator '{operator.value}' requires a value")
            elif operator in TEXT_VALUE_OPERATORS and _is_blank(condition.value):
                errors.append(f"Value cannot be empty for operator '{operator.value}'")

        if operator_needs_two_values(operator) and condition.value2 is None:
            errors.append(f"Operator '{operator.value}' requires a second value")

        if operator is FilterOperator.IN and _in_list_is_empty(condition.value):
            errors.append("IN operator requires at least one value")

    if errors:
        return FilterValidationResult(valid=False, errors=errors)

    return FilterValidationResult(
        valid=True,
        errors=[],
        normalized_condition=normalize_filter(condition),
    )


def _in_list_is_empty(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if value is None:
        return True
    return not any(part.strip() for part in str(value).split(","))


def validate_filters(conditions: Sequence[ConditionInput]) -> List[FilterValidationResult]:
    return [validate_filter(c) for c in conditions]


def are_filters_valid(conditions: Sequence[ConditionInput]) -> bool:
    return all(validate_filter(c).valid for c in conditions)


def get_filter_errors(conditions: Sequence[ConditionInput]) -> List[str]:
    """
    Collect validation errors from a list of conditions.

    Each message is prefixed with the column name, or ``Filter <n>`` when the
    column is missing.
    """
    errors: List[str] = []
    for index, raw in enumerate(conditions):
        condition = FilterCondition.coerce(raw)
        result = validate_filter(condition)
        if result.valid:
            continue
        context = condition.column_name or f"Filter {index + 1}"
        errors.extend(f"{context}: {err}" for err in result.errors)
    return errors


def normalize_filter(condition: ConditionInput) -> FilterCondition:
    """
    Normalise a filter condition.

    - Trims the column name and string values
    - Splits a comma-delimited IN value into a list of trimmed, non-empty strings
    - Trims string elements of a list IN value, leaving other elements untouched

    Normalising an already normalised condition returns an equal condition.
    """
    condition = FilterCondition.coerce(condition)

    value = condition.value
    if isinstance(value, str):
        value = value.strip()

    value2 = condition.value2
    if isinstance(value2, str):
        value2 = value2.strip()

    if condition.operator == FilterOperator.IN.value:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip() != ""]
        elif isinstance(value, (list, tuple)):
            value = [v.strip() if isinstance(v, str) else v for v in value]

    return condition.model_copy(
        update={
            "column_name": condition.column_name.strip(),
            "value": value,
            "value2": value2,
        }
    )


def create_filter(
    column_name: str,
    operator: Union[FilterOperator, str] = FilterOperator.EQUALS,
) -> FilterCondition:
    """Create a new, empty-valued condition with a generated id."""
    return FilterCondition(
        id=_generate_filter_id(),
        column_name=column_name,
        operator=operator,
        value="",
    )


def _generate_filter_id() -> str:
    return f"filter_{int(time.time() * 1000)}_{uuid.uuid4().hex[:7]}"


def is_filter_empty(condition: ConditionInput) -> bool:
    """
    Check whether a condition has no meaningful value.

    NULL checks never count as empty, whatever their value.
    """
    condition = FilterCondition.coerce(condition)

    if condition.filter_operator in _NULL_CHECK_OPERATORS:
        return False

    value = condition.value
    if value is None:
        return True
    if _is_blank(value):
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def remove_empty_filters(conditions: Sequence[ConditionInput]) -> List[FilterCondition]:
    """Drop incomplete rows before compilation."""
    coerced = [FilterCondition.coerce(c) for c in conditions]
    return [c for c in coerced if not is_filter_empty(c)]
