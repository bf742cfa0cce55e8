"""
Cassandra CQL query translator.

Converts filter conditions to a CQL WHERE fragment with ``?`` placeholders.
CQL has a much smaller filtering surface than SQL: operators it cannot run
are skipped with a warning, and OR logic is emitted with a warning because
the server only accepts it in limited cases.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from query_compiler.adapters.base import iter_conditions, missing_value2
from query_compiler.adapters.sql.dialects import quote_double
from query_compiler.config import CompilerSettings, get_settings
from query_compiler.core.models import (
    CassandraFilterResult,
    CassandraValidationResult,
    ConditionInput,
    Diagnostic,
    FilterCondition,
    FilterOperator,
    LogicOperator,
    UnsupportedCondition,
)
from query_compiler.filters.operators import parse_in_values
from query_compiler.logging import get_logger

logger = get_logger(__name__)

NOT_CONTAINS_WARNING = "Cassandra does not support NOT CONTAINS. Filter will be applied client-side."
OR_LOGIC_WARNING = (
    "Cassandra does not natively support OR in WHERE clauses. "
    "Results may require ALLOW FILTERING or multiple queries."
)
OR_LOGIC_ERROR = (
    "Cassandra does not support OR logic in WHERE clauses. "
    "Use multiple queries or filter results client-side."
)

SUPPORTED_OPERATORS: List[FilterOperator] = [
    FilterOperator.EQUALS,
    FilterOperator.NOT_EQUALS,
    FilterOperator.CONTAINS,
    FilterOperator.STARTS_WITH,
    FilterOperator.ENDS_WITH,
    FilterOperator.GREATER_THAN,
    FilterOperator.LESS_THAN,
    FilterOperator.GREATER_OR_EQUAL,
    FilterOperator.LESS_OR_EQUAL,
    FilterOperator.IS_NULL,
    FilterOperator.IS_NOT_NULL,
    FilterOperator.BETWEEN,
    FilterOperator.IN,
]

_UNSUPPORTED_REASONS: Dict[FilterOperator, str] = {
    FilterOperator.NOT_CONTAINS: "Cassandra does not support NOT CONTAINS. Filter results client-side.",
}

# Operators that need a secondary index or a full scan
ALLOW_FILTERING_OPERATORS = frozenset(
    {
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
        FilterOperator.GREATER_THAN,
        FilterOperator.LESS_THAN,
        FilterOperator.GREATER_OR_EQUAL,
        FilterOperator.LESS_OR_EQUAL,
        FilterOperator.BETWEEN,
        FilterOperator.NOT_EQUALS,
    }
)

_COMPARISON_CQL = {
    FilterOperator.EQUALS: "=",
    FilterOperator.NOT_EQUALS: "!=",
    FilterOperator.GREATER_THAN: ">",
    FilterOperator.LESS_THAN: "<",
    FilterOperator.GREATER_OR_EQUAL: ">=",
    FilterOperator.LESS_OR_EQUAL: "<=",
}


def escape_like_pattern(value: Any) -> str:
    """Escape ``\\``, ``%`` and ``_`` in a LIKE operand."""
    text = "" if value is None else str(value)
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CassandraQueryTranslator:
    """
    Translates filter conditions to a CQL WHERE fragment.

    Implements the IFilterTranslator interface for Cassandra. The caller
    decides whether to append ``ALLOW FILTERING``; ``needs_allow_filtering``
    on the result is a hint.
    """

    def __init__(self, settings: Optional[CompilerSettings] = None):
        """Initialize Cassandra query translator."""
        self.settings = settings or get_settings()

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
        strict: Optional[bool] = None,
    ) -> CassandraFilterResult:
        """
        Convert filter conditions to a CQL WHERE fragment.

        Returns:
            CassandraFilterResult with ``?`` parameters in order, the
            ALLOW FILTERING hint and any warnings as diagnostics
        """
        logic = LogicOperator(logic)
        strict = self.settings.strict_between(legacy_default=False) if strict is None else strict
        coerced = list(iter_conditions(conditions))
        diagnostics: List[Diagnostic] = []
        clauses: List[str] = []
        params: List[Any] = []

        if logic is LogicOperator.OR and len(coerced) > 1:
            logger.warning(OR_LOGIC_WARNING)
            diagnostics.append(Diagnostic(code="or_logic", message=OR_LOGIC_WARNING))

        for condition in coerced:
            clause = self._translate_condition(condition, params, strict, diagnostics)
            if clause:
                clauses.append(clause)

        allow_filtering = needs_allow_filtering(conditions)
        if not clauses:
            return CassandraFilterResult(needs_allow_filtering=allow_filtering, diagnostics=diagnostics)

        return CassandraFilterResult(
            where_clause=f" {logic.value} ".join(clauses),
            params=params,
            needs_allow_filtering=allow_filtering,
            diagnostics=diagnostics,
        )

    def _translate_condition(
        self,
        condition: FilterCondition,
        params: List[Any],
        strict: bool,
        diagnostics: List[Diagnostic],
    ) -> Optional[str]:
        """Translate a single condition, appending its values to ``params``."""
        column = quote_double(condition.column_name)
        operator = condition.filter_operator
        value = condition.value

        if operator in _COMPARISON_CQL:
            params.append(value)
            return f"{column} {_COMPARISON_CQL[operator]} ?"
        elif operator is FilterOperator.CONTAINS:
            params.append(value)
            return f"{column} CONTAINS ?"
        elif operator is FilterOperator.NOT_CONTAINS:
            logger.warning(NOT_CONTAINS_WARNING)
            diagnostics.append(
                Diagnostic(
                    code="unsupported_operator",
                    message=NOT_CONTAINS_WARNING,
                    column_name=condition.column_name,
                    operator=condition.operator,
                    filter_id=condition.id,
                )
            )
            return None
        elif operator is FilterOperator.STARTS_WITH:
            params.append(f"{escape_like_pattern(value)}%")
            return f"{column} LIKE ?"
        elif operator is FilterOperator.ENDS_WITH:
            params.append(f"%{escape_like_pattern(value)}")
            return f"{column} LIKE ?"
        elif operator is FilterOperator.IS_NULL:
            return f"{column} = NULL"
        elif operator is FilterOperator.IS_NOT_NULL:
            return f"{column} != NULL"
        elif operator is FilterOperator.BETWEEN:
            if not condition.has_value2:
                missing_value2(condition, strict, diagnostics, logger)
                return None
            # No BETWEEN in CQL
            params.extend([value, condition.value2])
            return f"{column} >= ? AND {column} <= ?"
        elif operator is FilterOperator.IN:
            values = parse_in_values(value)
            if not values:
                return None
            params.extend(values)
            return f"{column} IN ({', '.join('?' for _ in values)})"

        return None


def build_cassandra_filter(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> CassandraFilterResult:
    """
    Build a CQL WHERE fragment from filter conditions.

    Example:
        >>> build_cassandra_filter(
        ...     [
        ...         {"id": "1", "columnName": "user_id", "operator": "equals", "value": "abc123"},
        ...         {"id": "2", "columnName": "age", "operator": "greater_than", "value": 18},
        ...     ]
        ... ).where_clause
        '"user_id" = ? AND "age" > ?'
    """
    return CassandraQueryTranslator(settings=settings).translate(conditions, logic, strict=strict)


def needs_allow_filtering(conditions: Sequence[ConditionInput]) -> bool:
    """
    Guess whether a condition list needs ``ALLOW FILTERING``.

    Heuristic only: the real answer depends on the table's primary key and
    secondary indexes.
    """
    for raw in conditions or []:
        condition = FilterCondition.coerce(raw)
        if condition.filter_operator in ALLOW_FILTERING_OPERATORS:
            return True
    return False


def validate_cassandra_filters(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
) -> CassandraValidationResult:
    """
    Check a condition list for CQL compatibility before compiling it.

    Rows without a column or operator are ignored. OR logic over more than
    one condition rejects the whole list.
    """
    logic = LogicOperator(logic)
    coerced = [FilterCondition.coerce(c) for c in conditions or []]

    if logic is LogicOperator.OR and len(coerced) > 1:
        return CassandraValidationResult(
            valid=False,
            unsupported_conditions=[
                UnsupportedCondition(
                    condition=c,
                    reason="Cassandra does not support OR logic in WHERE clauses.",
                )
                for c in coerced
            ],
            logic_error=OR_LOGIC_ERROR,
        )

    supported: List[FilterCondition] = []
    unsupported: List[UnsupportedCondition] = []

    for condition in coerced:
        if not condition.column_name or not condition.operator:
            continue

        operator = condition.filter_operator
        if operator not in SUPPORTED_OPERATORS:
            reason = _UNSUPPORTED_REASONS.get(
                operator, f"Operator '{condition.operator}' is not supported by Cassandra."
            )
            unsupported.append(UnsupportedCondition(condition=condition, reason=reason))
            continue

        if operator is FilterOperator.BETWEEN and not condition.has_value2:
            unsupported.append(
                UnsupportedCondition(
                    condition=condition,
                    reason="BETWEEN operator requires both value and value2.",
                )
            )
            continue

        supported.append(condition)

    return CassandraValidationResult(
        valid=not unsupported,
        supported_conditions=supported,
        unsupported_conditions=unsupported,
    )


def get_cassandra_supported_operators() -> List[FilterOperator]:
    return list(SUPPORTED_OPERATORS)
