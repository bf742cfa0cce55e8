"""
Helpers shared by every backend translator.
"""

import logging
from typing import Iterator, List, Optional, Sequence

from query_compiler.core.exceptions import FilterCompileError
from query_compiler.core.models import ConditionInput, Diagnostic, FilterCondition


def iter_conditions(conditions: Optional[Sequence[ConditionInput]]) -> Iterator[FilterCondition]:
    """Yield coerced conditions, skipping rows without a column or operator."""
    for raw in conditions or []:
        condition = FilterCondition.coerce(raw)
        if not condition.column_name or not condition.operator:
            continue
        yield condition


def missing_value2(
    condition: FilterCondition,
    strict: bool,
    diagnostics: List[Diagnostic],
    logger: logging.Logger,
) -> None:
    """
    Handle a BETWEEN condition that has no upper bound.

    Raises:
        FilterCompileError: When ``strict`` is set; otherwise the condition is
            recorded as a ``missing_second_value`` diagnostic.
    """
    message = (
        f'BETWEEN operator on column "{condition.column_name}" requires both value and value2. '
        "Provide value2 or use a different operator."
    )
    if strict:
        raise FilterCompileError(
            message,
            column_name=condition.column_name,
            operator=condition.operator,
            filter_id=condition.id,
        )
    logger.debug("Skipping filter %s: %s", condition.id, message)
    diagnostics.append(
        Diagnostic(
            code="missing_second_value",
            message=message,
            column_name=condition.column_name,
            operator=condition.operator,
            filter_id=condition.id,
        )
    )
