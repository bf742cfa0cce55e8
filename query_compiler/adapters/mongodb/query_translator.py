"""
MongoDB query translator.

Converts filter conditions to a MongoDB query document usable with
``find()`` or as the body of an aggregation ``$match`` stage.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Union

from query_compiler.adapters.base import iter_conditions, missing_value2
from query_compiler.config import CompilerSettings, get_settings
from query_compiler.core.models import (
    ConditionInput,
    Diagnostic,
    FilterCondition,
    FilterOperator,
    LogicOperator,
    MongoFilterResult,
)
from query_compiler.filters.operators import parse_in_values
from query_compiler.logging import get_logger

logger = get_logger(__name__)

_REGEX_SPECIAL = re.compile(r"[.*+?^${}()|\[\]\\]")

_COMPARISON_OPERATORS = {
    FilterOperator.EQUALS: "$eq",
    FilterOperator.NOT_EQUALS: "$ne",
    FilterOperator.GREATER_THAN: "$gt",
    FilterOperator.LESS_THAN: "$lt",
    FilterOperator.GREATER_OR_EQUAL: "$gte",
    FilterOperator.LESS_OR_EQUAL: "$lte",
}


def escape_regex(text: str) -> str:
    """Escape regex metacharacters so user input matches literally."""
    return _REGEX_SPECIAL.sub(lambda m: "\\" + m.group(0), text)


class MongoQueryTranslator:
    """
    Translates filter conditions to a MongoDB query document.

    Implements the IFilterTranslator interface for MongoDB. Text operators
    become escaped, case-insensitive ``$regex`` matches.
    """

    def __init__(self, settings: Optional[CompilerSettings] = None):
        """Initialize MongoDB query translator."""
        self.settings = settings or get_settings()

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
        strict: Optional[bool] = None,
    ) -> MongoFilterResult:
        """
        Convert filter conditions to a MongoDB query document.

        Args:
            conditions: Ordered filter conditions
            logic: Combine with ``$and`` or ``$or``
            strict: Raise on a BETWEEN without value2 instead of skipping it

        Returns:
            MongoFilterResult; an empty document matches everything
        """
        logic = LogicOperator(logic)
        strict = self.settings.strict_between(legacy_default=False) if strict is None else strict
        diagnostics: List[Diagnostic] = []
        clauses: List[Dict[str, Any]] = []

        for condition in iter_conditions(conditions):
            clause = self._translate_condition(condition, strict, diagnostics)
            if clause:
                clauses.append(clause)

        if not clauses:
            return MongoFilterResult(filter={}, diagnostics=diagnostics)

        # Single condition - no need for $and/$or wrapper
        if len(clauses) == 1:
            return MongoFilterResult(filter=clauses[0], diagnostics=diagnostics)

        key = "$and" if logic is LogicOperator.AND else "$or"
        return MongoFilterResult(filter={key: clauses}, diagnostics=diagnostics)

    def _translate_condition(
        self,
        condition: FilterCondition,
        strict: bool,
        diagnostics: List[Diagnostic],
    ) -> Optional[Dict[str, Any]]:
        """Translate a single condition to a MongoDB query clause."""
        field = condition.column_name
        operator = condition.filter_operator
        value = condition.value

        if operator in _COMPARISON_OPERATORS:
            return {field: {_COMPARISON_OPERATORS[operator]: value}}
        elif operator is FilterOperator.CONTAINS:
            return {field: {"$regex": escape_regex(str(value)), "$options": "i"}}
        elif operator is FilterOperator.NOT_CONTAINS:
            return {field: {"$not": {"$regex": escape_regex(str(value)), "$options": "i"}}}
        elif operator is FilterOperator.STARTS_WITH:
            return {field: {"$regex": f"^{escape_regex(str(value))}", "$options": "i"}}
        elif operator is FilterOperator.ENDS_WITH:
            return {field: {"$regex": f"{escape_regex(str(value))}$", "$options": "i"}}
        elif operator is FilterOperator.IS_NULL:
            return {field: {"$eq": None}}
        elif operator is FilterOperator.IS_NOT_NULL:
            return {field: {"$ne": None}}
        elif operator is FilterOperator.BETWEEN:
            if not condition.has_value2:
                missing_value2(condition, strict, diagnostics, logger)
                return None
            return {field: {"$gte": value, "$lte": condition.value2}}
        elif operator is FilterOperator.IN:
            return {field: {"$in": parse_in_values(value)}}

        return None


def build_mongo_filter(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> MongoFilterResult:
    """
    Build a MongoDB query document from filter conditions.

    Example:
        >>> build_mongo_filter(
        ...     [{"id": "1", "columnName": "age", "operator": "greater_than", "value": 18}]
        ... ).filter
        {'age': {'$gt': 18}}
    """
    return MongoQueryTranslator(settings=settings).translate(conditions, logic, strict=strict)


def build_mongo_match_stage(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> Dict[str, Any]:
    """Wrap the compiled query document in an aggregation ``$match`` stage."""
    result = build_mongo_filter(conditions, logic, strict=strict, settings=settings)
    return {"$match": result.filter}
