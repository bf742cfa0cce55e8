"""
Elasticsearch query translator.

Converts filter conditions to an Elasticsearch Query DSL ``bool`` query and
optionally wraps it in a search request body.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from query_compiler.adapters.base import iter_conditions, missing_value2
from query_compiler.config import CompilerSettings, get_settings
from query_compiler.core.models import (
    ConditionInput,
    Diagnostic,
    ElasticsearchFilterResult,
    FilterCondition,
    FilterOperator,
    LogicOperator,
)
from query_compiler.filters.operators import parse_in_values
from query_compiler.logging import get_logger

logger = get_logger(__name__)

_RANGE_KEYS = {
    FilterOperator.GREATER_THAN: "gt",
    FilterOperator.LESS_THAN: "lt",
    FilterOperator.GREATER_OR_EQUAL: "gte",
    FilterOperator.LESS_OR_EQUAL: "lte",
}


def escape_wildcard(text: str) -> str:
    """Escape the wildcard query metacharacters ``\\``, ``*`` and ``?``."""
    return text.replace("\\", "\\\\").replace("*", "\\*").replace("?", "\\?")


def _wildcard(field: str, pattern: str) -> Dict[str, Any]:
    return {"wildcard": {field: {"value": pattern, "case_insensitive": True}}}


def _must_not(clause: Dict[str, Any]) -> Dict[str, Any]:
    return {"bool": {"must_not": clause}}


class ElasticsearchQueryTranslator:
    """
    Translates filter conditions to Elasticsearch DSL.

    Implements the IFilterTranslator interface for Elasticsearch.
    """

    def __init__(self, settings: Optional[CompilerSettings] = None):
        """Initialize Elasticsearch query translator."""
        self.settings = settings or get_settings()

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
        strict: Optional[bool] = None,
    ) -> ElasticsearchFilterResult:
        """
        Convert filter conditions to a ``bool`` query.

        AND logic puts every clause under ``must``; OR logic puts them under
        ``should`` with ``minimum_should_match: 1``. When nothing compiles the
        query is an empty ``bool``.
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
            return ElasticsearchFilterResult(query={"bool": {}}, diagnostics=diagnostics)

        if logic is LogicOperator.AND:
            query = {"bool": {"must": clauses}}
        else:
            query = {"bool": {"should": clauses, "minimum_should_match": 1}}
        return ElasticsearchFilterResult(query=query, diagnostics=diagnostics)

    def _translate_condition(
        self,
        condition: FilterCondition,
        strict: bool,
        diagnostics: List[Diagnostic],
    ) -> Optional[Dict[str, Any]]:
        """Translate a single condition to an ES clause."""
        field = condition.column_name
        operator = condition.filter_operator
        value = condition.value

        if operator is FilterOperator.EQUALS:
            return {"term": {field: value}}
        elif operator is FilterOperator.NOT_EQUALS:
            return _must_not({"term": {field: value}})
        elif operator is FilterOperator.CONTAINS:
            return _wildcard(field, f"*{escape_wildcard(str(value))}*")
        elif operator is FilterOperator.NOT_CONTAINS:
            return _must_not(_wildcard(field, f"*{escape_wildcard(str(value))}*"))
        elif operator is FilterOperator.STARTS_WITH:
            return {"prefix": {field: {"value": str(value).lower(), "case_insensitive": True}}}
        elif operator is FilterOperator.ENDS_WITH:
            return _wildcard(field, f"*{escape_wildcard(str(value))}")
        elif operator in _RANGE_KEYS:
            return {"range": {field: {_RANGE_KEYS[operator]: value}}}
        elif operator is FilterOperator.IS_NULL:
            return _must_not({"exists": {"field": field}})
        elif operator is FilterOperator.IS_NOT_NULL:
            return {"exists": {"field": field}}
        elif operator is FilterOperator.BETWEEN:
            if not condition.has_value2:
                missing_value2(condition, strict, diagnostics, logger)
                return None
            return {"range": {field: {"gte": value, "lte": condition.value2}}}
        elif operator is FilterOperator.IN:
            return {"terms": {field: parse_in_values(value)}}

        return None


def build_elasticsearch_filter(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> ElasticsearchFilterResult:
    """
    Build an Elasticsearch ``bool`` query from filter conditions.

    Example:
        >>> build_elasticsearch_filter(
        ...     [{"id": "1", "columnName": "price", "operator": "between", "value": 10, "value2": 100}]
        ... ).query
        {'bool': {'must': [{'range': {'price': {'gte': 10, 'lte': 100}}}]}}
    """
    return ElasticsearchQueryTranslator(settings=settings).translate(conditions, logic, strict=strict)


def build_elasticsearch_search_body(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    from_: int = 0,
    size: Optional[int] = None,
    sort: Optional[List[Dict[str, Any]]] = None,
    settings: Optional[CompilerSettings] = None,
) -> Dict[str, Any]:
    """
    Build a complete search request body.

    Args:
        conditions: Filter conditions
        logic: AND/OR combination
        from_: Offset of the first hit (sent as ``from``)
        size: Page size; defaults to the ``es_default_size`` setting
        sort: Sort specification, omitted from the body when empty

    Returns:
        Dict with ``query``, ``from``, ``size`` and optionally ``sort``. An
        empty ``bool`` query is replaced by ``match_all``.
    """
    settings = settings or get_settings()
    query = build_elasticsearch_filter(conditions, logic, settings=settings).query

    body: Dict[str, Any] = {
        "query": query if query.get("bool") else {"match_all": {}},
        "from": from_,
        "size": settings.es_default_size if size is None else size,
    }

    if sort:
        body["sort"] = sort

    return body
