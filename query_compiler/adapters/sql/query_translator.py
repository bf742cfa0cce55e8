"""
SQL query translator.

Converts filter conditions to a parameterised WHERE fragment (without the
WHERE keyword) for PostgreSQL, MySQL, MariaDB, SQL Server and SQLite.
Values never reach the SQL text: every operand becomes a bind parameter.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from query_compiler.adapters.base import iter_conditions, missing_value2
from query_compiler.adapters.sql.dialects import (
    PlaceholderStyle,
    get_dialect_profile,
)
from query_compiler.config import CompilerSettings, get_settings
from query_compiler.core.models import (
    ConditionInput,
    DatabaseType,
    Diagnostic,
    FilterCondition,
    FilterOperator,
    LogicOperator,
    SqlFilterResult,
    SqlFilterResultNamed,
)
from query_compiler.filters.operators import parse_in_values
from query_compiler.logging import get_logger

logger = get_logger(__name__)

_COMPARISON_SQL = {
    FilterOperator.EQUALS: "=",
    FilterOperator.NOT_EQUALS: "!=",
    FilterOperator.GREATER_THAN: ">",
    FilterOperator.LESS_THAN: "<",
    FilterOperator.GREATER_OR_EQUAL: ">=",
    FilterOperator.LESS_OR_EQUAL: "<=",
}

_LIKE_OPERATORS = (
    FilterOperator.CONTAINS,
    FilterOperator.NOT_CONTAINS,
    FilterOperator.STARTS_WITH,
    FilterOperator.ENDS_WITH,
)


class _ParameterBuffer:
    """Hands out placeholders and records the values bound to them."""

    def __init__(self, style: PlaceholderStyle, start_index: int):
        self.style = style
        self.index = start_index
        self.values: List[Tuple[str, Any]] = []

    def bind(self, value: Any) -> str:
        name = f"p{self.index}"
        if self.style is PlaceholderStyle.POSITIONAL:
            placeholder = f"${self.index}"
        elif self.style is PlaceholderStyle.NAMED:
            placeholder = f"@{name}"
        else:
            placeholder = "?"
        self.index += 1
        self.values.append((name, value))
        return placeholder

    def as_list(self) -> List[Any]:
        return [value for _, value in self.values]

    def as_dict(self) -> Dict[str, Any]:
        return {name: value for name, value in self.values}


class SqlQueryTranslator:
    """
    Translates filter conditions to a dialect-specific SQL WHERE fragment.

    Implements the IFilterTranslator interface for SQL databases. The
    dialect-specific spelling comes from a DialectProfile; this class only
    decides which clause each operator becomes.
    """

    def __init__(
        self,
        db_type: Union[DatabaseType, str] = DatabaseType.POSTGRES,
        quote_identifier: Optional[Callable[[str], str]] = None,
        start_index: Optional[int] = None,
        escape_like: Optional[bool] = None,
        settings: Optional[CompilerSettings] = None,
    ):
        """
        Initialize SQL query translator.

        Args:
            db_type: Target SQL database
            quote_identifier: Custom identifier quoting, overrides the dialect's
            start_index: First placeholder number (dialect default when omitted)
            escape_like: Escape LIKE wildcards in user input; defaults to the
                         ``escape_like`` setting
            settings: Compiler settings; read from the environment when omitted

        Raises:
            UnsupportedDatabaseError: If db_type is not a SQL database
        """
        self.profile = get_dialect_profile(db_type)
        self.settings = settings or get_settings()
        self.quote_identifier = quote_identifier or self.profile.quote_identifier
        self.start_index = start_index
        self.escape_like = self.settings.escape_like if escape_like is None else escape_like

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
        strict: Optional[bool] = None,
    ) -> SqlFilterResult:
        """
        Compile conditions using the dialect's own placeholder style.

        A BETWEEN condition without value2 is skipped unless ``strict`` (or
        the ``between_policy`` setting) asks for an error.

        Returns:
            SqlFilterResult with an ordered parameter list
        """
        start = self.start_index if self.start_index is not None else self.profile.default_start_index
        buffer = _ParameterBuffer(self.profile.placeholder_style, start)
        strict = self.settings.strict_between(legacy_default=False) if strict is None else strict

        where_clause, diagnostics = self._compile(conditions, logic, buffer, strict)
        if not where_clause:
            return SqlFilterResult(where_clause="", params=[], diagnostics=diagnostics)
        return SqlFilterResult(where_clause=where_clause, params=buffer.as_list(), diagnostics=diagnostics)

    def translate_named(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
        strict: Optional[bool] = None,
    ) -> SqlFilterResultNamed:
        """
        Compile conditions using ``@p<N>`` named parameters.

        A BETWEEN condition without value2 raises FilterCompileError unless
        ``strict=False`` (or the ``between_policy`` setting) says otherwise.

        Returns:
            SqlFilterResultNamed with a name -> value parameter map
        """
        start = self.start_index if self.start_index is not None else 0
        buffer = _ParameterBuffer(PlaceholderStyle.NAMED, start)
        strict = self.settings.strict_between(legacy_default=True) if strict is None else strict

        where_clause, diagnostics = self._compile(conditions, logic, buffer, strict)
        if not where_clause:
            return SqlFilterResultNamed(where_clause="", params={}, diagnostics=diagnostics)
        return SqlFilterResultNamed(where_clause=where_clause, params=buffer.as_dict(), diagnostics=diagnostics)

    def _compile(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str],
        buffer: _ParameterBuffer,
        strict: bool,
    ) -> Tuple[str, List[Diagnostic]]:
        logic = LogicOperator(logic)
        clauses: List[str] = []
        diagnostics: List[Diagnostic] = []

        for condition in iter_conditions(conditions):
            clause = self._translate_condition(condition, buffer, strict, diagnostics)
            if clause:
                clauses.append(clause)

        return f" {logic.value} ".join(clauses), diagnostics

    def _translate_condition(
        self,
        condition: FilterCondition,
        buffer: _ParameterBuffer,
        strict: bool,
        diagnostics: List[Diagnostic],
    ) -> Optional[str]:
        """Translate a single condition; returns None when it is skipped."""
        operator = condition.filter_operator
        if operator is None:
            return None

        column = self.quote_identifier(condition.column_name)

        if operator in _COMPARISON_SQL:
            return f"{column} {_COMPARISON_SQL[operator]} {buffer.bind(condition.value)}"

        if operator in _LIKE_OPERATORS:
            return self._translate_like(operator, column, condition.value, buffer)

        if operator is FilterOperator.IS_NULL:
            return f"{column} IS NULL"

        if operator is FilterOperator.IS_NOT_NULL:
            return f"{column} IS NOT NULL"

        if operator is FilterOperator.BETWEEN:
            if not condition.has_value2:
                missing_value2(condition, strict, diagnostics, logger)
                return None
            low = buffer.bind(condition.value)
            high = buffer.bind(condition.value2)
            return f"{column} BETWEEN {low} AND {high}"

        if operator is FilterOperator.IN:
            values = parse_in_values(condition.value)
            if not values:
                logger.debug("Skipping IN filter on %s: no values", condition.column_name)
                return None
            placeholders = ", ".join(buffer.bind(v) for v in values)
            return f"{column} IN ({placeholders})"

        return None

    def _translate_like(
        self,
        operator: FilterOperator,
        column: str,
        value: Any,
        buffer: _ParameterBuffer,
    ) -> str:
        text = "" if value is None else str(value)
        suffix = ""
        if self.escape_like:
            text = self.profile.escape_like(text)
            suffix = self.profile.escape_clause

        if operator is FilterOperator.STARTS_WITH:
            pattern = f"{text}%"
        elif operator is FilterOperator.ENDS_WITH:
            pattern = f"%{text}"
        else:
            pattern = f"%{text}%"

        like = self.profile.not_like_operator if operator is FilterOperator.NOT_CONTAINS else self.profile.like_operator
        return f"{self.profile.text_cast(column)} {like} {buffer.bind(pattern)}{suffix}"


def build_sql_filter(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    db_type: Union[DatabaseType, str] = DatabaseType.POSTGRES,
    quote_identifier: Optional[Callable[[str], str]] = None,
    start_index: Optional[int] = None,
    escape_like: Optional[bool] = None,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> SqlFilterResult:
    """
    Build a SQL WHERE clause from filter conditions.

    Example:
        >>> build_sql_filter(
        ...     [{"id": "1", "columnName": "age", "operator": "greater_than", "value": 18}],
        ...     "AND",
        ...     db_type="postgres",
        ... ).where_clause
        '"age" > $1'
    """
    translator = SqlQueryTranslator(
        db_type=db_type,
        quote_identifier=quote_identifier,
        start_index=start_index,
        escape_like=escape_like,
        settings=settings,
    )
    return translator.translate(conditions, logic, strict=strict)


def build_sql_filter_named(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str] = LogicOperator.AND,
    db_type: Union[DatabaseType, str] = DatabaseType.SQLSERVER,
    quote_identifier: Optional[Callable[[str], str]] = None,
    start_index: Optional[int] = None,
    escape_like: Optional[bool] = None,
    strict: Optional[bool] = None,
    settings: Optional[CompilerSettings] = None,
) -> SqlFilterResultNamed:
    """
    Build a SQL WHERE clause with ``@p<N>`` named parameters (SQL Server by default).

    Raises:
        FilterCompileError: For a BETWEEN condition without value2 (legacy policy)
    """
    translator = SqlQueryTranslator(
        db_type=db_type,
        quote_identifier=quote_identifier,
        start_index=start_index,
        escape_like=escape_like,
        settings=settings,
    )
    return translator.translate_named(conditions, logic, strict=strict)


def build_where_clause(
    conditions: Sequence[ConditionInput],
    logic: Union[LogicOperator, str],
    db_type: Union[DatabaseType, str],
    quote_identifier: Optional[Callable[[str], str]] = None,
) -> SqlFilterResult:
    """Convenience wrapper around build_sql_filter."""
    return build_sql_filter(conditions, logic, db_type=db_type, quote_identifier=quote_identifier)
