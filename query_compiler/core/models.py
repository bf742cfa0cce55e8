"""
Shared data models for the query compiler.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from query_compiler.core.exceptions import InvalidFilterError


class FilterOperator(str, Enum):
    """Logical filter operators understood by every translator."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_OR_EQUAL = "less_or_equal"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    IN = "in"
    BETWEEN = "between"


class LogicOperator(str, Enum):
    """How compiled conditions are combined."""

    AND = "AND"
    OR = "OR"


class DatabaseType(str, Enum):
    """Database types a connection can point at."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    SQLSERVER = "sqlserver"
    SQLITE = "sqlite"
    MONGODB = "mongodb"
    REDIS = "redis"
    ELASTICSEARCH = "elasticsearch"
    CASSANDRA = "cassandra"


SQL_DATABASE_TYPES = (
    DatabaseType.POSTGRES,
    DatabaseType.MYSQL,
    DatabaseType.MARIADB,
    DatabaseType.SQLSERVER,
    DatabaseType.SQLITE,
)


class FilterCondition(BaseModel):
    """
    One user-specified predicate.

    ``operator`` is kept as free text rather than a FilterOperator so that
    half-filled UI rows (empty or unknown operators) can still be represented,
    validated and skipped. Use ``filter_operator`` for the typed view.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    column_name: str = Field(default="", alias="columnName")
    operator: str = ""
    value: Any = None
    value2: Any = None

    @field_validator("id", "column_name", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("operator", mode="before")
    @classmethod
    def _coerce_operator(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, Enum):
            return str(v.value)
        return v if isinstance(v, str) else str(v)

    @property
    def filter_operator(self) -> Optional[FilterOperator]:
        """The operator as a FilterOperator, or None when unknown/empty."""
        try:
            return FilterOperator(self.operator)
        except ValueError:
            return None

    @property
    def has_value2(self) -> bool:
        return self.value2 is not None

    @classmethod
    def coerce(cls, condition: Union["FilterCondition", Mapping[str, Any]]) -> "FilterCondition":
        """
        Accept either a FilterCondition or a plain mapping (camelCase or
        snake_case keys) coming from a UI layer.

        Raises:
            InvalidFilterError: If the input is neither.
        """
        if isinstance(condition, cls):
            return condition
        if isinstance(condition, Mapping):
            try:
                return cls.model_validate(dict(condition))
            except ValidationError as e:
                raise InvalidFilterError(
                    f"Could not read filter condition: {e}",
                    details={"input": dict(condition)},
                ) from e
        raise InvalidFilterError(
            f"Expected a FilterCondition or mapping, got {type(condition).__name__}",
        )


ConditionInput = Union[FilterCondition, Mapping[str, Any]]


class FilterPreset(BaseModel):
    """A named, saved set of conditions plus the logic that joins them."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    conditions: List[FilterCondition] = Field(default_factory=list)
    logic_operator: LogicOperator = Field(default=LogicOperator.AND, alias="logicOperator")


class Diagnostic(BaseModel):
    """A non-fatal finding produced while compiling a condition list."""

    code: str
    message: str
    column_name: Optional[str] = None
    operator: Optional[str] = None
    filter_id: Optional[str] = None


class FilterValidationResult(BaseModel):
    """Outcome of validating one FilterCondition."""

    valid: bool
    errors: List[str] = Field(default_factory=list)
    normalized_condition: Optional[FilterCondition] = None


class OperatorMetadata(BaseModel):
    """Static description of a filter operator."""

    model_config = ConfigDict(frozen=True)

    label: str
    needs_value: bool
    needs_two_values: bool
    needs_comma_separated: bool
    applicable_types: List[str]


class SqlFilterResult(BaseModel):
    """WHERE fragment (without the WHERE keyword) plus ordered parameters."""

    where_clause: str = ""
    params: List[Any] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class SqlFilterResultNamed(BaseModel):
    """WHERE fragment plus named parameters (``p0``, ``p1``, ...)."""

    where_clause: str = ""
    params: Dict[str, Any] = Field(default_factory=dict)
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class MongoFilterResult(BaseModel):
    """MongoDB query document."""

    filter: Dict[str, Any] = Field(default_factory=dict)
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def query(self) -> Dict[str, Any]:
        return self.filter


class ElasticsearchFilterResult(BaseModel):
    """Elasticsearch Query DSL boolean query."""

    query: Dict[str, Any] = Field(default_factory=lambda: {"bool": {}})
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class CassandraFilterResult(BaseModel):
    """CQL WHERE fragment, parameters and the ALLOW FILTERING hint."""

    where_clause: str = ""
    params: List[Any] = Field(default_factory=list)
    needs_allow_filtering: bool = False
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class UnsupportedCondition(BaseModel):
    """A condition Cassandra cannot run, with the reason why."""

    condition: FilterCondition
    reason: str


class CassandraValidationResult(BaseModel):
    """Pre-flight compatibility check of a condition list against CQL."""

    valid: bool
    supported_conditions: List[FilterCondition] = Field(default_factory=list)
    unsupported_conditions: List[UnsupportedCondition] = Field(default_factory=list)
    logic_error: Optional[str] = None


class SqlStatementType(str, Enum):
    """Statement kinds recognised by the SQL parser."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE = "CREATE"
    ALTER = "ALTER"
    DROP = "DROP"
    TRUNCATE = "TRUNCATE"
    GRANT = "GRANT"
    REVOKE = "REVOKE"
    BEGIN = "BEGIN"
    COMMIT = "COMMIT"
    ROLLBACK = "ROLLBACK"
    WITH = "WITH"
    EXPLAIN = "EXPLAIN"
    UNKNOWN = "UNKNOWN"


class ParsedSqlStatement(BaseModel):
    """Read-only structural snapshot of a raw SQL string."""

    model_config = ConfigDict(frozen=True)

    type: SqlStatementType = SqlStatementType.UNKNOWN
    tables: List[str] = Field(default_factory=list)
    columns: List[str] = Field(default_factory=list)
    has_where: bool = False
    has_limit: bool = False
    has_order_by: bool = False
    is_modifying: bool = False
    raw_sql: str = ""


class SqlPosition(BaseModel):
    """1-based line/column plus 0-based character offset."""

    line: int
    column: int
    offset: int


class SqlValidationResult(BaseModel):
    """Outcome of lexical SQL validation."""

    valid: bool
    error: Optional[str] = None
    position: Optional[SqlPosition] = None
    warnings: List[str] = Field(default_factory=list)
