"""Core interfaces, models and exceptions for the query compiler."""

from query_compiler.core.exceptions import (
    ConfigurationError,
    ErrorCode,
    FilterCompileError,
    InvalidFilterError,
    QueryCompilerError,
    UnsupportedDatabaseError,
)
from query_compiler.core.interfaces import IFilterTranslator, ISqlAnalyzer
from query_compiler.core.models import (
    SQL_DATABASE_TYPES,
    CassandraFilterResult,
    CassandraValidationResult,
    ConditionInput,
    DatabaseType,
    Diagnostic,
    ElasticsearchFilterResult,
    FilterCondition,
    FilterOperator,
    FilterPreset,
    FilterValidationResult,
    LogicOperator,
    MongoFilterResult,
    OperatorMetadata,
    ParsedSqlStatement,
    SqlFilterResult,
    SqlFilterResultNamed,
    SqlPosition,
    SqlStatementType,
    SqlValidationResult,
    UnsupportedCondition,
)

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "FilterCompileError",
    "InvalidFilterError",
    "QueryCompilerError",
    "UnsupportedDatabaseError",
    "IFilterTranslator",
    "ISqlAnalyzer",
    "SQL_DATABASE_TYPES",
    "CassandraFilterResult",
    "CassandraValidationResult",
    "ConditionInput",
    "DatabaseType",
    "Diagnostic",
    "ElasticsearchFilterResult",
    "FilterCondition",
    "FilterOperator",
    "FilterPreset",
    "FilterValidationResult",
    "LogicOperator",
    "MongoFilterResult",
    "OperatorMetadata",
    "ParsedSqlStatement",
    "SqlFilterResult",
    "SqlFilterResultNamed",
    "SqlPosition",
    "SqlStatementType",
    "SqlValidationResult",
    "UnsupportedCondition",
]
