"""
Query Compiler - cross-dialect filter and query compilation.

Turns UI filter conditions into parameterised SQL WHERE clauses, MongoDB
query documents, Elasticsearch Query DSL and CQL fragments, and analyses raw
SQL before it is executed.
"""

from query_compiler.core import (
    DatabaseType,
    FilterCondition,
    FilterOperator,
    FilterPreset,
    LogicOperator,
    QueryCompilerError,
)
from query_compiler.config import CompilerSettings, configure_logging, get_settings
from query_compiler.filters import normalize_filter, validate_filter
from query_compiler.adapters.sql import build_sql_filter, build_sql_filter_named, build_where_clause
from query_compiler.adapters.mongodb import build_mongo_filter, build_mongo_match_stage
from query_compiler.adapters.elasticsearch import (
    build_elasticsearch_filter,
    build_elasticsearch_search_body,
)
from query_compiler.adapters.cassandra import build_cassandra_filter, needs_allow_filtering
from query_compiler.sql import (
    detect_dangerous_operations,
    is_read_only_query,
    parse_sql,
    validate_sql,
)
from query_compiler.translator import FilterTranslator, get_translator

__version__ = "0.1.0"

__all__ = [
    "DatabaseType",
    "FilterCondition",
    "FilterOperator",
    "FilterPreset",
    "LogicOperator",
    "QueryCompilerError",
    "CompilerSettings",
    "configure_logging",
    "get_settings",
    "normalize_filter",
    "validate_filter",
    "build_sql_filter",
    "build_sql_filter_named",
    "build_where_clause",
    "build_mongo_filter",
    "build_mongo_match_stage",
    "build_elasticsearch_filter",
    "build_elasticsearch_search_body",
    "build_cassandra_filter",
    "needs_allow_filtering",
    "detect_dangerous_operations",
    "is_read_only_query",
    "parse_sql",
    "validate_sql",
    "FilterTranslator",
    "get_translator",
]
