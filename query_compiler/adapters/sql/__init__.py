"""SQL adapter: dialect profiles and the WHERE-clause translator."""

from query_compiler.adapters.sql.dialects import (
    DIALECT_PROFILES,
    DialectProfile,
    LikeEscapeStyle,
    PlaceholderStyle,
    get_dialect_profile,
    quote_backtick,
    quote_bracket,
    quote_double,
)
from query_compiler.adapters.sql.query_translator import (
    SqlQueryTranslator,
    build_sql_filter,
    build_sql_filter_named,
    build_where_clause,
)

__all__ = [
    "DIALECT_PROFILES",
    "DialectProfile",
    "LikeEscapeStyle",
    "PlaceholderStyle",
    "get_dialect_profile",
    "quote_backtick",
    "quote_bracket",
    "quote_double",
    "SqlQueryTranslator",
    "build_sql_filter",
    "build_sql_filter_named",
    "build_where_clause",
]
