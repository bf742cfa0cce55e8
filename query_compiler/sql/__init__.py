"""SQL statement parsing, validation and formatting utilities."""

from query_compiler.sql.analyzer import RegexSqlAnalyzer
from query_compiler.sql.formatter import (
    format_sql,
    has_multiple_statements,
    minify_sql,
    split_statements,
)
from query_compiler.sql.keywords import SQL_KEYWORDS, get_sql_keywords, is_sql_keyword
from query_compiler.sql.parser import (
    detect_statement_type,
    normalize_whitespace,
    parse_sql,
    split_select_list,
)
from query_compiler.sql.validator import (
    DANGEROUS_KEYWORDS,
    detect_dangerous_operations,
    is_read_only_query,
    validate_sql,
)

__all__ = [
    "RegexSqlAnalyzer",
    "format_sql",
    "has_multiple_statements",
    "minify_sql",
    "split_statements",
    "SQL_KEYWORDS",
    "get_sql_keywords",
    "is_sql_keyword",
    "detect_statement_type",
    "normalize_whitespace",
    "parse_sql",
    "split_select_list",
    "DANGEROUS_KEYWORDS",
    "detect_dangerous_operations",
    "is_read_only_query",
    "validate_sql",
]
