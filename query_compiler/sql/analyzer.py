"""
Regex-backed implementation of the ISqlAnalyzer interface.
"""

from typing import List

from query_compiler.core.models import ParsedSqlStatement, SqlValidationResult
from query_compiler.sql.parser import parse_sql
from query_compiler.sql.validator import (
    detect_dangerous_operations,
    is_read_only_query,
    validate_sql,
)


class RegexSqlAnalyzer:
    """
    Analyses raw SQL with the heuristic parser and lexical validator.

    Implements the ISqlAnalyzer interface so an execution layer can gate
    statements without depending on the regex functions directly.
    """

    def parse(self, sql: str) -> ParsedSqlStatement:
        return parse_sql(sql)

    def validate(self, sql: str) -> SqlValidationResult:
        return validate_sql(sql)

    def is_read_only(self, sql: str) -> bool:
        return is_read_only_query(sql)

    def detect_dangerous_operations(self, sql: str) -> List[str]:
        return detect_dangerous_operations(sql)
