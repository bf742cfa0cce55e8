"""
Lexical SQL validation and safety checks.

``validate_sql`` separates structurally broken SQL (unterminated strings,
unbalanced parentheses: ``valid=False`` with a position) from runnable but
risky SQL (dangerous keywords, unguarded DELETE/UPDATE: ``valid=True`` with
warnings).
"""

import re
from typing import List, Optional

from query_compiler.core.models import SqlPosition, SqlValidationResult

DANGEROUS_KEYWORDS = [
    "DROP",
    "TRUNCATE",
    "DELETE",
    "ALTER",
    "CREATE",
    "GRANT",
    "REVOKE",
]

_DANGEROUS_OPERATION = re.compile(rf"\b({'|'.join(DANGEROUS_KEYWORDS)})\b", re.IGNORECASE)
_KEYWORD_PATTERNS = {
    keyword: re.compile(rf"\b{keyword}\b", re.IGNORECASE) for keyword in DANGEROUS_KEYWORDS
}
_WHERE = re.compile(r"\bWHERE\b", re.IGNORECASE)
_LEADING_DELETE = re.compile(r"^\s*DELETE\s+FROM\b", re.IGNORECASE)
_LEADING_UPDATE = re.compile(r"^\s*UPDATE\b", re.IGNORECASE)
_DELETE_FROM = re.compile(r"DELETE\s+FROM\b", re.IGNORECASE)
_UPDATE_SET = re.compile(r"UPDATE\s+\S+\s+SET\b", re.IGNORECASE)
_SELECT_INTO = re.compile(r"\bINTO\b", re.IGNORECASE)
_MAIN_STATEMENT = re.compile(r"(SELECT|INSERT|UPDATE|DELETE)\b", re.IGNORECASE)


def position_of(sql: str, offset: int) -> SqlPosition:
    """1-based line and column of a 0-based character offset."""
    line = sql.count("\n", 0, offset) + 1
    column = offset - sql.rfind("\n", 0, offset)
    return SqlPosition(line=line, column=column, offset=offset)


def validate_sql(sql: str) -> SqlValidationResult:
    """
    Validate SQL syntax (basic, lexical validation).

    Example:
        >>> validate_sql("SELECT * FROM users WHERE id = '1").error
        'Unclosed single quote'
    """
    if not sql or not sql.strip():
        return SqlValidationResult(valid=False, error="Empty SQL query")

    failure = _check_quote_balance(sql) or _check_parentheses_balance(sql)
    if failure is not None:
        return failure

    warnings: List[str] = []

    match = _DANGEROUS_OPERATION.search(sql)
    if match:
        warnings.append(f"Query contains potentially dangerous operation: {match.group(1).upper()}")

    if _LEADING_DELETE.search(sql) and not _WHERE.search(sql):
        warnings.append("DELETE without WHERE clause will delete all rows")

    if _LEADING_UPDATE.search(sql) and not _WHERE.search(sql):
        warnings.append("UPDATE without WHERE clause will update all rows")

    return SqlValidationResult(valid=True, warnings=warnings)


def _check_quote_balance(sql: str) -> Optional[SqlValidationResult]:
    """Find an unterminated string or quoted identifier; None when balanced."""
    in_single = False
    in_double = False
    opened_at = 0
    i = 0
    length = len(sql)

    while i < length:
        char = sql[i]

        # Backslash-escaped character
        if i > 0 and sql[i - 1] == "\\":
            i += 1
            continue

        if char == "'" and not in_double:
            # Doubled quote inside a string is an escaped quote
            if in_single and i + 1 < length and sql[i + 1] == "'":
                i += 2
                continue
            in_single = not in_single
            if in_single:
                opened_at = i
        elif char == '"' and not in_single:
            if in_double and i + 1 < length and sql[i + 1] == '"':
                i += 2
                continue
            in_double = not in_double
            if in_double:
                opened_at = i

        i += 1

    if in_single:
        return SqlValidationResult(
            valid=False, error="Unclosed single quote", position=position_of(sql, opened_at)
        )
    if in_double:
        return SqlValidationResult(
            valid=False, error="Unclosed double quote", position=position_of(sql, opened_at)
        )
    return None


def _check_parentheses_balance(sql: str) -> Optional[SqlValidationResult]:
    """Find an unclosed ``(`` or a stray ``)`` outside quotes; None when balanced."""
    depth = 0
    in_single = False
    in_double = False
    first_open = 0
    i = 0
    length = len(sql)

    while i < length:
        char = sql[i]

        if i > 0 and sql[i - 1] == "\\":
            i += 1
            continue

        if char == "'" and not in_double:
            if i + 1 < length and sql[i + 1] == "'":
                i += 2
                continue
            in_single = not in_single
        elif char == '"' and not in_single:
            if i + 1 < length and sql[i + 1] == '"':
                i += 2
                continue
            in_double = not in_double
        elif not in_single and not in_double:
            if char == "(":
                if depth == 0:
                    first_open = i
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0:
                    return SqlValidationResult(
                        valid=False,
                        error="Unexpected closing parenthesis",
                        position=position_of(sql, i),
                    )

        i += 1

    if depth > 0:
        return SqlValidationResult(
            valid=False, error="Unclosed parenthesis", position=position_of(sql, first_open)
        )
    return None


def is_read_only_query(sql: str) -> bool:
    """
    Check whether a statement can only read data.

    SELECT (without INTO), EXPLAIN, SHOW and DESCRIBE/DESC are read-only. A
    WITH statement is judged by the statement that follows its CTE list.
    """
    upper = sql.strip().upper()

    if upper.startswith("WITH"):
        main = _strip_cte(sql)
        return main is not None and is_read_only_query(main)

    if upper.startswith("EXPLAIN"):
        return True

    if upper.startswith("SELECT"):
        return not _SELECT_INTO.search(sql)

    if upper.startswith("SHOW"):
        return True

    # DESC also covers DESCRIBE
    if upper.startswith("DESC"):
        return True

    return False


def _strip_cte(sql: str) -> Optional[str]:
    """
    Return the main statement of a WITH query.

    The main statement starts at the first SELECT/INSERT/UPDATE/DELETE
    outside parentheses and quotes, so statements inside CTE bodies are
    skipped.
    """
    depth = 0
    quote: Optional[str] = None
    start = sql.upper().find("WITH") + len("WITH")

    for i in range(start, len(sql)):
        char = sql[i]
        if quote:
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and not (sql[i - 1].isalnum() or sql[i - 1] == "_"):
            if _MAIN_STATEMENT.match(sql, i):
                return sql[i:]
    return None


def detect_dangerous_operations(sql: str) -> List[str]:
    """
    List the dangerous operations a statement contains.

    Returns keyword tags in DANGEROUS_KEYWORDS order, followed by
    ``DELETE_ALL`` / ``UPDATE_ALL`` for statements without a WHERE clause.
    """
    detected = [keyword for keyword, pattern in _KEYWORD_PATTERNS.items() if pattern.search(sql)]

    if _DELETE_FROM.search(sql) and not _WHERE.search(sql):
        detected.append("DELETE_ALL")

    if _UPDATE_SET.search(sql) and not _WHERE.search(sql):
        detected.append("UPDATE_ALL")

    return detected
