"""
Heuristic SQL statement parser.

Extracts enough structure from raw SQL to drive UI hints and execution
gates: statement type, referenced tables, projected columns and clause
flags. This is regex based, not a grammar; unusual SQL may yield partial
table or column lists, never an exception.
"""

import re
from typing import List, Optional

from query_compiler.core.models import ParsedSqlStatement, SqlStatementType

# Prefix classification order matters: first match wins
_STATEMENT_PREFIXES = [
    SqlStatementType.SELECT,
    SqlStatementType.INSERT,
    SqlStatementType.UPDATE,
    SqlStatementType.DELETE,
    SqlStatementType.CREATE,
    SqlStatementType.ALTER,
    SqlStatementType.DROP,
    SqlStatementType.TRUNCATE,
    SqlStatementType.GRANT,
    SqlStatementType.REVOKE,
    SqlStatementType.BEGIN,
    SqlStatementType.COMMIT,
    SqlStatementType.ROLLBACK,
    SqlStatementType.WITH,
    SqlStatementType.EXPLAIN,
]

MODIFYING_STATEMENTS = frozenset(
    {
        SqlStatementType.INSERT,
        SqlStatementType.UPDATE,
        SqlStatementType.DELETE,
        SqlStatementType.CREATE,
        SqlStatementType.ALTER,
        SqlStatementType.DROP,
        SqlStatementType.TRUNCATE,
    }
)

_WHITESPACE = re.compile(r"\s+")
_SINGLE_QUOTED = re.compile(r"'[^']*'")

_FROM_LIST = re.compile(r"\bFROM\s+([^,\s]+(?:\s*,\s*[^,\s]+)*)", re.IGNORECASE)
_LIST_SEPARATOR = re.compile(r"\s*,\s*")
_JOIN_TABLE = re.compile(r"\bJOIN\s+(\S+)", re.IGNORECASE)
_INSERT_TABLE = re.compile(r"\bINSERT\s+INTO\s+(\S+)", re.IGNORECASE)
_UPDATE_TABLE = re.compile(r"\bUPDATE\s+(\S+)", re.IGNORECASE)
_DELETE_TABLE = re.compile(r"\bDELETE\s+FROM\s+(\S+)", re.IGNORECASE)
_TABLE_ALIAS = re.compile(r"\s+(?:AS\s+)?\w+$", re.IGNORECASE)
_IDENTIFIER_QUOTES = re.compile(r'["`\[\]]')

_SELECT_LIST = re.compile(r"\bSELECT\s+(.*?)\s+FROM\b", re.IGNORECASE | re.DOTALL)
_DISTINCT = re.compile(r"^\s*DISTINCT\s+", re.IGNORECASE)
_COLUMN_ALIAS = re.compile(r"""\s+(?:AS\s+)?["'`\[]?(\w+)["'`\]]?\s*$""", re.IGNORECASE)
_QUALIFIED_COLUMN = re.compile(r"""\.["'`\[]?(\w+)["'`\]]?\s*$""")
_SIMPLE_COLUMN = re.compile(r"""^["'`\[]?(\w+)["'`\]]?$""")

_HAS_WHERE = re.compile(r"\bWHERE\b", re.IGNORECASE)
_HAS_LIMIT = re.compile(r"\bLIMIT\b|\bFETCH\s+(?:FIRST|NEXT)\b", re.IGNORECASE)
_HAS_ORDER_BY = re.compile(r"\bORDER\s+BY\b", re.IGNORECASE)


def normalize_whitespace(sql: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return _WHITESPACE.sub(" ", sql).strip()


def detect_statement_type(sql: str) -> SqlStatementType:
    upper = sql.strip().upper()
    for statement_type in _STATEMENT_PREFIXES:
        if upper.startswith(statement_type.value):
            return statement_type
    return SqlStatementType.UNKNOWN


def parse_sql(sql: str) -> ParsedSqlStatement:
    """
    Parse SQL to extract metadata.

    Args:
        sql: Raw SQL text

    Returns:
        ParsedSqlStatement; ``raw_sql`` keeps the input untouched

    Example:
        >>> parsed = parse_sql("SELECT name, age FROM users WHERE id = 1")
        >>> parsed.type, parsed.tables, parsed.columns, parsed.has_where
        (<SqlStatementType.SELECT: 'SELECT'>, ['users'], ['name', 'age'], True)
    """
    normalized = normalize_whitespace(sql)
    statement_type = detect_statement_type(normalized)

    return ParsedSqlStatement(
        type=statement_type,
        tables=extract_tables(normalized, statement_type),
        columns=extract_columns(normalized, statement_type),
        has_where=bool(_HAS_WHERE.search(normalized)),
        has_limit=bool(_HAS_LIMIT.search(normalized)),
        has_order_by=bool(_HAS_ORDER_BY.search(normalized)),
        is_modifying=statement_type in MODIFYING_STATEMENTS,
        raw_sql=sql,
    )


def extract_tables(sql: str, statement_type: SqlStatementType) -> List[str]:
    """Table names referenced by FROM, JOIN and the statement's target, in order."""
    tables: List[str] = []

    def add(raw: str) -> None:
        name = _table_name(raw)
        if name and name not in tables:
            tables.append(name)

    # Blank out string literals; double quotes delimit identifiers
    cleaned = _SINGLE_QUOTED.sub("''", sql)

    from_match = _FROM_LIST.search(cleaned)
    if from_match:
        for item in _LIST_SEPARATOR.split(from_match.group(1)):
            add(item)

    for match in _JOIN_TABLE.finditer(cleaned):
        add(match.group(1))

    target_patterns = {
        SqlStatementType.INSERT: _INSERT_TABLE,
        SqlStatementType.UPDATE: _UPDATE_TABLE,
        SqlStatementType.DELETE: _DELETE_TABLE,
    }
    pattern = target_patterns.get(statement_type)
    if pattern is not None:
        match = pattern.search(cleaned)
        if match:
            add(match.group(1))

    return tables


def _table_name(raw: str) -> Optional[str]:
    name = _TABLE_ALIAS.sub("", raw).strip()

    # Subquery
    if name.startswith("("):
        return None

    name = _IDENTIFIER_QUOTES.sub("", name)
    return name.split(".")[-1] or None


def extract_columns(sql: str, statement_type: SqlStatementType) -> List[str]:
    """Projected column names of a SELECT; expressions without a name are omitted."""
    if statement_type is not SqlStatementType.SELECT:
        return []

    match = _SELECT_LIST.search(sql)
    if not match:
        return []

    select_list = match.group(1)
    if select_list.strip() == "*":
        return ["*"]

    columns: List[str] = []
    for part in split_select_list(select_list):
        column = _column_name(part.strip())
        if column and column not in columns:
            columns.append(column)
    return columns


def split_select_list(select_list: str) -> List[str]:
    """Split a projection list on commas outside parentheses."""
    parts: List[str] = []
    current: List[str] = []
    depth = 0

    for char in select_list:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1

        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    tail = "".join(current)
    if tail.strip():
        parts.append(tail)
    return parts


def _column_name(expr: str) -> Optional[str]:
    cleaned = _DISTINCT.sub("", expr).strip()

    for pattern in (_COLUMN_ALIAS, _QUALIFIED_COLUMN):
        match = pattern.search(cleaned)
        if match:
            return match.group(1)

    match = _SIMPLE_COLUMN.match(cleaned)
    if match:
        return match.group(1)

    return None
