"""
SQL formatting helpers: pretty-printing, minifying and statement splitting.
"""

import re
from typing import Dict, List

import sqlglot
from sqlglot.errors import SqlglotError

from query_compiler.logging import get_logger

logger = get_logger(__name__)

# Database type -> sqlglot dialect
DIALECT_MAP: Dict[str, str] = {
    "postgres": "postgres",
    "mysql": "mysql",
    "mariadb": "mysql",
    "sqlite": "sqlite",
    "sqlserver": "tsql",
    "bigquery": "bigquery",
    "redshift": "redshift",
    "spark": "spark",
    "trino": "trino",
}

_LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION_SPACING = re.compile(r"\s*([(),])\s*")
_SINGLE_QUOTED = re.compile(r"'[^']*'")
_DOUBLE_QUOTED = re.compile(r'"[^"]*"')


def format_sql(sql: str, dialect: str = "postgres", pretty: bool = True) -> str:
    """
    Format SQL for readability.

    Unknown dialects fall back to PostgreSQL. SQL that cannot be parsed is
    returned unchanged.

    Example:
        >>> print(format_sql("select * from users where id = 1"))
        SELECT
          *
        FROM users
        WHERE
          id = 1
    """
    read = DIALECT_MAP.get(dialect, "postgres")
    try:
        statements = sqlglot.transpile(sql, read=read, write=read, pretty=pretty)
    except SqlglotError as e:
        logger.debug("Could not format SQL, returning input: %s", e)
        return sql

    return ";\n\n".join(statements)


def minify_sql(sql: str) -> str:
    """Remove comments and collapse whitespace onto one line."""
    sql = _LINE_COMMENT.sub("", sql)
    sql = _BLOCK_COMMENT.sub("", sql)
    sql = _WHITESPACE.sub(" ", sql)
    sql = _PUNCTUATION_SPACING.sub(r"\1", sql)
    return sql.strip()


def has_multiple_statements(sql: str) -> bool:
    """Check for more than one non-empty statement, ignoring strings and comments."""
    cleaned = _SINGLE_QUOTED.sub('""', sql)
    cleaned = _DOUBLE_QUOTED.sub('""', cleaned)
    cleaned = _LINE_COMMENT.sub("", cleaned)
    cleaned = _BLOCK_COMMENT.sub("", cleaned)

    statements = [s for s in cleaned.split(";") if s.strip()]
    return len(statements) > 1


def split_statements(sql: str) -> List[str]:
    """
    Split SQL into individual statements.

    Semicolons inside strings, quoted identifiers and comments do not split.
    Statements are trimmed and empty ones dropped.
    """
    statements: List[str] = []
    current: List[str] = []
    quote = ""
    in_line_comment = False
    in_block_comment = False
    i = 0
    length = len(sql)

    def flush() -> None:
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while i < length:
        char = sql[i]
        next_char = sql[i + 1] if i + 1 < length else ""

        if not quote and not in_block_comment and char == "-" and next_char == "-":
            in_line_comment = True
        if in_line_comment and char == "\n":
            in_line_comment = False

        if not quote and not in_line_comment and char == "/" and next_char == "*":
            in_block_comment = True
        if in_block_comment and char == "*" and next_char == "/":
            in_block_comment = False
            current.append("*/")
            i += 2
            continue

        if not in_line_comment and not in_block_comment:
            if not quote and char in ("'", '"'):
                quote = char
            elif quote and char == quote:
                # Doubled quote is an escaped quote
                if next_char == quote:
                    current.append(char)
                    i += 1
                else:
                    quote = ""

        if not quote and not in_line_comment and not in_block_comment and char == ";":
            flush()
            i += 1
            continue

        current.append(char)
        i += 1

    flush()
    return statements
