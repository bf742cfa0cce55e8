"""
SQL dialect profiles.

Each SQL database differs in how it quotes identifiers, spells placeholders,
does case-insensitive matching and escapes LIKE wildcards. Those differences
live here as small value objects so the SQL translator can run one generic
compilation loop for every dialect.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

from query_compiler.core.exceptions import UnsupportedDatabaseError
from query_compiler.core.models import DatabaseType


class PlaceholderStyle(str, Enum):
    """How bind parameters are spelled in the SQL text."""

    POSITIONAL = "positional"  # $1, $2, $3 (PostgreSQL)
    QUESTION = "question"  # ?, ?, ? (MySQL, MariaDB, SQLite)
    NAMED = "named"  # @p0, @p1 (SQL Server)


class LikeEscapeStyle(str, Enum):
    """How literal %, _ and the escape character are protected in LIKE patterns."""

    BACKSLASH = "backslash"
    BRACKET = "bracket"


def quote_double(name: str) -> str:
    """Standard SQL identifier quoting (PostgreSQL, SQLite, CQL)."""
    return '"' + name.replace('"', '""') + '"'


def quote_backtick(name: str) -> str:
    """MySQL/MariaDB identifier quoting."""
    return "`" + name.replace("`", "``") + "`"


def quote_bracket(name: str) -> str:
    """SQL Server identifier quoting."""
    return "[" + name.replace("]", "]]") + "]"


def _unquote(quoted: str, opening: str, closing: str) -> str:
    if len(quoted) >= 2 and quoted.startswith(opening) and quoted.endswith(closing):
        return quoted[1:-1].replace(closing * 2, closing)
    return quoted


def _no_cast(column: str) -> str:
    return column


def _postgres_text_cast(column: str) -> str:
    return f"{column}::text"


def _sqlserver_text_cast(column: str) -> str:
    return f"CAST({column} AS NVARCHAR(MAX))"


@dataclass(frozen=True)
class DialectProfile:
    """
    Everything the SQL translator needs to know about one dialect.

    Attributes:
        db_type: Database this profile describes
        quote_identifier: Identifier quoting function
        placeholder_style: Placeholder spelling
        default_start_index: First placeholder number when none is given
        like_operator: Case-insensitive-where-possible LIKE operator
        not_like_operator: Negated LIKE operator
        text_cast: Wraps a quoted column so LIKE can run on non-text types
        like_escape: Wildcard escaping convention
        escape_clause: Suffix declaring the escape character (may be empty)
        quote_chars: Opening and closing identifier quote characters
    """

    db_type: DatabaseType
    quote_identifier: Callable[[str], str]
    placeholder_style: PlaceholderStyle
    default_start_index: int
    like_operator: str
    not_like_operator: str
    text_cast: Callable[[str], str]
    like_escape: LikeEscapeStyle
    escape_clause: str
    quote_chars: str

    def escape_like(self, value: str) -> str:
        """Escape LIKE wildcards so user input matches literally."""
        if self.like_escape is LikeEscapeStyle.BRACKET:
            return value.replace("[", "[[]").replace("%", "[%]").replace("_", "[_]")
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    def unquote_identifier(self, quoted: str) -> str:
        """Inverse of the default ``quote_identifier`` for this dialect."""
        return _unquote(quoted, self.quote_chars[0], self.quote_chars[1])


_BACKSLASH_ESCAPE = " ESCAPE '\\'"
# MySQL string literals treat backslash as an escape, so the escape character
# itself has to be written twice.
_MYSQL_BACKSLASH_ESCAPE = " ESCAPE '\\\\'"

POSTGRES_PROFILE = DialectProfile(
    db_type=DatabaseType.POSTGRES,
    quote_identifier=quote_double,
    placeholder_style=PlaceholderStyle.POSITIONAL,
    default_start_index=1,
    like_operator="ILIKE",
    not_like_operator="NOT ILIKE",
    text_cast=_postgres_text_cast,
    like_escape=LikeEscapeStyle.BACKSLASH,
    escape_clause=_BACKSLASH_ESCAPE,
    quote_chars='""',
)

MYSQL_PROFILE = DialectProfile(
    db_type=DatabaseType.MYSQL,
    quote_identifier=quote_backtick,
    placeholder_style=PlaceholderStyle.QUESTION,
    default_start_index=1,
    like_operator="LIKE",
    not_like_operator="NOT LIKE",
    text_cast=_no_cast,
    like_escape=LikeEscapeStyle.BACKSLASH,
    escape_clause=_MYSQL_BACKSLASH_ESCAPE,
    quote_chars="``",
)

MARIADB_PROFILE = DialectProfile(
    db_type=DatabaseType.MARIADB,
    quote_identifier=quote_backtick,
    placeholder_style=PlaceholderStyle.QUESTION,
    default_start_index=1,
    like_operator="LIKE",
    not_like_operator="NOT LIKE",
    text_cast=_no_cast,
    like_escape=LikeEscapeStyle.BACKSLASH,
    escape_clause=_MYSQL_BACKSLASH_ESCAPE,
    quote_chars="``",
)

SQLSERVER_PROFILE = DialectProfile(
    db_type=DatabaseType.SQLSERVER,
    quote_identifier=quote_bracket,
    placeholder_style=PlaceholderStyle.NAMED,
    default_start_index=0,
    like_operator="LIKE",
    not_like_operator="NOT LIKE",
    text_cast=_sqlserver_text_cast,
    like_escape=LikeEscapeStyle.BRACKET,
    escape_clause="",
    quote_chars="[]",
)

SQLITE_PROFILE = DialectProfile(
    db_type=DatabaseType.SQLITE,
    quote_identifier=quote_double,
    placeholder_style=PlaceholderStyle.QUESTION,
    default_start_index=1,
    like_operator="LIKE",
    not_like_operator="NOT LIKE",
    text_cast=_no_cast,
    like_escape=LikeEscapeStyle.BACKSLASH,
    escape_clause=_BACKSLASH_ESCAPE,
    quote_chars='""',
)

DIALECT_PROFILES: Dict[DatabaseType, DialectProfile] = {
    DatabaseType.POSTGRES: POSTGRES_PROFILE,
    DatabaseType.MYSQL: MYSQL_PROFILE,
    DatabaseType.MARIADB: MARIADB_PROFILE,
    DatabaseType.SQLSERVER: SQLSERVER_PROFILE,
    DatabaseType.SQLITE: SQLITE_PROFILE,
}


def get_dialect_profile(db_type: Union[DatabaseType, str]) -> DialectProfile:
    """
    Look up the profile for a SQL database type.

    Raises:
        UnsupportedDatabaseError: If the type is unknown or not a SQL database
    """
    try:
        key = db_type if isinstance(db_type, DatabaseType) else DatabaseType(db_type)
    except ValueError:
        raise UnsupportedDatabaseError(db_type, f"Unknown database type '{db_type}'")

    profile = DIALECT_PROFILES.get(key)
    if profile is None:
        raise UnsupportedDatabaseError(key, f"'{key.value}' is not a SQL database")
    return profile
