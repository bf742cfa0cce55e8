"""
SQL keyword registry, grouped by category for editor highlighting.
"""

from typing import Dict, List

SQL_KEYWORDS: Dict[str, List[str]] = {
    "statements": [
        "SELECT", "INSERT", "UPDATE", "DELETE", "CREATE", "ALTER", "DROP",
        "TRUNCATE", "GRANT", "REVOKE", "BEGIN", "COMMIT", "ROLLBACK", "WITH",
        "EXPLAIN", "ANALYZE", "VACUUM", "MERGE", "UPSERT",
    ],
    "clauses": [
        "FROM", "WHERE", "AND", "OR", "NOT", "IN", "EXISTS", "BETWEEN",
        "LIKE", "ILIKE", "IS", "NULL", "TRUE", "FALSE", "AS", "ON", "USING",
        "JOIN", "LEFT", "RIGHT", "INNER", "OUTER", "CROSS", "FULL", "NATURAL",
        "GROUP", "BY", "HAVING", "ORDER", "ASC", "DESC", "NULLS", "FIRST", "LAST",
        "LIMIT", "OFFSET", "FETCH", "NEXT", "ROWS", "ONLY", "PERCENT",
        "UNION", "INTERSECT", "EXCEPT", "ALL", "DISTINCT",
        "INTO", "VALUES", "SET", "DEFAULT", "RETURNING",
        "CASE", "WHEN", "THEN", "ELSE", "END",
        "OVER", "PARTITION", "WINDOW", "RANGE", "PRECEDING", "FOLLOWING", "UNBOUNDED", "CURRENT", "ROW",
    ],
    "operators": [
        "=", "<>", "!=", "<", ">", "<=", ">=", "+", "-", "*", "/", "%",
        "||", "&&", "!", "~", "^", "&", "|", "::", "->", "->>", "#>", "#>>",
    ],
    "functions": [
        "COUNT", "SUM", "AVG", "MIN", "MAX", "COALESCE", "NULLIF", "GREATEST", "LEAST",
        "CAST", "CONVERT", "EXTRACT", "DATE_PART", "DATE_TRUNC",
        "UPPER", "LOWER", "TRIM", "LTRIM", "RTRIM", "LENGTH", "SUBSTRING", "REPLACE",
        "CONCAT", "CONCAT_WS", "STRING_AGG", "ARRAY_AGG", "JSON_AGG", "JSONB_AGG",
        "ROW_NUMBER", "RANK", "DENSE_RANK", "NTILE", "LAG", "LEAD", "FIRST_VALUE", "LAST_VALUE",
        "NOW", "CURRENT_DATE", "CURRENT_TIME", "CURRENT_TIMESTAMP",
        "ABS", "CEIL", "FLOOR", "ROUND", "TRUNC", "POWER", "SQRT", "MOD",
        "RANDOM", "GENERATE_SERIES", "UNNEST",
    ],
    "data_types": [
        "INT", "INTEGER", "SMALLINT", "BIGINT", "TINYINT",
        "DECIMAL", "NUMERIC", "REAL", "FLOAT", "DOUBLE", "PRECISION",
        "CHAR", "VARCHAR", "TEXT", "NCHAR", "NVARCHAR", "NTEXT",
        "DATE", "TIME", "TIMESTAMP", "DATETIME", "INTERVAL",
        "BOOLEAN", "BOOL", "BIT",
        "BINARY", "VARBINARY", "BLOB", "BYTEA",
        "JSON", "JSONB", "XML",
        "UUID", "SERIAL", "BIGSERIAL",
        "ARRAY", "ENUM", "POINT", "LINE", "POLYGON", "CIRCLE",
    ],
    "literals": ["NULL", "TRUE", "FALSE"],
}

# Word-like categories; operators are symbols and never match a word
_WORD_CATEGORIES = ("statements", "clauses", "functions", "data_types", "literals")

_KEYWORD_SET = frozenset(
    keyword for category in _WORD_CATEGORIES for keyword in SQL_KEYWORDS[category]
)


def get_sql_keywords() -> Dict[str, List[str]]:
    """Return a copy of the keyword registry."""
    return {category: list(words) for category, words in SQL_KEYWORDS.items()}


def is_sql_keyword(word: str) -> bool:
    """Case-insensitive keyword check (operators excluded)."""
    return word.upper() in _KEYWORD_SET
