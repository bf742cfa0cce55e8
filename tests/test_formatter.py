"""Tests for SQL formatting helpers."""

from query_compiler.sql import (
    format_sql,
    has_multiple_statements,
    minify_sql,
    split_statements,
)


class TestFormatSql:
    def test_pretty(self):
        formatted = format_sql("select id, name from users where id = 1")
        assert formatted.startswith("SELECT")
        assert "\n" in formatted
        assert "FROM users" in formatted

    def test_compact(self):
        assert format_sql("select a from t", pretty=False) == "SELECT a FROM t"

    def test_multiple_statements(self):
        assert format_sql("select 1; select 2", pretty=False) == "SELECT 1;\n\nSELECT 2"

    def test_unknown_dialect_falls_back(self):
        assert format_sql("select 1", dialect="nosuchdb", pretty=False) == "SELECT 1"

    def test_unparseable_input_is_returned(self):
        sql = "SELECT 'unterminated"
        assert format_sql(sql) == sql


class TestMinifySql:
    def test_strips_comments_and_whitespace(self):
        sql = "SELECT a , b\n-- comment\nFROM t /* note */ WHERE f( 1 )"
        assert minify_sql(sql) == "SELECT a,b FROM t WHERE f(1)"


class TestStatementSplitting:
    def test_split(self):
        sql = "SELECT ';'; SELECT 2 -- a;b\n; /* ; */ SELECT 3"
        assert split_statements(sql) == ["SELECT ';'", "SELECT 2 -- a;b", "/* ; */ SELECT 3"]

    def test_doubled_quotes(self):
        assert split_statements("SELECT 'a'';b'; SELECT 2") == ["SELECT 'a'';b'", "SELECT 2"]

    def test_empty_statements_dropped(self):
        assert split_statements(" ; ;SELECT 1;; ") == ["SELECT 1"]

    def test_has_multiple_statements(self):
        assert has_multiple_statements("SELECT 1; SELECT 2") is True
        assert has_multiple_statements("SELECT 1;") is False
        assert has_multiple_statements("SELECT ';' -- ; x") is False
