"""Tests for the SQL dialect translator."""

import pytest

from query_compiler.adapters.sql import (
    DIALECT_PROFILES,
    SqlQueryTranslator,
    build_sql_filter,
    build_sql_filter_named,
    build_where_clause,
    get_dialect_profile,
)
from query_compiler.config import CompilerSettings
from query_compiler.core.exceptions import FilterCompileError, UnsupportedDatabaseError
from query_compiler.core.models import DatabaseType, FilterCondition, LogicOperator
from tests.conftest import make_filter

POSTGRES_ESCAPE = " ESCAPE '\\'"


class TestPostgres:
    """Positional $N placeholders, ILIKE on a text cast."""

    def test_empty_input(self, settings):
        result = build_sql_filter([], "AND", db_type="postgres", settings=settings)
        assert result.where_clause == ""
        assert result.params == []

    def test_greater_than(self, settings):
        result = build_sql_filter(
            [make_filter("age", "greater_than", 18)], "AND", db_type="postgres", settings=settings
        )
        assert result.where_clause == '"age" > $1'
        assert result.params == [18]

    @pytest.mark.parametrize(
        "operator,clause,param",
        [
            ("contains", '"name"::text ILIKE $1', "%jo%"),
            ("not_contains", '"name"::text NOT ILIKE $1', "%jo%"),
            ("starts_with", '"name"::text ILIKE $1', "jo%"),
            ("ends_with", '"name"::text ILIKE $1', "%jo"),
        ],
    )
    def test_text_operators(self, settings, operator, clause, param):
        result = build_sql_filter([make_filter("name", operator, "jo")], settings=settings)
        assert result.where_clause == clause
        assert result.params == [param]

    @pytest.mark.parametrize(
        "operator,sql_operator",
        [
            ("equals", "="),
            ("not_equals", "!="),
            ("greater_than", ">"),
            ("less_than", "<"),
            ("greater_or_equal", ">="),
            ("less_or_equal", "<="),
        ],
    )
    def test_comparisons(self, settings, operator, sql_operator):
        result = build_sql_filter([make_filter("age", operator, 5)], settings=settings)
        assert result.where_clause == f'"age" {sql_operator} $1'
        assert result.params == [5]

    def test_null_checks_bind_nothing(self, settings):
        result = build_sql_filter(
            [make_filter("deleted_at", "is_null"), make_filter("created_at", "is_not_null")],
            settings=settings,
        )
        assert result.where_clause == '"deleted_at" IS NULL AND "created_at" IS NOT NULL'
        assert result.params == []

    def test_between(self, settings):
        result = build_sql_filter([make_filter("price", "between", 10, 100)], settings=settings)
        assert result.where_clause == '"price" BETWEEN $1 AND $2'
        assert result.params == [10, 100]

    def test_in_from_string(self, settings):
        result = build_sql_filter([make_filter("status", "in", "a, b,,c")], settings=settings)
        assert result.where_clause == '"status" IN ($1, $2, $3)'
        assert result.params == ["a", "b", "c"]

    def test_in_keeps_value_types(self, settings):
        result = build_sql_filter([make_filter("id", "in", [1, 2])], settings=settings)
        assert result.params == [1, 2]

    def test_empty_in_is_skipped(self, settings):
        result = build_sql_filter([make_filter("status", "in", " , ")], settings=settings)
        assert result.where_clause == ""
        assert result.params == []

    def test_placeholders_run_across_conditions(self, settings):
        result = build_sql_filter(
            [
                make_filter("age", "greater_than", 18),
                make_filter("name", "contains", "jo"),
                make_filter("status", "in", [1, 2]),
            ],
            settings=settings,
        )
        assert result.where_clause == '"age" > $1 AND "name"::text ILIKE $2 AND "status" IN ($3, $4)'
        assert result.params == [18, "%jo%", 1, 2]

    def test_or_logic(self, settings):
        result = build_sql_filter(
            [make_filter("a", "equals", 1), make_filter("b", "equals", 2)],
            LogicOperator.OR,
            settings=settings,
        )
        assert result.where_clause == '"a" = $1 OR "b" = $2'

    def test_start_index(self, settings):
        result = build_sql_filter([make_filter("a", "equals", 1)], start_index=5, settings=settings)
        assert result.where_clause == '"a" = $5'


class TestOtherDialects:
    """Quoting, placeholders and LIKE spelling per dialect."""

    def test_mysql_contains(self, settings):
        result = build_sql_filter(
            [make_filter("name", "contains", "john")], "AND", db_type="mysql", settings=settings
        )
        assert result.where_clause == "`name` LIKE ?"
        assert result.params == ["%john%"]

    def test_mariadb_matches_mysql(self, settings):
        result = build_sql_filter(
            [make_filter("a", "equals", 1), make_filter("b", "not_contains", "x")],
            db_type=DatabaseType.MARIADB,
            settings=settings,
        )
        assert result.where_clause == "`a` = ? AND `b` NOT LIKE ?"
        assert result.params == [1, "%x%"]

    def test_sqlserver(self, settings):
        result = build_sql_filter(
            [make_filter("age", "equals", 3), make_filter("name", "contains", "jo")],
            db_type="sqlserver",
            settings=settings,
        )
        assert result.where_clause == "[age] = @p0 AND CAST([name] AS NVARCHAR(MAX)) LIKE @p1"
        assert result.params == [3, "%jo%"]

    def test_sqlite(self, settings):
        result = build_sql_filter(
            [make_filter("name", "ends_with", "son")], db_type="sqlite", settings=settings
        )
        assert result.where_clause == '"name" LIKE ?'
        assert result.params == ["%son"]

    def test_custom_quote_identifier(self, settings):
        result = build_sql_filter(
            [make_filter("age", "greater_than", 1)],
            quote_identifier=lambda name: name.upper(),
            settings=settings,
        )
        assert result.where_clause == "AGE > $1"

    @pytest.mark.parametrize(
        "db_type,column,quoted",
        [
            ("postgres", 'user"name', '"user""name"'),
            ("sqlite", 'user"name', '"user""name"'),
            ("mysql", "column`name", "`column``name`"),
            ("mariadb", "column`name", "`column``name`"),
            ("sqlserver", "column]name", "[column]]name]"),
        ],
    )
    def test_identifier_quoting_round_trip(self, settings, db_type, column, quoted):
        result = build_sql_filter([make_filter(column, "is_null")], db_type=db_type, settings=settings)
        assert result.where_clause == f"{quoted} IS NULL"
        profile = get_dialect_profile(db_type)
        assert profile.unquote_identifier(quoted) == column

    @pytest.mark.parametrize("db_type", list(DIALECT_PROFILES))
    def test_parameter_count_matches_placeholders(self, settings, db_type):
        conditions = [
            make_filter("a", "equals", 1),
            make_filter("b", "not_equals", 2),
            make_filter("c", "less_or_equal", 3),
            make_filter("d", "is_null"),
            make_filter("e", "between", 1, 9),
            make_filter("f", "in", "x,y,z"),
        ]
        result = build_sql_filter(conditions, db_type=db_type, settings=settings)
        assert len(result.params) == 1 + 1 + 1 + 2 + 3

    def test_non_sql_database_is_rejected(self, settings):
        with pytest.raises(UnsupportedDatabaseError):
            build_sql_filter([make_filter("a", "equals", 1)], db_type="mongodb", settings=settings)

    def test_unknown_database_is_rejected(self, settings):
        with pytest.raises(UnsupportedDatabaseError):
            build_sql_filter([], db_type="oracle", settings=settings)


class TestLikeEscaping:
    """Optional wildcard escaping of user input."""

    def test_off_by_default(self, settings):
        result = build_sql_filter([make_filter("name", "contains", "50%_off")], settings=settings)
        assert result.where_clause == '"name"::text ILIKE $1'
        assert result.params == ["%50%_off%"]

    def test_postgres_backslash_escape(self, settings):
        result = build_sql_filter(
            [make_filter("name", "contains", "50%_off")], escape_like=True, settings=settings
        )
        assert result.where_clause == '"name"::text ILIKE $1' + POSTGRES_ESCAPE
        assert result.params == ["%50\\%\\_off%"]

    def test_backslash_is_escaped_first(self, settings):
        result = build_sql_filter(
            [make_filter("path", "starts_with", "C:\\")], escape_like=True, settings=settings
        )
        assert result.params == ["C:\\\\%"]

    def test_mysql_escape_clause(self, settings):
        result = build_sql_filter(
            [make_filter("name", "contains", "a_b")], db_type="mysql", escape_like=True, settings=settings
        )
        assert result.where_clause == "`name` LIKE ? ESCAPE '\\\\'"
        assert result.params == ["%a\\_b%"]

    def test_sqlserver_bracket_escape(self, settings):
        result = build_sql_filter(
            [make_filter("name", "contains", "50%_[x]")],
            db_type="sqlserver",
            escape_like=True,
            settings=settings,
        )
        assert result.where_clause == "CAST([name] AS NVARCHAR(MAX)) LIKE @p0"
        assert result.params == ["%50[%][_][[]x]%"]

    def test_enabled_through_settings(self):
        result = build_sql_filter(
            [make_filter("name", "ends_with", "_x")], settings=CompilerSettings(escape_like=True)
        )
        assert result.params == ["%\\_x"]


class TestBetweenWithoutSecondValue:
    """Missing value2 handling on both SQL paths."""

    def test_positional_path_skips(self, settings):
        result = build_sql_filter(
            [make_filter("price", "between", 10), make_filter("age", "equals", 3)], settings=settings
        )
        assert result.where_clause == '"age" = $1'
        assert result.params == [3]
        assert [d.code for d in result.diagnostics] == ["missing_second_value"]
        assert result.diagnostics[0].column_name == "price"

    def test_positional_path_strict(self, settings):
        with pytest.raises(FilterCompileError) as exc_info:
            build_sql_filter([make_filter("price", "between", 10)], strict=True, settings=settings)
        assert 'column "price"' in str(exc_info.value)

    def test_positional_path_raise_policy(self, strict_settings):
        with pytest.raises(FilterCompileError):
            build_sql_filter([make_filter("price", "between", 10)], settings=strict_settings)

    def test_named_path_raises(self, settings):
        with pytest.raises(FilterCompileError) as exc_info:
            build_sql_filter_named([make_filter("price", "between", 10)], settings=settings)
        assert exc_info.value.column_name == "price"
        assert exc_info.value.to_dict()["error_code"] == "VALIDATION_002"

    def test_named_path_skip_policy(self, skip_settings):
        result = build_sql_filter_named([make_filter("price", "between", 10)], settings=skip_settings)
        assert result.where_clause == ""
        assert result.params == {}

    def test_named_path_not_strict(self, settings):
        result = build_sql_filter_named(
            [make_filter("price", "between", 10), make_filter("a", "equals", 1)],
            strict=False,
            settings=settings,
        )
        assert result.where_clause == "[a] = @p0"


class TestNamedParameters:
    """@pN parameters in a name -> value map."""

    def test_default_sqlserver(self, settings):
        result = build_sql_filter_named(
            [make_filter("age", "greater_than", 18), make_filter("name", "contains", "jo")],
            settings=settings,
        )
        assert result.where_clause == "[age] > @p0 AND CAST([name] AS NVARCHAR(MAX)) LIKE @p1"
        assert result.params == {"p0": 18, "p1": "%jo%"}

    def test_between_and_in(self, settings):
        result = build_sql_filter_named(
            [make_filter("price", "between", 1, 2), make_filter("s", "in", ["a", "b"])],
            "OR",
            settings=settings,
        )
        assert result.where_clause == "[price] BETWEEN @p0 AND @p1 OR [s] IN (@p2, @p3)"
        assert result.params == {"p0": 1, "p1": 2, "p2": "a", "p3": "b"}

    def test_start_index(self, settings):
        result = build_sql_filter_named([make_filter("a", "equals", 1)], start_index=3, settings=settings)
        assert result.where_clause == "[a] = @p3"
        assert result.params == {"p3": 1}

    def test_other_dialect_quoting(self, settings):
        result = build_sql_filter_named(
            [make_filter("age", "equals", 1)], db_type="postgres", settings=settings
        )
        assert result.where_clause == '"age" = @p0'

    def test_other_dialect_keeps_its_like_operator(self, settings):
        result = build_sql_filter_named(
            [make_filter("name", "contains", "jo")], db_type="postgres", settings=settings
        )
        assert result.where_clause == '"name"::text ILIKE @p0'
        assert result.params == {"p0": "%jo%"}

    def test_empty_input(self, settings):
        result = build_sql_filter_named([], settings=settings)
        assert result.where_clause == ""
        assert result.params == {}


class TestTolerance:
    """Half-filled UI rows are skipped without errors."""

    def test_unknown_operator_is_skipped_silently(self, settings):
        result = build_sql_filter(
            [make_filter("a", "regex", "x"), make_filter("b", "equals", 1)], settings=settings
        )
        assert result.where_clause == '"b" = $1'
        assert result.diagnostics == []

    def test_rows_without_column_or_operator(self, settings):
        result = build_sql_filter(
            [
                {"id": "1", "columnName": "", "operator": "equals", "value": 1},
                {"id": "2", "columnName": "a", "operator": "", "value": 1},
            ],
            settings=settings,
        )
        assert result.where_clause == ""

    def test_accepts_models(self, settings):
        condition = FilterCondition(id="1", column_name="a", operator="equals", value=True)
        result = SqlQueryTranslator("sqlite", settings=settings).translate([condition])
        assert result.where_clause == '"a" = ?'
        assert result.params == [True]

    def test_build_where_clause(self):
        result = build_where_clause([make_filter("a", "equals", 1)], "AND", "mysql")
        assert result.where_clause == "`a` = ?"
