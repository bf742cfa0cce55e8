"""Tests for database type dispatch."""

import pytest

from query_compiler import FilterPreset, FilterTranslator, get_translator
from query_compiler.adapters.cassandra import CassandraQueryTranslator
from query_compiler.adapters.elasticsearch import ElasticsearchQueryTranslator
from query_compiler.adapters.mongodb import MongoQueryTranslator
from query_compiler.adapters.sql import SqlQueryTranslator
from query_compiler.core.exceptions import UnsupportedDatabaseError
from query_compiler.core.models import (
    CassandraFilterResult,
    DatabaseType,
    ElasticsearchFilterResult,
    LogicOperator,
    MongoFilterResult,
    SqlFilterResult,
)
from tests.conftest import make_filter


class TestGetTranslator:
    @pytest.mark.parametrize(
        "db_type,translator_class",
        [
            ("postgres", SqlQueryTranslator),
            ("mysql", SqlQueryTranslator),
            ("mariadb", SqlQueryTranslator),
            ("sqlserver", SqlQueryTranslator),
            ("sqlite", SqlQueryTranslator),
            ("mongodb", MongoQueryTranslator),
            ("elasticsearch", ElasticsearchQueryTranslator),
            ("cassandra", CassandraQueryTranslator),
        ],
    )
    def test_mapping(self, settings, db_type, translator_class):
        assert isinstance(get_translator(db_type, settings=settings), translator_class)

    def test_accepts_enum(self, settings):
        assert isinstance(get_translator(DatabaseType.MONGODB, settings=settings), MongoQueryTranslator)

    def test_redis_has_no_translator(self, settings):
        with pytest.raises(UnsupportedDatabaseError) as exc_info:
            get_translator("redis", settings=settings)
        assert exc_info.value.db_type == "redis"

    def test_unknown_type(self, settings):
        with pytest.raises(UnsupportedDatabaseError, match="Unknown database type 'oracle'"):
            get_translator("oracle", settings=settings)


class TestFilterTranslator:
    CONDITIONS = [make_filter("age", "greater_than", 18)]

    @pytest.mark.parametrize(
        "db_type,result_class",
        [
            ("postgres", SqlFilterResult),
            ("mongodb", MongoFilterResult),
            ("elasticsearch", ElasticsearchFilterResult),
            ("cassandra", CassandraFilterResult),
        ],
    )
    def test_result_types(self, settings, db_type, result_class):
        result = FilterTranslator(db_type, settings=settings).translate(self.CONDITIONS)
        assert isinstance(result, result_class)

    def test_sql_placeholders_follow_dialect(self, settings):
        postgres = FilterTranslator("postgres", settings=settings).translate(self.CONDITIONS)
        sqlserver = FilterTranslator("sqlserver", settings=settings).translate(self.CONDITIONS)
        assert postgres.where_clause == '"age" > $1'
        assert sqlserver.where_clause == "[age] > @p0"

    def test_drop_empty(self, settings):
        conditions = [make_filter("name", "equals", ""), make_filter("age", "equals", 3, filter_id="2")]

        kept = FilterTranslator("postgres", drop_empty=True, settings=settings).translate(conditions)
        default = FilterTranslator("postgres", settings=settings).translate(conditions)

        assert kept.where_clause == '"age" = $1'
        assert kept.params == [3]
        assert default.params == ["", 3]

    def test_or_logic(self, settings):
        conditions = [make_filter("a", "equals", 1), make_filter("b", "equals", 2)]
        result = FilterTranslator("mongodb", settings=settings).translate(conditions, "OR")
        assert result.filter == {"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]}


class TestFilterPresets:
    """Saved presets compile like ad-hoc condition lists."""

    def test_compile_preset(self, settings):
        preset = FilterPreset.model_validate(
            {
                "name": "Adults or admins",
                "conditions": [
                    make_filter("age", "greater_or_equal", 18),
                    make_filter("role", "equals", "admin", filter_id="2"),
                ],
                "logicOperator": "OR",
            }
        )

        result = FilterTranslator("postgres", settings=settings).translate(
            preset.conditions, preset.logic_operator
        )

        assert preset.logic_operator is LogicOperator.OR
        assert result.where_clause == '"age" >= $1 OR "role" = $2'
        assert result.params == [18, "admin"]

    def test_defaults(self):
        preset = FilterPreset(name="Empty")
        assert preset.conditions == []
        assert preset.logic_operator is LogicOperator.AND
