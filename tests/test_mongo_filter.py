"""Tests for the MongoDB translator."""

import pytest

from query_compiler.adapters.mongodb import (
    MongoQueryTranslator,
    build_mongo_filter,
    build_mongo_match_stage,
    escape_regex,
)
from query_compiler.core.exceptions import FilterCompileError
from tests.conftest import make_filter


class TestMongoOperators:
    """Operator to query operator mapping."""

    @pytest.mark.parametrize(
        "operator,expected",
        [
            ("equals", {"age": {"$eq": 5}}),
            ("not_equals", {"age": {"$ne": 5}}),
            ("greater_than", {"age": {"$gt": 5}}),
            ("less_than", {"age": {"$lt": 5}}),
            ("greater_or_equal", {"age": {"$gte": 5}}),
            ("less_or_equal", {"age": {"$lte": 5}}),
        ],
    )
    def test_comparisons(self, settings, operator, expected):
        assert build_mongo_filter([make_filter("age", operator, 5)], settings=settings).filter == expected

    def test_contains(self, settings):
        result = build_mongo_filter([make_filter("name", "contains", "jo")], settings=settings)
        assert result.filter == {"name": {"$regex": "jo", "$options": "i"}}

    def test_not_contains(self, settings):
        result = build_mongo_filter([make_filter("name", "not_contains", "jo")], settings=settings)
        assert result.filter == {"name": {"$not": {"$regex": "jo", "$options": "i"}}}

    def test_anchored_regexes(self, settings):
        starts = build_mongo_filter([make_filter("name", "starts_with", "jo")], settings=settings)
        ends = build_mongo_filter([make_filter("name", "ends_with", "jo")], settings=settings)
        assert starts.filter == {"name": {"$regex": "^jo", "$options": "i"}}
        assert ends.filter == {"name": {"$regex": "jo$", "$options": "i"}}

    def test_regex_input_is_escaped(self, settings):
        result = build_mongo_filter([make_filter("email", "contains", "a.b+c")], settings=settings)
        assert result.filter["email"]["$regex"] == "a\\.b\\+c"

    def test_null_checks(self, settings):
        assert build_mongo_filter([make_filter("x", "is_null")], settings=settings).filter == {
            "x": {"$eq": None}
        }
        assert build_mongo_filter([make_filter("x", "is_not_null")], settings=settings).filter == {
            "x": {"$ne": None}
        }

    def test_in(self, settings):
        result = build_mongo_filter([make_filter("status", "in", "a, b")], settings=settings)
        assert result.filter == {"status": {"$in": ["a", "b"]}}

    def test_in_keeps_types(self, settings):
        result = build_mongo_filter([make_filter("id", "in", [1, 2])], settings=settings)
        assert result.filter == {"id": {"$in": [1, 2]}}

    def test_between(self, settings):
        result = build_mongo_filter([make_filter("price", "between", 10, 100)], settings=settings)
        assert result.filter == {"price": {"$gte": 10, "$lte": 100}}


class TestMongoCombination:
    """Top-level $and/$or wrapping."""

    def test_empty_matches_everything(self, settings):
        result = build_mongo_filter([], settings=settings)
        assert result.filter == {}
        assert result.query == {}

    def test_single_condition_is_not_wrapped(self, settings):
        result = build_mongo_filter([make_filter("a", "equals", 1)], settings=settings)
        assert "$and" not in result.filter

    def test_and(self, settings):
        result = build_mongo_filter(
            [make_filter("a", "equals", 1), make_filter("b", "greater_than", 2)], settings=settings
        )
        assert result.filter == {"$and": [{"a": {"$eq": 1}}, {"b": {"$gt": 2}}]}

    def test_or(self, settings):
        result = build_mongo_filter(
            [make_filter("a", "equals", 1), make_filter("b", "equals", 2)], "OR", settings=settings
        )
        assert result.filter == {"$or": [{"a": {"$eq": 1}}, {"b": {"$eq": 2}}]}

    def test_unknown_operator_is_skipped(self, settings):
        result = build_mongo_filter(
            [make_filter("a", "bogus", 1), make_filter("b", "equals", 2)], settings=settings
        )
        assert result.filter == {"b": {"$eq": 2}}

    def test_match_stage(self, settings):
        stage = build_mongo_match_stage([make_filter("a", "equals", 1)], settings=settings)
        assert stage == {"$match": {"a": {"$eq": 1}}}

    def test_empty_match_stage(self, settings):
        assert build_mongo_match_stage([], settings=settings) == {"$match": {}}


class TestMongoBetweenWithoutSecondValue:
    """A BETWEEN without value2 is skipped unless strict."""

    def test_skipped_with_diagnostic(self, settings):
        result = build_mongo_filter([make_filter("price", "between", 10)], settings=settings)
        assert result.filter == {}
        assert result.diagnostics[0].code == "missing_second_value"

    def test_strict(self, settings):
        with pytest.raises(FilterCompileError):
            MongoQueryTranslator(settings=settings).translate(
                [make_filter("price", "between", 10)], strict=True
            )


def test_escape_regex_covers_metacharacters():
    assert escape_regex(".*+?^${}()|[]\\") == "\\.\\*\\+\\?\\^\\$\\{\\}\\(\\)\\|\\[\\]\\\\"
