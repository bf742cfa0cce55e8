"""Cassandra adapter for the query compiler."""

from query_compiler.adapters.cassandra.query_translator import (
    CassandraQueryTranslator,
    build_cassandra_filter,
    get_cassandra_supported_operators,
    needs_allow_filtering,
    validate_cassandra_filters,
)

__all__ = [
    "CassandraQueryTranslator",
    "build_cassandra_filter",
    "get_cassandra_supported_operators",
    "needs_allow_filtering",
    "validate_cassandra_filters",
]
