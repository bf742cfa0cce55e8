"""Elasticsearch adapter for the query compiler."""

from query_compiler.adapters.elasticsearch.query_translator import (
    ElasticsearchQueryTranslator,
    build_elasticsearch_filter,
    build_elasticsearch_search_body,
    escape_wildcard,
)

__all__ = [
    "ElasticsearchQueryTranslator",
    "build_elasticsearch_filter",
    "build_elasticsearch_search_body",
    "escape_wildcard",
]
