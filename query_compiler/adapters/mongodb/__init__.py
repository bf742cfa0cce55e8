"""MongoDB adapter for the query compiler."""

from query_compiler.adapters.mongodb.query_translator import (
    MongoQueryTranslator,
    build_mongo_filter,
    build_mongo_match_stage,
    escape_regex,
)

__all__ = ["MongoQueryTranslator", "build_mongo_filter", "build_mongo_match_stage", "escape_regex"]
