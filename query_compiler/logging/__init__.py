"""Logging infrastructure for the query compiler."""

from query_compiler.logging.logger import JsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "JsonFormatter",
]
