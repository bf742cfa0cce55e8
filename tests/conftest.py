"""Shared fixtures for the query compiler test suite."""

import logging

import pytest

from query_compiler.config import BetweenPolicy, CompilerSettings

_ENV_VARS = (
    "QUERY_COMPILER_LOG_LEVEL",
    "QUERY_COMPILER_LOG_JSON",
    "QUERY_COMPILER_BETWEEN_POLICY",
    "QUERY_COMPILER_ESCAPE_LIKE",
    "QUERY_COMPILER_ES_DEFAULT_SIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep compiler settings independent of the developer's shell."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return CompilerSettings()


@pytest.fixture
def strict_settings():
    return CompilerSettings(between_policy=BetweenPolicy.RAISE)


@pytest.fixture
def skip_settings():
    return CompilerSettings(between_policy=BetweenPolicy.SKIP)


@pytest.fixture
def restore_package_logger():
    """Undo setup_logging so caplog keeps seeing package records."""
    logger = logging.getLogger("query_compiler")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def make_filter(column, operator, value=None, value2=None, filter_id="1"):
    condition = {"id": filter_id, "columnName": column, "operator": operator, "value": value}
    if value2 is not None:
        condition["value2"] = value2
    return condition
