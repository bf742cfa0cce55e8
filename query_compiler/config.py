"""
Compiler settings.

Settings are read from the environment each time ``get_settings()`` is
called. A ``.env`` file is only loaded on request (``load_env_file=True``, or
``configure_logging()`` at program start). Every translator also accepts an
explicit ``CompilerSettings`` so callers never depend on process state.

Environment variables:
- QUERY_COMPILER_LOG_LEVEL: level used by ``configure_logging`` (default WARNING)
- QUERY_COMPILER_LOG_JSON: emit JSON log lines (default false)
- QUERY_COMPILER_BETWEEN_POLICY: legacy | skip | raise (default legacy)
- QUERY_COMPILER_ESCAPE_LIKE: escape LIKE wildcards in SQL patterns (default false)
- QUERY_COMPILER_ES_DEFAULT_SIZE: default Elasticsearch page size (default 100)
"""

import os
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from query_compiler.core.exceptions import ConfigurationError
from query_compiler.logging import setup_logging

ENV_PREFIX = "QUERY_COMPILER_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class BetweenPolicy(str, Enum):
    """What to do with a BETWEEN condition that has no second value."""

    # Positional/question-mark SQL and the document translators skip it,
    # the named-parameter SQL path raises.
    LEGACY = "legacy"
    SKIP = "skip"
    RAISE = "raise"


class CompilerSettings(BaseModel):
    """Configuration shared by every translator."""

    log_level: str = "WARNING"
    log_json: bool = False
    between_policy: BetweenPolicy = BetweenPolicy.LEGACY
    escape_like: bool = False
    es_default_size: int = Field(default=100, ge=0)

    def strict_between(self, legacy_default: bool) -> bool:
        """
        Resolve whether a missing BETWEEN value2 should raise.

        Args:
            legacy_default: Behaviour of the calling path under the legacy policy
        """
        if self.between_policy is BetweenPolicy.RAISE:
            return True
        if self.between_policy is BetweenPolicy.SKIP:
            return False
        return legacy_default


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def get_settings(load_env_file: bool = False) -> CompilerSettings:
    """
    Build settings from environment variables.

    Args:
        load_env_file: Seed the environment from a ``.env`` file first.
            Only application entry points should ask for this; translators
            read the environment as it is.

    Raises:
        ConfigurationError: If a variable holds an unusable value
    """
    if load_env_file:
        load_dotenv()

    raw = {
        "log_level": _env("LOG_LEVEL"),
        "log_json": _env("LOG_JSON"),
        "between_policy": _env("BETWEEN_POLICY"),
        "escape_like": _env("ESCAPE_LIKE"),
        "es_default_size": _env("ES_DEFAULT_SIZE"),
    }
    values = {k: v for k, v in raw.items() if v is not None and v != ""}

    for flag in ("log_json", "escape_like"):
        if flag in values:
            values[flag] = values[flag].strip().lower() in _TRUE_VALUES
    if "between_policy" in values:
        values["between_policy"] = values["between_policy"].strip().lower()

    try:
        return CompilerSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid query compiler configuration: {e}",
            details={"values": values},
        ) from e


def configure_logging(settings: Optional[CompilerSettings] = None) -> None:
    """
    Apply the logging part of the settings.

    Meant to be called once at program start. Without explicit settings the
    environment is seeded from a ``.env`` file first.
    """
    settings = settings or get_settings(load_env_file=True)
    setup_logging(level=settings.log_level, json_format=settings.log_json)
