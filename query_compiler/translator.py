"""
Translator dispatch.

Picks the backend translator for a database type so callers holding a
connection's type can compile filters without knowing which query language
comes out.
"""

from typing import Optional, Sequence, Union

from pydantic import BaseModel

from query_compiler.adapters.cassandra import CassandraQueryTranslator
from query_compiler.adapters.elasticsearch import ElasticsearchQueryTranslator
from query_compiler.adapters.mongodb import MongoQueryTranslator
from query_compiler.adapters.sql import SqlQueryTranslator
from query_compiler.config import CompilerSettings, get_settings
from query_compiler.core.exceptions import UnsupportedDatabaseError
from query_compiler.core.interfaces import IFilterTranslator
from query_compiler.core.models import (
    SQL_DATABASE_TYPES,
    ConditionInput,
    DatabaseType,
    LogicOperator,
)
from query_compiler.filters.validation import remove_empty_filters
from query_compiler.logging import get_logger

logger = get_logger(__name__)


def get_translator(
    db_type: Union[DatabaseType, str],
    settings: Optional[CompilerSettings] = None,
) -> IFilterTranslator:
    """
    Create the filter translator for a database type.

    Raises:
        UnsupportedDatabaseError: For unknown types and for Redis, which has
            no filter language
    """
    try:
        db_type = DatabaseType(db_type)
    except ValueError:
        raise UnsupportedDatabaseError(db_type, f"Unknown database type '{db_type}'")

    settings = settings or get_settings()

    if db_type in SQL_DATABASE_TYPES:
        return SqlQueryTranslator(db_type=db_type, settings=settings)
    elif db_type is DatabaseType.MONGODB:
        return MongoQueryTranslator(settings=settings)
    elif db_type is DatabaseType.ELASTICSEARCH:
        return ElasticsearchQueryTranslator(settings=settings)
    elif db_type is DatabaseType.CASSANDRA:
        return CassandraQueryTranslator(settings=settings)

    raise UnsupportedDatabaseError(db_type)


class FilterTranslator:
    """
    Coordinates filter translation for one database type.

    Wraps the backend translator and applies the shared pre-processing
    (dropping empty UI rows when asked to).
    """

    def __init__(
        self,
        db_type: Union[DatabaseType, str],
        drop_empty: bool = False,
        settings: Optional[CompilerSettings] = None,
    ):
        """
        Initialize filter translator.

        Args:
            db_type: Database type of the active connection
            drop_empty: Remove conditions without a meaningful value first
            settings: Compiler settings passed on to the backend translator
        """
        self.translator = get_translator(db_type, settings=settings)
        self.db_type = DatabaseType(db_type)
        self.drop_empty = drop_empty

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
    ) -> BaseModel:
        """
        Translate conditions with the backend translator.

        Returns:
            The backend's result model (SqlFilterResult, MongoFilterResult,
            ElasticsearchFilterResult or CassandraFilterResult)
        """
        if self.drop_empty:
            kept = remove_empty_filters(conditions)
            if len(kept) != len(conditions):
                logger.debug("Dropped %d empty filter(s)", len(conditions) - len(kept))
            conditions = kept

        return self.translator.translate(conditions, logic)
