"""
Abstract interfaces for filter translators and SQL analysers.

These protocols define the contract every backend translator implements so
that callers can dispatch on the active connection's database type without
knowing which query language is produced.
"""

from typing import List, Protocol, Sequence, Union

from pydantic import BaseModel

from query_compiler.core.models import (
    ConditionInput,
    LogicOperator,
    ParsedSqlStatement,
    SqlValidationResult,
)


class IFilterTranslator(Protocol):
    """
    Translate abstract filter conditions to a backend-specific query fragment.

    Implementations must be pure: no connection is opened, no state survives
    between calls, and the returned model is owned by the caller.
    """

    def translate(
        self,
        conditions: Sequence[ConditionInput],
        logic: Union[LogicOperator, str] = LogicOperator.AND,
    ) -> BaseModel:
        """
        Compile conditions into a query fragment.

        Args:
            conditions: Ordered filter conditions (models or plain mappings)
            logic: AND/OR joining the compiled conditions

        Returns:
            A result model (SqlFilterResult, MongoFilterResult, ...) carrying
            the fragment, its parameters and any diagnostics.
        """
        ...


class ISqlAnalyzer(Protocol):
    """
    Lightweight structural analysis of raw SQL text.

    The bundled implementation is regex based; a real tokenizer can be
    swapped in behind this interface without changing callers.
    """

    def parse(self, sql: str) -> ParsedSqlStatement:
        """Extract statement type, tables, columns and clause flags."""
        ...

    def validate(self, sql: str) -> SqlValidationResult:
        """Check quote/parenthesis balance and flag dangerous operations."""
        ...

    def is_read_only(self, sql: str) -> bool:
        """Return True when the statement cannot modify data."""
        ...

    def detect_dangerous_operations(self, sql: str) -> List[str]:
        """Return the ordered list of dangerous-operation tags."""
        ...
