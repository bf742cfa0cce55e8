"""
Exceptions raised by the query compiler.

Validation findings are returned to the caller, never raised. Exceptions are
reserved for contract violations (a condition that cannot be compiled under a
strict policy) and for asking a translator to handle a database it does not
know about.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Categorised error codes carried by every QueryCompilerError."""

    # Configuration errors (1xxx)
    CONFIG_INVALID = "CONFIG_001"

    # Validation errors (2xxx)
    INVALID_FILTER = "VALIDATION_001"
    MISSING_VALUE = "VALIDATION_002"

    # Compilation errors (3xxx)
    COMPILE_ERROR = "COMPILE_001"
    UNSUPPORTED_DATABASE = "COMPILE_002"


class QueryCompilerError(Exception):
    """
    Base exception for the query compiler.

    Attributes:
        message: Human readable message
        error_code: Error code from ErrorCode enum
        details: Additional structured context (column, operator, ...)
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.COMPILE_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
        }


class FilterCompileError(QueryCompilerError):
    """A filter condition cannot be compiled (e.g. BETWEEN without value2)."""

    def __init__(
        self,
        message: str,
        column_name: Optional[str] = None,
        operator: Optional[str] = None,
        filter_id: Optional[str] = None,
    ):
        super().__init__(
            message,
            error_code=ErrorCode.MISSING_VALUE,
            details={
                "column_name": column_name,
                "operator": operator,
                "filter_id": filter_id,
            },
        )
        self.column_name = column_name
        self.operator = operator
        self.filter_id = filter_id


class UnsupportedDatabaseError(QueryCompilerError):
    """No translator or SQL dialect exists for the requested database type."""

    def __init__(self, db_type: Any, reason: Optional[str] = None):
        db_name = getattr(db_type, "value", db_type)
        message = reason or f"No filter translator available for database type '{db_name}'"
        super().__init__(
            message,
            error_code=ErrorCode.UNSUPPORTED_DATABASE,
            details={"db_type": db_name},
        )
        self.db_type = db_name


class InvalidFilterError(QueryCompilerError):
    """Input could not be coerced into a FilterCondition."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code=ErrorCode.INVALID_FILTER, details=details)


class ConfigurationError(QueryCompilerError):
    """An environment setting holds a value the compiler cannot use."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code=ErrorCode.CONFIG_INVALID, details=details)
