"""Custom exceptions for the calcengine application.

All exceptions include a machine-readable code and structured details so
callers (MCP tools, the web API, an interactive session) can surface the
error kind without parsing messages.
"""

from calcengine.exceptions.base import (
    CalcError,
    ConfigurationError,
    InvalidInputError,
    ErrorKind,
    ErrorReason,
    ExpressionError,
    CalcSyntaxError,
    CalcDomainError,
    CalcArithmeticError,
)

__all__ = [
    # Base
    "CalcError",
    "ConfigurationError",
    "InvalidInputError",
    # Expression pipeline
    "ErrorKind",
    "ErrorReason",
    "ExpressionError",
    "CalcSyntaxError",
    "CalcDomainError",
    "CalcArithmeticError",
]
