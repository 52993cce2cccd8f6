"""Exception classes for the calcengine application.

Every failure the expression core can produce is one of three classified
kinds (syntax, domain, arithmetic). Each exception carries a machine-readable
code, a human message and optional details so the error mapper can turn it
into an MCP or web response without inspecting message text.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Top-level classification surfaced to the user."""

    SYNTAX = "syntax"
    DOMAIN = "domain"
    ARITHMETIC = "arithmetic"


class ErrorReason(str, Enum):
    """Fine-grained cause of a classified error."""

    # Syntax
    INVALID_CHARACTER = "invalid_character"
    INVALID_NUMBER = "invalid_number"
    MISMATCHED_PARENTHESES = "mismatched_parentheses"
    UNBALANCED_ABSOLUTE_VALUE = "unbalanced_absolute_value"
    INSUFFICIENT_OPERANDS = "insufficient_operands"
    MALFORMED_EXPRESSION = "malformed_expression"
    # Domain
    SQRT_OF_NEGATIVE = "sqrt_of_negative"
    LOG_OF_NON_POSITIVE = "log_of_non_positive"
    INVERSE_TRIG_OUT_OF_RANGE = "inverse_trig_out_of_range"
    # Arithmetic
    DIVISION_BY_ZERO = "division_by_zero"


class CalcError(Exception):
    """Base for all calcengine errors.

    Attributes:
        code: Machine-readable error code (e.g. ``SYNTAX_ERROR``)
        message: Human-readable description
        details: Extra structured context, safe to serialize
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(CalcError):
    """Raised when environment configuration is invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONFIGURATION_ERROR", message=message, details=details)


class InvalidInputError(CalcError):
    """Raised when tool or API arguments are invalid (wrong type, missing, unknown)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_INPUT", message=message, details=details)


class ExpressionError(CalcError):
    """Base for classified failures of the expression pipeline."""

    kind: ErrorKind
    code_name: str = "EXPRESSION_ERROR"

    def __init__(
        self,
        reason: ErrorReason,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged: Dict[str, Any] = {"kind": self.kind.value, "reason": reason.value}
        if details:
            # inf/nan operands are kept as 'inf', '-inf', 'nan' so details stay valid JSON
            merged.update({
                key: str(value) if isinstance(value, float) and not math.isfinite(value) else value
                for key, value in details.items()
            })
        super().__init__(code=self.code_name, message=message, details=merged)
        self.reason = reason


class CalcSyntaxError(ExpressionError):
    """Invalid character, mismatched parentheses or a malformed token stream."""

    kind = ErrorKind.SYNTAX
    code_name = "SYNTAX_ERROR"


class CalcDomainError(ExpressionError):
    """A function was applied outside its mathematical domain."""

    kind = ErrorKind.DOMAIN
    code_name = "DOMAIN_ERROR"


class CalcArithmeticError(ExpressionError):
    """Division or modulo by zero."""

    kind = ErrorKind.ARITHMETIC
    code_name = "ARITHMETIC_ERROR"
