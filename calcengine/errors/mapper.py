"""Error response mapping for MCP and web interfaces.

Converts structured CalcError exceptions into standardized error responses
with machine-readable error codes and recovery strategies.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from calcengine.exceptions import (
    CalcError,
    ConfigurationError,
    ExpressionError,
)


@dataclass
class ErrorResponse:
    """Structured error response for API consumers."""

    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    recovery_strategy: Optional[str] = None


# Recovery strategy templates for common error types
RECOVERY_STRATEGIES: Dict[str, str] = {
    "SYNTAX_ERROR": "Check the expression: every '(' and '|' must be closed and every operator needs operands on both sides.",
    "DOMAIN_ERROR": "A function received a value outside its domain (sqrt of a negative, log of a non-positive, asin/acos outside [-1, 1]).",
    "ARITHMETIC_ERROR": "The expression divides or takes a modulo by zero. Change the divisor.",
    "INVALID_INPUT": "Check the request arguments: 'expression' must be a string and 'angle_mode' one of 'deg' or 'rad'.",
    "CONFIGURATION_ERROR": "Fix the CALCENGINE_* environment variables and restart the service.",
}


def get_recovery_strategy(error_code: str) -> str:
    """Get recovery strategy for an error code.

    Args:
        error_code: The error code

    Returns:
        Recovery strategy string
    """
    return RECOVERY_STRATEGIES.get(
        error_code, "Review the error message, adjust the request, and try again."
    )


def map_exception_to_response(error: Exception) -> ErrorResponse:
    """Convert an exception to a structured ErrorResponse.

    Args:
        error: The exception to convert

    Returns:
        ErrorResponse with structured error information
    """
    if isinstance(error, CalcError):
        return ErrorResponse(
            error_code=error.code,
            message=error.message,
            details=error.details if error.details else None,
            recovery_strategy=get_recovery_strategy(error.code),
        )

    if isinstance(error, PydanticValidationError):
        errors = error.errors(include_url=False)
        return ErrorResponse(
            error_code="PYDANTIC_VALIDATION_ERROR",
            message=f"Validation failed: {len(errors)} error(s)",
            details={"errors": [{"loc": list(e["loc"]), "msg": e["msg"]} for e in errors]},
            recovery_strategy="Check the error details and provide valid input according to the schema.",
        )

    # Generic exceptions - wrap with minimal structure
    return ErrorResponse(
        error_code="INTERNAL_ERROR",
        message=str(error),
        details={"exception_type": type(error).__name__},
        recovery_strategy="An unexpected error occurred. Please report this issue if it persists.",
    )


def map_error_for_mcp(error: Exception) -> Dict[str, Any]:
    """Map exception to MCP tool response format."""
    response = map_exception_to_response(error)

    return {
        "status": "error",
        "error_code": response.error_code,
        "message": response.message,
        "details": response.details,
        "recovery_strategy": response.recovery_strategy,
    }


def map_error_for_web(error: Exception) -> Dict[str, Any]:
    """Map exception to web API response format."""
    response = map_exception_to_response(error)

    return {
        "status": "error",
        "error": {
            "code": response.error_code,
            "message": response.message,
            "details": response.details,
            "recovery": response.recovery_strategy,
        },
    }


def get_http_status_for_error(error: Exception) -> int:
    """Determine appropriate HTTP status code for an error.

    Args:
        error: The exception

    Returns:
        HTTP status code
    """
    if isinstance(error, ExpressionError):
        return 400
    elif isinstance(error, PydanticValidationError):
        return 422
    elif isinstance(error, ConfigurationError):
        return 500
    elif isinstance(error, CalcError):
        return 400
    else:
        return 500
