"""Expression evaluation capability.

Exposes the tokenizer, Shunting Yard parser and RPN evaluator as tools.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from calcengine.config import get_settings
from calcengine.exceptions import InvalidInputError
from calcengine.expression import (
    CONSTANTS,
    AngleMode,
    list_functions,
    list_operators,
    to_postfix,
    tokenize,
    trace_expression,
)
from calcengine.logger import session_logger as logger
from calcengine.logger.decorators import log_execution_time
from calcengine.math_engine.base import MathCapability, MathResult, ToolDefinition, json_number

_EXPRESSION_SCHEMA = {
    "type": "string",
    "description": "Infix expression, e.g. '2sin(30) + |2-5|^2'. Commas are ignored.",
}

_ANGLE_MODE_SCHEMA = {
    "type": "string",
    "description": "Angle unit for trigonometric functions.",
    "enum": ["deg", "rad"],
}


class ExpressionCapability(MathCapability):
    """Evaluate infix calculator expressions."""

    @property
    def name(self) -> str:
        return "expression"

    @property
    def description(self) -> str:
        return "Evaluate infix calculator expressions with precedence, functions and angle modes"

    def __init__(self):
        logger.info("ExpressionCapability initialized")

    def get_tools(self) -> List[ToolDefinition]:
        """Return list of tool definitions."""
        return [
            ToolDefinition(
                name="calc_evaluate",
                description=(
                    "Evaluate an infix expression with + - * / % ^, parentheses, |x|, "
                    "functions (sin, cos, tan, asin, acos, atan, log, ln, sqrt, abs, exp) "
                    "and constants π and e. Implicit multiplication such as 2π is supported."
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "expression": _EXPRESSION_SCHEMA,
                        "angle_mode": _ANGLE_MODE_SCHEMA,
                    },
                    "required": ["expression"],
                },
                handler_name="handle",
            ),
            ToolDefinition(
                name="calc_tokenize",
                description="Split an expression into tokens, including inferred multiplications.",
                input_schema={
                    "type": "object",
                    "properties": {"expression": _EXPRESSION_SCHEMA},
                    "required": ["expression"],
                },
                handler_name="handle",
            ),
            ToolDefinition(
                name="calc_to_postfix",
                description="Convert an expression to postfix (Reverse Polish) order.",
                input_schema={
                    "type": "object",
                    "properties": {"expression": _EXPRESSION_SCHEMA},
                    "required": ["expression"],
                },
                handler_name="handle",
            ),
            ToolDefinition(
                name="calc_list_functions",
                description="List supported functions, constants and operators.",
                input_schema={"type": "object", "properties": {}},
                handler_name="handle",
            ),
        ]

    @log_execution_time
    def handle(self, tool_name: str, arguments: Dict[str, Any]) -> MathResult:
        """Route tool invocation to appropriate handler."""
        if tool_name == "calc_evaluate":
            return self.evaluate(
                self._require_expression(arguments),
                arguments.get("angle_mode"),
            )
        elif tool_name == "calc_tokenize":
            tokens = tokenize(self._require_expression(arguments))
            return MathResult(
                result=[t.to_dict() for t in tokens],
                shape=[len(tokens)],
                dtype="token",
            )
        elif tool_name == "calc_to_postfix":
            postfix = to_postfix(tokenize(self._require_expression(arguments)))
            return MathResult(
                result=[t.text for t in postfix],
                shape=[len(postfix)],
                dtype="token",
            )
        elif tool_name == "calc_list_functions":
            return MathResult(
                result=self.describe(),
                shape=[],
                dtype="object",
            )
        else:
            raise InvalidInputError(f"Unknown tool: {tool_name}")

    @staticmethod
    def _require_expression(arguments: Dict[str, Any]) -> str:
        expression = arguments.get("expression")
        if expression is None:
            raise InvalidInputError("Missing required argument: expression")
        if not isinstance(expression, str):
            raise InvalidInputError(
                f"Argument 'expression' must be a string, got {type(expression).__name__}"
            )
        return expression

    def evaluate(self, expression: str, angle_mode: Optional[str] = None) -> MathResult:
        """Evaluate an expression and wrap the value with its context.

        Raises:
            ExpressionError: Classified syntax, domain or arithmetic failure
            InvalidInputError: If angle_mode is not a known mode
        """
        mode = AngleMode.parse(angle_mode if angle_mode is not None else get_settings().angle_mode)
        trace = trace_expression(expression, mode)
        value = trace.result

        logger.debug(
            "Expression evaluated",
            expression=trace.sanitized,
            angle_mode=mode.label,
            tokens=len(trace.tokens),
        )

        return MathResult(
            result={
                "value": json_number(value),
                "is_finite": trace.is_finite,
                "angle_mode": mode.label,
                "postfix": [t.text for t in trace.postfix],
            },
            shape=[],
            dtype="float64",
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "functions": list_functions(),
            "constants": {name: value for name, value in CONSTANTS.items()},
            "operators": list_operators(),
        }
