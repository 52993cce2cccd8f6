"""Expression core - tokenizer, Shunting Yard parser and RPN evaluator.

Converts text such as ``2sin(30) + |2-5|^2`` into a float. Angle mode is
passed in by the caller for each evaluation.
"""

from calcengine.expression.angle_mode import AngleMode, AngleModeContext
from calcengine.expression.evaluator import RPNEvaluator, evaluate_postfix
from calcengine.expression.functions import CONSTANTS, FUNCTIONS, list_functions
from calcengine.expression.operators import (
    OPERATOR_TABLE,
    Associativity,
    OperatorDescriptor,
    list_operators,
)
from calcengine.expression.parser import ShuntingYardParser, to_postfix
from calcengine.expression.pipeline import EvaluationTrace, evaluate_expression, trace_expression
from calcengine.expression.tokenizer import Tokenizer, sanitize, tokenize
from calcengine.expression.tokens import Token, TokenKind, format_tokens

__all__ = [
    "AngleMode",
    "AngleModeContext",
    "Associativity",
    "CONSTANTS",
    "EvaluationTrace",
    "FUNCTIONS",
    "OPERATOR_TABLE",
    "OperatorDescriptor",
    "RPNEvaluator",
    "ShuntingYardParser",
    "Token",
    "TokenKind",
    "Tokenizer",
    "evaluate_expression",
    "evaluate_postfix",
    "format_tokens",
    "list_functions",
    "list_operators",
    "sanitize",
    "to_postfix",
    "tokenize",
    "trace_expression",
]
