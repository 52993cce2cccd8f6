"""End-to-end expression evaluation: raw text to a float.

raw -> sanitize -> tokenize -> unary/bar rewriting -> Shunting Yard -> RPN evaluation
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from calcengine.expression.angle_mode import AngleMode
from calcengine.expression.evaluator import RPNEvaluator
from calcengine.expression.parser import to_postfix
from calcengine.expression.tokenizer import sanitize, tokenize
from calcengine.expression.tokens import Token, token_texts


@dataclass
class EvaluationTrace:
    """Every intermediate stage of one evaluation."""

    expression: str
    sanitized: str
    angle_mode: AngleMode
    tokens: List[Token]
    postfix: List[Token]
    result: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expression": self.expression,
            "sanitized": self.sanitized,
            "angle_mode": self.angle_mode.label,
            "tokens": token_texts(self.tokens),
            "postfix": token_texts(self.postfix),
            "result": self.result,
        }


def trace_expression(expression: Optional[str], angle_mode: AngleMode = AngleMode.DEGREES) -> EvaluationTrace:
    """Evaluate an expression and keep the token and postfix sequences.

    Raises:
        ExpressionError: A CalcSyntaxError, CalcDomainError or CalcArithmeticError
    """
    mode = AngleMode.parse(angle_mode)
    sanitized = sanitize(expression)
    tokens = tokenize(sanitized)
    postfix = to_postfix(tokens)
    return EvaluationTrace(
        expression=expression or "",
        sanitized=sanitized,
        angle_mode=mode,
        tokens=tokens,
        postfix=postfix,
        result=RPNEvaluator(mode).evaluate(postfix),
    )


def evaluate_expression(expression: Optional[str], angle_mode: AngleMode = AngleMode.DEGREES) -> float:
    """Evaluate an expression under a fixed angle mode.

    >>> evaluate_expression("2+3*4")
    14.0
    """
    return trace_expression(expression, angle_mode).result
