"""Stack evaluator for postfix (RPN) token sequences.

Example:
    3 4 2 * +   stack: [3] -> [3, 4] -> [3, 4, 2] -> [3, 8] -> [11]
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence

import numpy as np

from calcengine.exceptions import CalcArithmeticError, CalcSyntaxError, ErrorReason
from calcengine.expression.angle_mode import AngleMode
from calcengine.expression.functions import CONSTANTS, apply_function
from calcengine.expression.operators import BINARY_OPERATORS, OPERATOR_TABLE, UNARY_MINUS
from calcengine.expression.tokens import Token, TokenKind
from calcengine.logger import session_logger as logger

BinaryOp = Callable[[float, float], float]

BINARY_OPS: Dict[str, BinaryOp] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.true_divide,
    # Sign follows the dividend, like C fmod
    "%": np.fmod,
    "^": np.power,
}

ZERO_DIVISOR_OPS = frozenset({"/", "%"})

if set(BINARY_OPS) != BINARY_OPERATORS or set(OPERATOR_TABLE) != BINARY_OPERATORS | {UNARY_MINUS}:
    raise RuntimeError("Operator table and binary implementations are out of sync")


def _insufficient(token: Token, needed: int, available: int) -> CalcSyntaxError:
    return CalcSyntaxError(
        ErrorReason.INSUFFICIENT_OPERANDS,
        f"Syntax error: '{token.text}' needs {needed} operand(s), found {available}",
        {"token": token.text, "needed": needed, "available": available},
    )


class RPNEvaluator:
    """Evaluates postfix sequences for one fixed angle mode."""

    def __init__(self, angle_mode: AngleMode = AngleMode.DEGREES):
        self.angle_mode = AngleMode.parse(angle_mode)

    def evaluate(self, postfix: Sequence[Token]) -> float:
        """Evaluate a postfix sequence to a float.

        inf and nan are valid results, not errors.

        Raises:
            CalcSyntaxError: If operands and operators do not balance
            CalcDomainError: If a function receives an operand outside its domain
            CalcArithmeticError: On division or modulo by zero
        """
        stack: List[float] = []

        with np.errstate(all="ignore"):
            for token in postfix:
                kind = token.kind

                if kind is TokenKind.NUMBER:
                    stack.append(float(token.text))

                elif kind is TokenKind.CONSTANT:
                    stack.append(CONSTANTS[token.text])

                elif kind is TokenKind.FUNCTION:
                    if not stack:
                        raise _insufficient(token, 1, 0)
                    stack.append(apply_function(token.text, stack.pop(), self.angle_mode))

                elif token.is_unary_minus:
                    if not stack:
                        raise _insufficient(token, 1, 0)
                    stack.append(-stack.pop())

                elif kind is TokenKind.OPERATOR:
                    if len(stack) < 2:
                        raise _insufficient(token, 2, len(stack))
                    right = stack.pop()
                    left = stack.pop()
                    stack.append(self._apply_binary(token.text, left, right))

                else:
                    raise CalcSyntaxError(
                        ErrorReason.MALFORMED_EXPRESSION,
                        f"Unexpected token in postfix sequence: '{token.text}'",
                        {"token": token.text, "kind": kind.value},
                    )

        if len(stack) != 1:
            raise CalcSyntaxError(
                ErrorReason.MALFORMED_EXPRESSION,
                f"Syntax error: expression leaves {len(stack)} values instead of 1",
                {"stack_size": len(stack)},
            )

        logger.debug("Evaluated postfix", angle_mode=self.angle_mode.label, result=stack[0])
        return stack[0]

    @staticmethod
    def _apply_binary(symbol: str, left: float, right: float) -> float:
        if symbol in ZERO_DIVISOR_OPS and right == 0:
            raise CalcArithmeticError(
                ErrorReason.DIVISION_BY_ZERO,
                "Division by zero" if symbol == "/" else "Modulo by zero",
                {"operator": symbol, "left": left},
            )
        return float(BINARY_OPS[symbol](left, right))


def evaluate_postfix(postfix: Sequence[Token], angle_mode: AngleMode = AngleMode.DEGREES) -> float:
    """Evaluate a postfix sequence under the given angle mode."""
    return RPNEvaluator(angle_mode).evaluate(postfix)
