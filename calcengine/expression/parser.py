"""Shunting Yard parser: infix token sequence to postfix (RPN) sequence.

Example:
    3 + 4 * 2   ->   3 4 2 * +

Before the main loop the token stream is checked for balanced parentheses,
``-`` tokens in prefix position are rewritten to unary minus, and absolute
value bars ``|x|`` are rewritten to ``abs ( x )``.
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

from calcengine.exceptions import CalcSyntaxError, ErrorReason
from calcengine.expression.operators import OPERATOR_TABLE, OperatorDescriptor
from calcengine.expression.tokens import (
    LEFT_PAREN,
    NEGATE,
    RIGHT_PAREN,
    Token,
    TokenKind,
    format_tokens,
)
from calcengine.logger import session_logger as logger


def _mismatched(detail: str) -> CalcSyntaxError:
    return CalcSyntaxError(
        ErrorReason.MISMATCHED_PARENTHESES,
        f"Mismatched parentheses: {detail}",
    )


class ShuntingYardParser:
    """Converts infix tokens to postfix using an operator table."""

    def __init__(self, operators: Mapping[str, OperatorDescriptor] = OPERATOR_TABLE):
        self._operators = operators

    def to_postfix(self, tokens: Sequence[Token]) -> List[Token]:
        """Convert infix tokens to postfix order.

        Args:
            tokens: Infix tokens as produced by the tokenizer

        Returns:
            Tokens in postfix order; contains no parentheses or bars

        Raises:
            CalcSyntaxError: On mismatched parentheses or unbalanced bars
        """
        self.validate_parentheses(tokens)
        rewritten = self.handle_absolute_value(self.handle_unary_operators(tokens))

        output: List[Token] = []
        stack: List[Token] = []

        for token in rewritten:
            kind = token.kind

            if kind in (TokenKind.NUMBER, TokenKind.CONSTANT):
                output.append(token)

            elif kind in (TokenKind.FUNCTION, TokenKind.LEFT_PAREN):
                stack.append(token)

            elif kind is TokenKind.RIGHT_PAREN:
                while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                    output.append(stack.pop())
                if not stack:
                    raise _mismatched("')' without matching '('")
                stack.pop()
                # Bind the closed group to the function in front of it
                if stack and stack[-1].kind is TokenKind.FUNCTION:
                    output.append(stack.pop())

            elif kind is TokenKind.OPERATOR:
                self._pop_higher_precedence(token, stack, output)
                stack.append(token)

        while stack:
            token = stack.pop()
            if token.kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN):
                raise _mismatched("unclosed '('")
            output.append(token)

        logger.debug(
            "Converted to postfix",
            infix_tokens=len(tokens),
            postfix=format_tokens(output),
        )
        return output

    def _pop_higher_precedence(
        self, token: Token, stack: List[Token], output: List[Token]
    ) -> None:
        current = self._operators[token.text]
        while stack and stack[-1].kind is TokenKind.OPERATOR:
            top = self._operators[stack[-1].text]
            if top.precedence > current.precedence or (
                top.precedence == current.precedence and current.is_left_associative
            ):
                output.append(stack.pop())
            else:
                break

    @staticmethod
    def validate_parentheses(tokens: Sequence[Token]) -> None:
        """Raise CalcSyntaxError unless every '(' is closed in order."""
        depth = 0
        for token in tokens:
            if token.kind is TokenKind.LEFT_PAREN:
                depth += 1
            elif token.kind is TokenKind.RIGHT_PAREN:
                depth -= 1
                if depth < 0:
                    raise _mismatched("')' without matching '('")
        if depth != 0:
            raise _mismatched(f"{depth} unclosed '('")

    @staticmethod
    def handle_unary_operators(tokens: Sequence[Token]) -> List[Token]:
        """Rewrite ``-`` to unary minus where it has no left operand.

        That is: first token, after an operator or after '('. A ``-`` right
        after a bar stays binary, so ``|-5|`` has no left operand and fails
        at evaluation.
        """
        result: List[Token] = []
        previous = None

        for token in tokens:
            if token.kind is TokenKind.OPERATOR and token.text == "-":
                prefix_position = (
                    previous is None
                    or previous.kind in (TokenKind.OPERATOR, TokenKind.LEFT_PAREN)
                )
                token = NEGATE if prefix_position else token

            result.append(token)
            previous = token

        return result

    @staticmethod
    def handle_absolute_value(tokens: Sequence[Token]) -> List[Token]:
        """Rewrite ``| x |`` to ``abs ( x )``.

        Bars alternate between opening and closing, so ``||x||`` is not
        nested.

        Raises:
            CalcSyntaxError: If the number of bars is odd
        """
        result: List[Token] = []
        inside_bars = False

        for token in tokens:
            if token.kind is TokenKind.ABS_BAR:
                if inside_bars:
                    result.append(RIGHT_PAREN)
                else:
                    result.append(Token.function("abs"))
                    result.append(LEFT_PAREN)
                inside_bars = not inside_bars
            else:
                result.append(token)

        if inside_bars:
            raise CalcSyntaxError(
                ErrorReason.UNBALANCED_ABSOLUTE_VALUE,
                "Unbalanced absolute value: '|' is never closed",
            )
        return result


_default_parser = ShuntingYardParser()


def to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """Convert infix tokens to postfix with the standard operator table."""
    return _default_parser.to_postfix(tokens)
