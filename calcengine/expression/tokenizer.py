"""Tokenizer: raw expression text to an ordered token sequence.

Implicit multiplication is decided while tokens are appended, by looking at
the previous token and the one about to be added:

    2π      -> 2 * π
    2(3+4)  -> 2 * ( 3 + 4 )
    (3)(4)  -> ( 3 ) * ( 4 )
    (3)2    -> ( 3 ) * 2
    π(3)    -> π * ( 3 )
    2sin30  -> 2 * sin 30
"""

from __future__ import annotations

from string import digits as DIGITS
from typing import List, Optional

from calcengine.exceptions import CalcSyntaxError, ErrorReason
from calcengine.expression.functions import CONSTANTS, FUNCTION_NAMES
from calcengine.expression.tokens import (
    ABS_BAR,
    LEFT_PAREN,
    MULTIPLY,
    RIGHT_PAREN,
    Token,
    TokenKind,
)

THOUSANDS_SEPARATOR = ","
OPERATOR_CHARS = "+-*/^%"

_OPERAND_KINDS = (TokenKind.NUMBER, TokenKind.CONSTANT)


def sanitize(text: Optional[str]) -> str:
    """Strip thousands separators and surrounding whitespace.

    ``sanitize(sanitize(x)) == sanitize(x)`` for every string.
    """
    if text is None:
        return ""
    return text.replace(THOUSANDS_SEPARATOR, "").strip()


def needs_implicit_multiplication(previous: Optional[Token], current: Token) -> bool:
    """Whether a ``*`` belongs between two adjacent tokens."""
    if previous is None:
        return False

    prev_kind = previous.kind
    kind = current.kind

    if kind is TokenKind.CONSTANT:
        return prev_kind in _OPERAND_KINDS or prev_kind is TokenKind.RIGHT_PAREN
    if kind is TokenKind.LEFT_PAREN:
        return prev_kind in _OPERAND_KINDS or prev_kind is TokenKind.RIGHT_PAREN
    if kind is TokenKind.NUMBER:
        return prev_kind is TokenKind.RIGHT_PAREN
    if kind is TokenKind.FUNCTION:
        return prev_kind in _OPERAND_KINDS
    return False


class Tokenizer:
    """Single left-to-right scanner over a sanitized expression."""

    def __init__(self, expression: Optional[str]):
        self._text = sanitize(expression)
        self._pos = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        text = self._text

        while self._pos < len(text):
            c = text[self._pos]

            if c.isspace():
                self._pos += 1
                continue

            if c in DIGITS or c == ".":
                self._append(self._scan_number())
                continue

            name = self._match_function()
            if name is not None:
                self._append(Token.function(name))
                self._pos += len(name)
                continue

            if c in CONSTANTS:
                self._append(Token.constant(c))
                self._pos += 1
                continue

            if c in OPERATOR_CHARS:
                self._append(Token.operator(c))
            elif c == "(":
                self._append(LEFT_PAREN)
            elif c == ")":
                self._append(RIGHT_PAREN)
            elif c == "|":
                self._append(ABS_BAR)
            else:
                raise CalcSyntaxError(
                    ErrorReason.INVALID_CHARACTER,
                    f"Invalid character: {c!r}",
                    {"character": c, "position": self._pos},
                )
            self._pos += 1

        return self._tokens

    def _append(self, token: Token) -> None:
        previous = self._tokens[-1] if self._tokens else None
        if needs_implicit_multiplication(previous, token):
            self._tokens.append(MULTIPLY)
        self._tokens.append(token)

    def _scan_number(self) -> Token:
        text = self._text
        start = self._pos
        seen_point = False

        while self._pos < len(text):
            c = text[self._pos]
            if c in DIGITS:
                self._pos += 1
            elif c == "." and not seen_point:
                seen_point = True
                self._pos += 1
            else:
                break

        literal = text[start:self._pos]
        if literal == ".":
            raise CalcSyntaxError(
                ErrorReason.INVALID_NUMBER,
                "Number has no digits: '.'",
                {"position": start},
            )
        return Token.number(literal)

    def _match_function(self) -> Optional[str]:
        for name in FUNCTION_NAMES:
            if self._text.startswith(name, self._pos):
                return name
        return None


def tokenize(expression: Optional[str]) -> List[Token]:
    """Sanitize and tokenize an expression.

    Raises:
        CalcSyntaxError: On a character outside the expression alphabet
    """
    return Tokenizer(expression).tokenize()
