"""Token model shared by the tokenizer, parser and evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from calcengine.expression.operators import UNARY_MINUS


class TokenKind(Enum):
    NUMBER = "number"
    CONSTANT = "constant"
    OPERATOR = "operator"
    FUNCTION = "function"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    ABS_BAR = "abs_bar"


@dataclass(frozen=True)
class Token:
    """One classified unit of an expression.

    ``text`` holds the source text for numbers (decimal digits), the name for
    constants and functions, and the symbol for operators and delimiters.
    """

    kind: TokenKind
    text: str

    def __str__(self) -> str:
        return self.text

    @property
    def is_operand(self) -> bool:
        return self.kind in (TokenKind.NUMBER, TokenKind.CONSTANT)

    @property
    def is_unary_minus(self) -> bool:
        return self.kind is TokenKind.OPERATOR and self.text == UNARY_MINUS

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "text": self.text}

    @classmethod
    def number(cls, text: str) -> "Token":
        return cls(TokenKind.NUMBER, text)

    @classmethod
    def constant(cls, name: str) -> "Token":
        return cls(TokenKind.CONSTANT, name)

    @classmethod
    def operator(cls, symbol: str) -> "Token":
        return cls(TokenKind.OPERATOR, symbol)

    @classmethod
    def function(cls, name: str) -> "Token":
        return cls(TokenKind.FUNCTION, name)


LEFT_PAREN = Token(TokenKind.LEFT_PAREN, "(")
RIGHT_PAREN = Token(TokenKind.RIGHT_PAREN, ")")
ABS_BAR = Token(TokenKind.ABS_BAR, "|")
MULTIPLY = Token.operator("*")
NEGATE = Token.operator(UNARY_MINUS)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render a token sequence as space-separated text, e.g. ``2 π *``."""
    return " ".join(t.text for t in tokens)


def token_texts(tokens: Iterable[Token]) -> List[str]:
    return [t.text for t in tokens]
