"""Operator precedence and associativity table.

The table is built once at import time and never mutated, so any number of
concurrent evaluations may read it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorDescriptor:
    """Precedence rank (higher binds tighter) and associativity of one operator."""

    precedence: int
    associativity: Associativity

    @property
    def is_left_associative(self) -> bool:
        return self.associativity is Associativity.LEFT


UNARY_MINUS = "u-"

BINARY_OPERATORS = frozenset({"+", "-", "*", "/", "%", "^"})

OPERATOR_TABLE: Mapping[str, OperatorDescriptor] = MappingProxyType({
    "+": OperatorDescriptor(1, Associativity.LEFT),
    "-": OperatorDescriptor(1, Associativity.LEFT),
    "*": OperatorDescriptor(2, Associativity.LEFT),
    "/": OperatorDescriptor(2, Associativity.LEFT),
    "%": OperatorDescriptor(2, Associativity.LEFT),
    UNARY_MINUS: OperatorDescriptor(3, Associativity.RIGHT),
    # 2^3^2 == 2^(3^2)
    "^": OperatorDescriptor(4, Associativity.RIGHT),
})


def get_operator(symbol: str) -> OperatorDescriptor:
    """Look up an operator descriptor.

    Raises:
        KeyError: If the symbol is not a registered operator
    """
    return OPERATOR_TABLE[symbol]


def is_operator(symbol: str) -> bool:
    return symbol in OPERATOR_TABLE


def list_operators() -> dict:
    """Describe every operator for tool listings."""
    return {
        symbol: {
            "precedence": desc.precedence,
            "associativity": desc.associativity.value,
            "arity": 1 if symbol == UNARY_MINUS else 2,
        }
        for symbol, desc in OPERATOR_TABLE.items()
    }
