"""Named functions and constants understood by the expression language.

Each function is registered once with its implementation. The tokenizer reads
the names from here, and the evaluator reads the implementations. Adding a
function means adding one entry to FUNCTIONS.

Implementations use NumPy float64 so IEEE special values (inf, nan) come out
as values instead of Python exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from calcengine.exceptions import CalcDomainError, ErrorReason
from calcengine.expression.angle_mode import AngleMode


def _to_radians(x: float, mode: AngleMode) -> float:
    return float(np.deg2rad(x)) if mode is AngleMode.DEGREES else x


def _from_radians(x: float, mode: AngleMode) -> float:
    return float(np.rad2deg(x)) if mode is AngleMode.DEGREES else x


def _require_unit_interval(name: str, x: float) -> None:
    # NaN fails both comparisons and is rejected as well
    if not -1.0 <= x <= 1.0:
        raise CalcDomainError(
            ErrorReason.INVERSE_TRIG_OUT_OF_RANGE,
            f"Domain error: {name} requires an operand in [-1, 1], got {x}",
            {"function": name, "operand": x},
        )


def _require_positive(name: str, x: float) -> None:
    if not x > 0.0:
        raise CalcDomainError(
            ErrorReason.LOG_OF_NON_POSITIVE,
            f"Domain error: {name} requires a positive operand, got {x}",
            {"function": name, "operand": x},
        )


def _sin(x: float, mode: AngleMode) -> float:
    return float(np.sin(_to_radians(x, mode)))


def _cos(x: float, mode: AngleMode) -> float:
    return float(np.cos(_to_radians(x, mode)))


def _tan(x: float, mode: AngleMode) -> float:
    return float(np.tan(_to_radians(x, mode)))


def _asin(x: float, mode: AngleMode) -> float:
    _require_unit_interval("asin", x)
    return _from_radians(float(np.arcsin(x)), mode)


def _acos(x: float, mode: AngleMode) -> float:
    _require_unit_interval("acos", x)
    return _from_radians(float(np.arccos(x)), mode)


def _atan(x: float, mode: AngleMode) -> float:
    return _from_radians(float(np.arctan(x)), mode)


def _log(x: float, mode: AngleMode) -> float:
    _require_positive("log", x)
    return float(np.log10(x))


def _ln(x: float, mode: AngleMode) -> float:
    _require_positive("ln", x)
    return float(np.log(x))


def _exp(x: float, mode: AngleMode) -> float:
    return float(np.exp(x))


def _sqrt(x: float, mode: AngleMode) -> float:
    if not x >= 0.0:
        raise CalcDomainError(
            ErrorReason.SQRT_OF_NEGATIVE,
            f"Domain error: sqrt requires a non-negative operand, got {x}",
            {"function": "sqrt", "operand": x},
        )
    return float(np.sqrt(x))


def _abs(x: float, mode: AngleMode) -> float:
    return float(np.abs(x))


@dataclass(frozen=True)
class FunctionSpec:
    name: str
    description: str
    apply: Callable[[float, AngleMode], float]
    angle_sensitive: bool = False


FUNCTIONS: Mapping[str, FunctionSpec] = MappingProxyType({
    spec.name: spec
    for spec in (
        FunctionSpec("sin", "Sine", _sin, angle_sensitive=True),
        FunctionSpec("cos", "Cosine", _cos, angle_sensitive=True),
        FunctionSpec("tan", "Tangent", _tan, angle_sensitive=True),
        FunctionSpec("asin", "Inverse sine, operand in [-1, 1]", _asin, angle_sensitive=True),
        FunctionSpec("acos", "Inverse cosine, operand in [-1, 1]", _acos, angle_sensitive=True),
        FunctionSpec("atan", "Inverse tangent", _atan, angle_sensitive=True),
        FunctionSpec("log", "Base-10 logarithm, operand > 0", _log),
        FunctionSpec("ln", "Natural logarithm, operand > 0", _ln),
        FunctionSpec("sqrt", "Square root, operand >= 0", _sqrt),
        FunctionSpec("abs", "Absolute value", _abs),
        FunctionSpec("exp", "e raised to the operand", _exp),
    )
})

# Longest first so a scan never stops at a shorter prefix of a longer name
FUNCTION_NAMES = tuple(sorted(FUNCTIONS, key=len, reverse=True))

CONSTANTS: Mapping[str, float] = MappingProxyType({
    "π": float(np.pi),
    "e": float(np.e),
})


def apply_function(name: str, operand: float, mode: AngleMode) -> float:
    """Apply a registered function to one operand.

    Raises:
        KeyError: If the name is not registered
        CalcDomainError: If the operand is outside the function's domain
    """
    return FUNCTIONS[name].apply(operand, mode)


def list_functions() -> dict:
    return {
        name: {
            "description": spec.description,
            "angle_sensitive": spec.angle_sensitive,
        }
        for name, spec in FUNCTIONS.items()
    }
