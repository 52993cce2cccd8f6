"""Math Engine - capability layer over the expression core.

Capabilities declare tools and route tool calls to the expression
tokenizer, parser and evaluator.
"""

from calcengine.math_engine.base import MathCapability, MathResult, ToolDefinition, json_number
from calcengine.math_engine.engine import CalculatorEngine, get_engine

__all__ = [
    "MathCapability",
    "MathResult",
    "ToolDefinition",
    "json_number",
    "CalculatorEngine",
    "get_engine",
]
