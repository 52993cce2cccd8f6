"""Base classes for math engine capabilities.

All capability modules should inherit from MathCapability and implement
the required interface for tool registration and computation.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Union


def json_number(value: float) -> Union[float, str]:
    """Return a JSON-safe number: finite floats as-is, otherwise 'inf', '-inf' or 'nan'."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


@dataclass
class MathResult:
    """Result of a math computation."""

    result: Union[List[Any], float, str, Dict[str, Any]]
    shape: List[int]
    dtype: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = self.result
        if isinstance(result, float):
            result = json_number(result)
        return {
            "result": result,
            "shape": self.shape,
            "dtype": self.dtype,
        }


@dataclass
class ToolDefinition:
    """Definition of an MCP tool provided by a capability."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    handler_name: str  # Method name on the capability class


class MathCapability(ABC):
    """Base class for all math engine capabilities.

    Each capability module should:
    1. Inherit from this class
    2. Implement get_tools() to declare its MCP tools
    3. Implement handle() to route each tool to its computation
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability (e.g., 'expression')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of this capability."""

    @abstractmethod
    def get_tools(self) -> List[ToolDefinition]:
        """Return list of tool definitions this capability provides."""

    @abstractmethod
    def handle(self, tool_name: str, arguments: Dict[str, Any]) -> MathResult:
        """Handle a tool invocation.

        Args:
            tool_name: Name of the tool being called
            arguments: Tool arguments from MCP

        Returns:
            MathResult with computed values

        Raises:
            InvalidInputError: If tool_name is unknown or arguments are invalid
        """
