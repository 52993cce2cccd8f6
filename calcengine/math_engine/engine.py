"""Math Engine - Facade for all mathematical capabilities.

This module provides a unified interface to all math capabilities.
For direct MCP tool handling, use the tool_registry instead.
"""

from __future__ import annotations

from typing import Dict, Optional

from calcengine.logger import session_logger as logger
from calcengine.math_engine.base import MathCapability, MathResult
from calcengine.math_engine.capabilities import ExpressionCapability


class CalculatorEngine:
    """Unified interface to all math engine capabilities.

    This facade provides a simple API for direct programmatic use.
    For MCP tool handling, use the tool_registry module instead.
    """

    def __init__(self):
        self._capabilities: Dict[str, MathCapability] = {}

        self._register_capability(ExpressionCapability())

        logger.info(
            "CalculatorEngine initialized",
            capabilities=list(self._capabilities.keys()),
        )

    def _register_capability(self, capability: MathCapability) -> None:
        self._capabilities[capability.name] = capability

    def get_capability(self, name: str) -> Optional[MathCapability]:
        return self._capabilities.get(name)

    @property
    def expression(self) -> ExpressionCapability:
        """Get the expression capability for direct access."""
        cap = self._capabilities.get("expression")
        if cap is None:
            raise RuntimeError("ExpressionCapability not registered")
        return cap  # type: ignore

    def evaluate(self, expression: str, angle_mode: Optional[str] = None) -> MathResult:
        """Convenience method for expression evaluation."""
        return self.expression.evaluate(expression, angle_mode)

    def list_capabilities(self) -> Dict[str, str]:
        return {
            name: cap.description
            for name, cap in self._capabilities.items()
        }


# Module-level singleton for convenience
_engine: Optional[CalculatorEngine] = None


def get_engine() -> CalculatorEngine:
    """Get or create the singleton CalculatorEngine instance."""
    global _engine
    if _engine is None:
        _engine = CalculatorEngine()
    return _engine
