"""Math Engine Capabilities Package.

This package contains individual capability modules that provide
specific mathematical functionality.
"""

from calcengine.math_engine.capabilities.expression import ExpressionCapability

__all__ = ["ExpressionCapability"]
