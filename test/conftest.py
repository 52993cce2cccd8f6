"""Pytest configuration and fixtures

Provides shared fixtures for all tests: a clean settings cache, calculator
sessions in each angle mode, and a freshly initialized tool registry.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from calcengine.config import reset_settings  # noqa: E402
from calcengine.expression import AngleMode  # noqa: E402
from calcengine.mcp_server.tool_registry import initialize_registry, reset_registry  # noqa: E402
from calcengine.session import CalculatorSession  # noqa: E402


@pytest.fixture(scope="function", autouse=True)
def clean_settings(monkeypatch):
    """
    Give every test settings read from a CALCENGINE-free environment.

    Tests that need a variable set it with monkeypatch and call
    reset_settings() themselves.
    """
    for name in list(os.environ):
        if name.startswith("CALCENGINE_"):
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def degrees_session():
    """Calculator session in degree mode."""
    return CalculatorSession(AngleMode.DEGREES)


@pytest.fixture
def radians_session():
    """Calculator session in radian mode."""
    return CalculatorSession(AngleMode.RADIANS)


@pytest.fixture
def registry():
    """
    Provide a tool registry initialized with all capabilities.

    The global registry is dropped before and after so tests never share
    registrations.
    """
    reset_registry()
    yield initialize_registry()
    reset_registry()
