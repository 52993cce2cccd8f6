"""Application configuration

Settings are read from environment variables with the CALCENGINE prefix.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from calcengine.exceptions import ConfigurationError

# Project-specific prefix
_ENV_PREFIX = "CALCENGINE"

_ANGLE_MODE_VALUES = {"deg", "degrees", "rad", "radians"}


def _env_name(key: str) -> str:
    return f"{_ENV_PREFIX}_{key}"


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{raw}'", {"variable": name})


def _parse_port(name: str, raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'", {"variable": name})
    if not 0 < port < 65536:
        raise ConfigurationError(f"{name} out of range: {port}", {"variable": name})
    return port


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""

    log_level: int = logging.INFO
    log_file: Optional[str] = None
    log_json: bool = False
    angle_mode: str = "deg"
    mcp_port: int = 8030
    web_port: int = 8032

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from an environment mapping (defaults to os.environ).

        Raises:
            ConfigurationError: If any variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        level_name = env.get(_env_name("LOG_LEVEL"), "INFO").upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ConfigurationError(
                f"Unknown log level: '{level_name}'",
                {"variable": _env_name("LOG_LEVEL")},
            )

        angle_mode = env.get(_env_name("ANGLE_MODE"), "deg").strip().lower()
        if angle_mode not in _ANGLE_MODE_VALUES:
            raise ConfigurationError(
                f"Unknown angle mode: '{angle_mode}'. Supported: {sorted(_ANGLE_MODE_VALUES)}",
                {"variable": _env_name("ANGLE_MODE")},
            )

        return cls(
            log_level=log_level,
            log_file=env.get(_env_name("LOG_FILE")) or None,
            log_json=_parse_bool(_env_name("LOG_JSON"), env.get(_env_name("LOG_JSON"), "false")),
            angle_mode=angle_mode,
            mcp_port=_parse_port(_env_name("MCP_PORT"), env.get(_env_name("MCP_PORT"), "8030")),
            web_port=_parse_port(_env_name("WEB_PORT"), env.get(_env_name("WEB_PORT"), "8032")),
        )


_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """Get settings, loading them from the environment on first use."""
    global _settings
    if _settings is None or reload:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
]
