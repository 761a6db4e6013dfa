"""
Configuration for discovery announcements.

Values come from a YAML file or built-in defaults. Any key can be overridden
through the environment as ``HASS_DISCOVERY_<DOTTED_KEY>`` (dots become
underscores), and string values of the form ``${VAR}`` are expanded.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import dotenv_values
import yaml

from .enums import QoS

logger = logging.getLogger(__name__)

ENV_PREFIX = "HASS_DISCOVERY_"

# Lazy one-time .env loading flag
_ENV_LOADED = False


def _load_env_once() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    # Precedence: system environment, then the project .env, then the
    # workspace-level .env one directory up. Values already present in
    # os.environ are never overwritten.
    project_root = Path.cwd()
    workspace_env = project_root.parent / ".env"
    project_env = project_root / ".env"

    workspace_vals = dotenv_values(workspace_env) if workspace_env.exists() else {}
    project_vals = dotenv_values(project_env) if project_env.exists() else {}

    merged = {}
    merged.update({k: v for k, v in workspace_vals.items() if v is not None})
    merged.update({k: v for k, v in project_vals.items() if v is not None})

    for k, v in merged.items():
        if k and v is not None and k not in os.environ:
            os.environ[k] = str(v)
    _ENV_LOADED = True


DEFAULTS: dict[str, Any] = {
    "discovery": {
        "prefix": "homeassistant",
        "node_id": None,
        "retain": True,
        "qos": 0,
        "abbreviate": False,
    },
}


class Config:
    """Configuration manager with defaults and environment overrides."""

    config_path: Optional[str] = None

    def __init__(self, config_data: Optional[dict] = None):
        """Initialize configuration from dictionary."""
        _load_env_once()
        self._data = config_data or {}
        self.config_path = None

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from YAML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")

        instance = cls(data)
        instance.config_path = str(path)
        logger.debug("loaded configuration from %s", path)
        return instance

    @classmethod
    def from_defaults(cls) -> "Config":
        """Create configuration with default values."""
        instance = cls(
            {section: dict(values) for section, values in DEFAULTS.items()}
        )
        instance.config_path = "defaults"
        return instance

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self._data

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                value = default
                break

        # Environment variable override
        env_key = f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)
        if env_value is not None:
            if isinstance(value, bool):
                return env_value.lower() in ("true", "1", "yes", "on")
            elif isinstance(value, int):
                try:
                    return int(env_value)
                except ValueError:
                    logger.warning("ignoring non-integer %s=%r", env_key, env_value)
                    return value
            return env_value

        # Handle ${VARIABLE} expansion in string values
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            expanded_value = os.getenv(value[2:-1])
            if expanded_value is not None:
                return expanded_value

        return value

    @property
    def discovery_prefix(self) -> str:
        """Topic prefix Home Assistant listens on for discovery."""
        return str(self.get("discovery.prefix", "homeassistant"))

    @property
    def discovery_node_id(self) -> Optional[str]:
        node_id = self.get("discovery.node_id")
        return str(node_id) if node_id else None

    @property
    def discovery_retain(self) -> bool:
        return bool(self.get("discovery.retain", True))

    @property
    def discovery_qos(self) -> QoS:
        """QoS for announcements; raises ShapeError for levels outside 0-2."""
        raw = self.get("discovery.qos", 0)
        if isinstance(raw, str) and raw.strip().isdigit():
            raw = int(raw)
        return QoS.parse(raw)

    @property
    def discovery_abbreviate(self) -> bool:
        """Emit abbreviated keys (``stat_t``...) to shrink payloads."""
        return bool(self.get("discovery.abbreviate", False))


__all__ = ["Config", "DEFAULTS", "ENV_PREFIX"]
