"""psst configuration: bundled YAML defaults, project overrides, env overrides."""
from __future__ import annotations

from .manager import ENV_PREFIX, PROJECT_CONFIG_NAMES, ConfigManager, load_config
from .merge import deep_merge

__all__ = [
    "ConfigManager",
    "ENV_PREFIX",
    "PROJECT_CONFIG_NAMES",
    "deep_merge",
    "load_config",
]
