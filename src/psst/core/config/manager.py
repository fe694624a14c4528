"""
psst configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from psst.core.config.merge import deep_merge
from psst.core.exceptions import ConfigError
from psst.data import read_yaml

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAMES = (".psst.yaml", ".psst.yml")
ENV_PREFIX = "PSST_"


class ConfigManager:
    """Load, merge, and validate psst configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: PSST_<section>__<key>[__<key>...]
    2. Project config: <repo_root>/.psst.yaml (or .psst.yml)
    3. Bundled defaults: psst.data/config/defaults.yaml

    Environment keys without a ``__`` separator (e.g. PSST_LOG_LEVEL) are not
    config paths and are ignored here.
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()

    @property
    def project_config_path(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.repo_root / name
            if candidate.is_file():
                return candidate
        return None

    def load_defaults(self) -> Dict[str, Any]:
        return deep_merge(read_yaml("config", "defaults.yaml") or {}, {})

    def load_project(self) -> Dict[str, Any]:
        path = self.project_config_path
        if path is None:
            return {}
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            # Fail closed: a broken project config must not be silently ignored.
            raise ConfigError(f"Cannot read {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping", context={"path": str(path)})
        logger.debug("Loaded project config from %s", path)
        return data

    # ---- environment overrides -------------------------------------------------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            if "__" not in raw:
                continue
            path = [seg.lower() for seg in raw.split("__")]
            if any(not seg for seg in path):
                logger.warning("Ignoring malformed config override %s", key)
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            self._set_nested(cfg, path, value)

    # ---- validation ------------------------------------------------------------

    def validate(self, cfg: Dict[str, Any]) -> None:
        """Validate ``cfg`` against the bundled JSON schema.

        Raises:
            ConfigError: listing every violation with its config path
        """
        schema = read_yaml("schemas", "config.schema.yaml")
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: [str(p) for p in e.absolute_path])
        if not errors:
            return
        problems = []
        for err in errors:
            where = ".".join(str(p) for p in err.absolute_path) or "<root>"
            problems.append(f"{where}: {err.message}")
        raise ConfigError(
            "Invalid configuration: " + "; ".join(problems),
            context={"errors": problems},
        )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (defaults < project < environment)."""
        cfg = deep_merge(self.load_defaults(), self.load_project())
        self.apply_env_overrides(cfg)
        if validate:
            self.validate(cfg)
        return cfg


def load_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Convenience wrapper around ``ConfigManager(repo_root).load_config()``."""
    return ConfigManager(repo_root).load_config(validate=validate)


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_NAMES", "load_config"]
