"""
Runtime Configuration

Central configuration for tree validation behavior and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from mrkl.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "MRKL_"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class TreeConfig:
    """Configuration for tree validation and pruning."""
    # Raise TreeInvariantException on the first invalid node instead of returning a result
    fail_fast: bool = False
    # Recompute H(item) for every leaf during validation
    check_leaf_digests: bool = True
    # Check bounds and left-to-right item order during validation
    check_ordering: bool = True


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for mrkl.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MRKL_FAIL_FAST: Raise on the first invalid node (true/false)
        - MRKL_CHECK_LEAF_DIGESTS: Recheck leaf digests (true/false)
        - MRKL_CHECK_ORDERING: Check bounds and item order (true/false)
        - MRKL_LOG_LEVEL: Log level name
        - MRKL_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}FAIL_FAST"):
            overrides.setdefault("tree", {})["fail_fast"] = _env_flag(
                f"{ENV_PREFIX}FAIL_FAST", "false"
            )
        if os.getenv(f"{ENV_PREFIX}CHECK_LEAF_DIGESTS"):
            overrides.setdefault("tree", {})["check_leaf_digests"] = _env_flag(
                f"{ENV_PREFIX}CHECK_LEAF_DIGESTS", "true"
            )
        if os.getenv(f"{ENV_PREFIX}CHECK_ORDERING"):
            overrides.setdefault("tree", {})["check_ordering"] = _env_flag(
                f"{ENV_PREFIX}CHECK_ORDERING", "true"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigException(f"Invalid YAML: {e}", path=str(path)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                path=str(path),
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {}) or {}
        try:
            tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        except TypeError as e:
            raise ConfigException(f"Invalid tree configuration: {e}") from e

        return cls(
            tree=tree,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "fail_fast": self.tree.fail_fast,
                "check_leaf_digests": self.tree.check_leaf_digests,
                "check_ordering": self.tree.check_ordering,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
