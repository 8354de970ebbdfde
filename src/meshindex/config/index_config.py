"""
Index configuration for the mesh policy index.

Holds cluster-wide settings that apply when a pod does not override
them, plus logging options.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any

import yaml

from meshindex.index.policy import DefaultPolicy, InvalidDefaultPolicyError
from meshindex.observability.logging import LOG_FORMATS


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


def _parse_policy(value: str) -> DefaultPolicy:
    try:
        return DefaultPolicy.parse(value)
    except InvalidDefaultPolicyError as e:
        raise ConfigError(str(e)) from e


def _check_level(value: str) -> str:
    value = str(value)
    if not isinstance(logging.getLevelName(value.upper()), int):
        raise ConfigError(f"invalid log level: {value!r}")
    return value.upper()


def _check_format(value: str) -> str:
    if value not in LOG_FORMATS:
        raise ConfigError(
            f"invalid log format: {value!r} (expected one of {', '.join(LOG_FORMATS)})"
        )
    return value


@dataclass
class IndexConfig:
    """Configuration for pod indexing."""

    cluster_default_policy: DefaultPolicy = DefaultPolicy.ALL_UNAUTHENTICATED
    log_level: str = "INFO"
    log_format: str = "human"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "cluster_default_policy": self.cluster_default_policy.value,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IndexConfig:
        """
        Create from dictionary.

        Raises:
            ConfigError: If a value is invalid
        """
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping")
        return cls(
            cluster_default_policy=_parse_policy(
                data.get("cluster_default_policy", DefaultPolicy.ALL_UNAUTHENTICATED.value)
            ),
            log_level=_check_level(data.get("log_level", "INFO")),
            log_format=_check_format(data.get("log_format", "human")),
        )

    @classmethod
    def from_json(cls, json_str: str) -> IndexConfig:
        """Create from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON configuration: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str) -> IndexConfig:
        """Load configuration from a JSON or YAML file."""
        path = os.path.expanduser(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith(".json"):
                    return cls.from_json(f.read())
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read configuration {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML configuration {path}: {e}") from e
        return cls.from_dict(data or {})

    def save(self, path: str) -> None:
        """Save configuration to file (JSON or YAML by extension)."""
        path = os.path.expanduser(path)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            if path.endswith(".json"):
                f.write(self.to_json())
            else:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)


def load_config_from_env() -> IndexConfig:
    """
    Load configuration from environment variables.

    Environment variables:
        MESHINDEX_CONFIG_FILE: Path to configuration file
        MESHINDEX_DEFAULT_POLICY: Cluster default inbound policy
        MESHINDEX_LOG_LEVEL: Log level
        MESHINDEX_LOG_FORMAT: Log format (human, json)

    Returns:
        IndexConfig instance
    """
    config_file = os.getenv("MESHINDEX_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        return IndexConfig.from_file(config_file)

    config = IndexConfig()

    policy = os.getenv("MESHINDEX_DEFAULT_POLICY")
    if policy:
        config.cluster_default_policy = _parse_policy(policy)

    level = os.getenv("MESHINDEX_LOG_LEVEL")
    if level:
        config.log_level = _check_level(level)

    log_format = os.getenv("MESHINDEX_LOG_FORMAT")
    if log_format:
        config.log_format = _check_format(log_format)

    return config
