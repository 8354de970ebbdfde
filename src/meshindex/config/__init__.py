"""
Configuration management for the mesh policy index.

Provides the cluster-wide index configuration and loaders for
JSON/YAML files and environment variables.
"""

from meshindex.config.index_config import (
    ConfigError,
    IndexConfig,
    load_config_from_env,
)

__all__ = [
    "ConfigError",
    "IndexConfig",
    "load_config_from_env",
]
