"""
Mesh Policy Index - per-pod inbound policy settings from Kubernetes metadata

Derives the configuration a service-mesh policy controller needs for
each pod:

- Opaque and identity-required ports, from port-list annotations
- The pod's default inbound policy override
- Named TCP container ports, for resolving ``Server`` port references

Malformed annotations never block indexing: the affected field falls
back to its empty value and a warning is logged.

Quick Start:
    >>> from meshindex import ObjectMeta, Settings
    >>>
    >>> meta = ObjectMeta(annotations={"config.linkerd.io/opaque-ports": "4,1-2"})
    >>> sorted(Settings.from_metadata(meta).opaque_ports)
    [1, 2, 4]
"""

from __future__ import annotations

__version__ = "0.1.0"

from meshindex.index import (
    DEFAULT_POLICY_ANNOTATION,
    OPAQUE_PORTS_ANNOTATION,
    REQUIRE_ID_PORTS_ANNOTATION,
    AnnotationLookup,
    DefaultPolicy,
    InvalidDefaultPolicyError,
    Meta,
    PortNameIndex,
    PortNumberError,
    PortRangeOrderError,
    PortSetParseError,
    Settings,
    ZeroPortError,
    default_policy,
    format_portset,
    parse_portset,
    ports_annotation,
    read_default_policy,
    read_ports_annotation,
    resolve_port_name,
    tcp_port_names,
)
from meshindex.models import (
    Container,
    ContainerPort,
    ObjectMeta,
    PodSpec,
    pod_metadata_from_manifest,
    pod_spec_from_manifest,
)
from meshindex.config import ConfigError, IndexConfig, load_config_from_env

__all__ = [
    "__version__",
    # Index
    "DEFAULT_POLICY_ANNOTATION",
    "OPAQUE_PORTS_ANNOTATION",
    "REQUIRE_ID_PORTS_ANNOTATION",
    "AnnotationLookup",
    "DefaultPolicy",
    "InvalidDefaultPolicyError",
    "Meta",
    "PortNameIndex",
    "PortNumberError",
    "PortRangeOrderError",
    "PortSetParseError",
    "Settings",
    "ZeroPortError",
    "default_policy",
    "format_portset",
    "parse_portset",
    "ports_annotation",
    "read_default_policy",
    "read_ports_annotation",
    "resolve_port_name",
    "tcp_port_names",
    # Models
    "Container",
    "ContainerPort",
    "ObjectMeta",
    "PodSpec",
    "pod_metadata_from_manifest",
    "pod_spec_from_manifest",
    # Config
    "ConfigError",
    "IndexConfig",
    "load_config_from_env",
]
