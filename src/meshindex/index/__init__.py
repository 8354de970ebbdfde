"""
Pod index primitives.

Derives per-pod inbound policy configuration from Kubernetes metadata:

- Port set parsing for port-list annotations
- Default inbound policy modes
- Pod settings, metadata and named TCP ports
"""

from meshindex.index.policy import DefaultPolicy, InvalidDefaultPolicyError
from meshindex.index.ports import (
    MAX_PORT,
    MIN_PORT,
    PortNumberError,
    PortRangeOrderError,
    PortSetParseError,
    ZeroPortError,
    format_portset,
    parse_portset,
)
from meshindex.index.pod import (
    DEFAULT_POLICY_ANNOTATION,
    OPAQUE_PORTS_ANNOTATION,
    REQUIRE_ID_PORTS_ANNOTATION,
    AnnotationLookup,
    Meta,
    PortNameIndex,
    Settings,
    default_policy,
    ports_annotation,
    read_default_policy,
    read_ports_annotation,
    resolve_port_name,
    tcp_port_names,
)

__all__ = [
    # Policy
    "DefaultPolicy",
    "InvalidDefaultPolicyError",
    # Ports
    "MAX_PORT",
    "MIN_PORT",
    "PortNumberError",
    "PortRangeOrderError",
    "PortSetParseError",
    "ZeroPortError",
    "format_portset",
    "parse_portset",
    # Pod
    "DEFAULT_POLICY_ANNOTATION",
    "OPAQUE_PORTS_ANNOTATION",
    "REQUIRE_ID_PORTS_ANNOTATION",
    "AnnotationLookup",
    "Meta",
    "PortNameIndex",
    "Settings",
    "default_policy",
    "ports_annotation",
    "read_default_policy",
    "read_ports_annotation",
    "resolve_port_name",
    "tcp_port_names",
]
