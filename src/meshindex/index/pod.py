"""
Per-pod settings derived from Kubernetes metadata.

Pods configure inbound policy behavior through annotations:

- ``config.linkerd.io/opaque-ports``: ports whose traffic is not protocol-detected
- ``config.linkerd.io/proxy-require-identity-inbound-ports``: ports that
  only accept meshed, identified clients
- ``config.linkerd.io/default-inbound-policy``: overrides the cluster's
  default inbound policy for this pod

A malformed annotation never blocks indexing of a pod. Each value is
read into an ``AnnotationLookup``; the boundary helpers log a single
warning for a failed lookup and fall back to the empty/absent value,
leaving the other fields unaffected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Mapping, Optional, TypeVar, Union

from meshindex.index.policy import DefaultPolicy, InvalidDefaultPolicyError
from meshindex.index.ports import MAX_PORT, MIN_PORT, PortSetParseError, parse_portset
from meshindex.models import ObjectMeta, PodSpec
from meshindex.observability.logging import get_logger

logger = get_logger("index.pod")

OPAQUE_PORTS_ANNOTATION = "config.linkerd.io/opaque-ports"
REQUIRE_ID_PORTS_ANNOTATION = "config.linkerd.io/proxy-require-identity-inbound-ports"
DEFAULT_POLICY_ANNOTATION = "config.linkerd.io/default-inbound-policy"

T = TypeVar("T")

PortNameIndex = dict[str, set[int]]


@dataclass(frozen=True)
class AnnotationLookup(Generic[T]):
    """
    Outcome of reading one annotation.

    Attributes:
        annotation: Annotation key that was read
        value: Parsed value, or the fallback when parsing failed
        raw: Raw annotation value, None if the annotation is not set
        error: Parse error that forced the fallback, if any
    """

    annotation: str
    value: T
    raw: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def used_fallback(self) -> bool:
        """True if the annotation was set but could not be parsed."""
        return self.error is not None

    def resolve(self) -> T:
        """Return the value, logging once if the fallback was used."""
        if self.error is not None:
            logger.annotation_invalid(
                self.annotation,
                self.raw or "",
                self.error,
            )
        return self.value


def read_ports_annotation(
    annotations: Mapping[str, str], annotation: str
) -> AnnotationLookup[frozenset[int]]:
    """Read a port-set annotation without side effects."""
    spec = annotations.get(annotation)
    if spec is None:
        return AnnotationLookup(annotation=annotation, value=frozenset())
    try:
        ports = parse_portset(spec)
    except PortSetParseError as e:
        return AnnotationLookup(
            annotation=annotation, value=frozenset(), raw=spec, error=e
        )
    return AnnotationLookup(annotation=annotation, value=ports, raw=spec)


def read_default_policy(
    annotations: Mapping[str, str],
) -> AnnotationLookup[Optional[DefaultPolicy]]:
    """Read the default policy override without side effects."""
    raw = annotations.get(DEFAULT_POLICY_ANNOTATION)
    if raw is None:
        return AnnotationLookup(annotation=DEFAULT_POLICY_ANNOTATION, value=None)
    try:
        mode = DefaultPolicy.parse(raw)
    except InvalidDefaultPolicyError as e:
        return AnnotationLookup(
            annotation=DEFAULT_POLICY_ANNOTATION, value=None, raw=raw, error=e
        )
    return AnnotationLookup(annotation=DEFAULT_POLICY_ANNOTATION, value=mode, raw=raw)


def ports_annotation(annotations: Mapping[str, str], annotation: str) -> frozenset[int]:
    """
    Read ``annotation`` as a port set.

    Returns the empty set if the annotation is not set or is invalid.
    """
    return read_ports_annotation(annotations, annotation).resolve()


def default_policy(annotations: Mapping[str, str]) -> Optional[DefaultPolicy]:
    """
    Read the pod's default policy override.

    Returns None if the annotation is not set or is invalid.
    """
    return read_default_policy(annotations).resolve()


@dataclass(frozen=True)
class Settings:
    """
    Per-pod settings, as configured by the pod's annotations.

    Opaque and identity-required ports are independent: a port may
    appear in both sets.
    """

    require_id_ports: frozenset[int] = field(default_factory=frozenset)
    opaque_ports: frozenset[int] = field(default_factory=frozenset)
    default_policy: Optional[DefaultPolicy] = None

    @classmethod
    def from_annotations(cls, annotations: Optional[Mapping[str, str]]) -> Settings:
        """
        Build settings from an annotation map.

        Returns the default settings when the object has no annotations.
        """
        if annotations is None:
            return cls()

        return cls(
            default_policy=default_policy(annotations),
            opaque_ports=ports_annotation(annotations, OPAQUE_PORTS_ANNOTATION),
            require_id_ports=ports_annotation(annotations, REQUIRE_ID_PORTS_ANNOTATION),
        )

    @classmethod
    def from_metadata(cls, meta: ObjectMeta) -> Settings:
        """
        Read pod settings from the pod metadata including:

        - Opaque ports
        - Ports that require identity
        - The pod's default policy
        """
        return cls.from_annotations(meta.annotations)

    def effective_default_policy(self, cluster_default: DefaultPolicy) -> DefaultPolicy:
        """Return the pod override if set, otherwise ``cluster_default``."""
        if self.default_policy is not None:
            return self.default_policy
        return cluster_default

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "require_id_ports": sorted(self.require_id_ports),
            "opaque_ports": sorted(self.opaque_ports),
            "default_policy": self.default_policy.value if self.default_policy else None,
        }


@dataclass(frozen=True)
class Meta:
    """
    Pod metadata that can change over the pod's lifetime.

    A new Meta is built for every metadata update and replaces the
    previous one; compare with ``==`` to skip no-op updates. Meta is
    not hashable since its labels are a plain mapping.
    """

    labels: dict[str, str] = field(default_factory=dict)
    settings: Settings = field(default_factory=Settings)

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def from_metadata(cls, meta: ObjectMeta) -> Meta:
        """Build from a pod's metadata."""
        settings = Settings.from_metadata(meta)
        if logger.logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Computed pod settings",
                pod=meta.name,
                namespace=meta.namespace,
                settings=settings.to_dict(),
            )
        return cls(labels=dict(meta.labels or {}), settings=settings)


def tcp_port_names(spec: Optional[PodSpec]) -> PortNameIndex:
    """
    Get the named TCP ports from a pod spec.

    A port entry without a protocol is TCP. Unnamed entries are ignored.
    Ports sharing a name, across or within containers, accumulate into
    one set.
    """
    port_names: PortNameIndex = {}
    if spec is None:
        return port_names

    for container in spec.containers:
        for port in container.ports or ():
            if port.protocol not in (None, "TCP"):
                continue
            if port.name is None:
                continue
            port_names.setdefault(port.name, set()).add(port.container_port)

    return port_names


def resolve_port_name(port: Union[int, str], port_names: Mapping[str, set[int]]) -> frozenset[int]:
    """
    Resolve a numeric or named port reference to container ports.

    Args:
        port: Port number, or a container port name
        port_names: Index built by ``tcp_port_names``

    Returns:
        The matching ports; empty if the name is unknown or the number
        is outside the port range
    """
    if isinstance(port, bool):
        return frozenset()
    if isinstance(port, int):
        if MIN_PORT <= port <= MAX_PORT:
            return frozenset((port,))
        return frozenset()
    return frozenset(port_names.get(port, ()))
