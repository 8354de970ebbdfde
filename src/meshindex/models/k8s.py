"""
Kubernetes input models for the pod index.

These are immutable snapshots of the parts of a Kubernetes object that
the index reads: object metadata (labels, annotations) and the pod
spec's container ports. They can be built from manifest dictionaries
(YAML/JSON, camelCase keys) or from ``kubernetes`` python-client
objects (snake_case attributes).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

_POD_TEMPLATE_KINDS = (
    "Deployment",
    "StatefulSet",
    "DaemonSet",
    "ReplicaSet",
    "Job",
)


class ManifestError(ValueError):
    """A manifest field has a value the index cannot read."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}: {reason} (got {value!r})")


def _container_port_number(data: Mapping[str, Any]) -> int:
    if "containerPort" not in data:
        raise ManifestError("containerPort", None, "required field is missing")
    value = data["containerPort"]
    if isinstance(value, bool):
        raise ManifestError("containerPort", value, "must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ManifestError("containerPort", value, "must be an integer") from None


@dataclass(frozen=True)
class ContainerPort:
    """
    A port declared by a container.

    Attributes:
        container_port: Port number exposed on the pod IP
        protocol: Protocol (TCP, UDP, SCTP); None means the API default (TCP)
        name: Optional IANA_SVC_NAME used by named-port references
    """

    container_port: int
    protocol: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContainerPort:
        """
        Create from a manifest port entry.

        Raises:
            ManifestError: containerPort is missing or not an integer
        """
        return cls(
            container_port=_container_port_number(data),
            protocol=data.get("protocol"),
            name=data.get("name"),
        )

    @classmethod
    def from_k8s(cls, port: Any) -> ContainerPort:
        """Create from a ``V1ContainerPort``."""
        return cls(
            container_port=int(port.container_port),
            protocol=port.protocol,
            name=port.name,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to manifest form."""
        result: dict[str, Any] = {"containerPort": self.container_port}
        if self.protocol is not None:
            result["protocol"] = self.protocol
        if self.name is not None:
            result["name"] = self.name
        return result


@dataclass(frozen=True)
class Container:
    """A container with its declared ports. ``ports`` is None when unset."""

    name: str = ""
    ports: Optional[tuple[ContainerPort, ...]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Container:
        """Create from a manifest container entry."""
        ports = data.get("ports")
        return cls(
            name=data.get("name", ""),
            ports=(
                tuple(ContainerPort.from_dict(p) for p in ports)
                if ports is not None
                else None
            ),
        )

    @classmethod
    def from_k8s(cls, container: Any) -> Container:
        """Create from a ``V1Container``."""
        ports = container.ports
        return cls(
            name=container.name or "",
            ports=(
                tuple(ContainerPort.from_k8s(p) for p in ports)
                if ports is not None
                else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to manifest form."""
        result: dict[str, Any] = {"name": self.name}
        if self.ports is not None:
            result["ports"] = [p.to_dict() for p in self.ports]
        return result


@dataclass(frozen=True)
class PodSpec:
    """The containers of a pod spec."""

    containers: tuple[Container, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PodSpec:
        """Create from a manifest pod spec."""
        return cls(
            containers=tuple(
                Container.from_dict(c) for c in (data.get("containers") or [])
            ),
        )

    @classmethod
    def from_k8s(cls, spec: Any) -> PodSpec:
        """Create from a ``V1PodSpec``."""
        return cls(
            containers=tuple(Container.from_k8s(c) for c in (spec.containers or [])),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to manifest form."""
        return {"containers": [c.to_dict() for c in self.containers]}


@dataclass(frozen=True)
class ObjectMeta:
    """
    Object metadata relevant to the pod index.

    ``labels`` and ``annotations`` stay None when the object does not
    carry them at all, which is distinct from an empty mapping.
    """

    name: str = ""
    namespace: str = ""
    labels: Optional[dict[str, str]] = None
    annotations: Optional[dict[str, str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectMeta:
        """Create from a manifest ``metadata`` block."""
        labels = data.get("labels")
        annotations = data.get("annotations")
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            labels=_string_map(labels) if labels is not None else None,
            annotations=_string_map(annotations) if annotations is not None else None,
        )

    @classmethod
    def from_k8s(cls, meta: Any) -> ObjectMeta:
        """Create from a ``V1ObjectMeta``."""
        return cls(
            name=meta.name or "",
            namespace=meta.namespace or "",
            labels=dict(meta.labels) if meta.labels is not None else None,
            annotations=dict(meta.annotations) if meta.annotations is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to manifest form."""
        result: dict[str, Any] = {"name": self.name}
        if self.namespace:
            result["namespace"] = self.namespace
        if self.labels is not None:
            result["labels"] = dict(self.labels)
        if self.annotations is not None:
            result["annotations"] = dict(self.annotations)
        return result


def _string_map(data: Mapping[str, Any]) -> dict[str, str]:
    # YAML turns unquoted values like `8080` or `true` into non-strings.
    return {str(k): "" if v is None else str(v) for k, v in data.items()}


def pod_spec_from_manifest(manifest: Mapping[str, Any]) -> Optional[PodSpec]:
    """
    Extract the pod spec from a Pod or pod-templated workload manifest.

    Args:
        manifest: A Kubernetes object as loaded from YAML/JSON

    Returns:
        PodSpec, or None if the object has no pod spec
    """
    kind = manifest.get("kind", "")

    if kind == "Pod":
        pod_spec = manifest.get("spec")
        return PodSpec.from_dict(pod_spec) if pod_spec is not None else None

    spec = manifest.get("spec") or {}
    if kind == "CronJob":
        spec = (spec.get("jobTemplate") or {}).get("spec") or {}
    elif kind not in _POD_TEMPLATE_KINDS:
        return None

    template_spec = (spec.get("template") or {}).get("spec")
    if template_spec is None:
        return None
    return PodSpec.from_dict(template_spec)


def pod_metadata_from_manifest(manifest: Mapping[str, Any]) -> ObjectMeta:
    """
    Return the metadata that applies to the pods of a manifest.

    For pod-templated workloads this is the template's metadata, with
    the workload's name and namespace; for everything else it is the
    object's own metadata.
    """
    meta = manifest.get("metadata") or {}
    kind = manifest.get("kind", "")
    spec = manifest.get("spec") or {}

    if kind == "CronJob":
        spec = (spec.get("jobTemplate") or {}).get("spec") or {}
    elif kind not in _POD_TEMPLATE_KINDS:
        return ObjectMeta.from_dict(meta)

    template_meta = (spec.get("template") or {}).get("metadata") or {}
    merged = dict(template_meta)
    merged["name"] = meta.get("name", "")
    merged["namespace"] = meta.get("namespace", "")
    return ObjectMeta.from_dict(merged)
