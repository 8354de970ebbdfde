"""
Data models for the mesh policy index.

Immutable snapshots of the Kubernetes object fields the index reads:

- ObjectMeta: labels and annotations of a pod (or pod template)
- PodSpec / Container / ContainerPort: declared container ports
"""

from meshindex.models.k8s import (
    Container,
    ContainerPort,
    ManifestError,
    ObjectMeta,
    PodSpec,
    pod_metadata_from_manifest,
    pod_spec_from_manifest,
)

__all__ = [
    "Container",
    "ContainerPort",
    "ManifestError",
    "ObjectMeta",
    "PodSpec",
    "pod_metadata_from_manifest",
    "pod_spec_from_manifest",
]
