"""
Pytest configuration and fixtures for mesh policy index tests.

This module provides common fixtures used across unit tests.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from meshindex.models import Container, ContainerPort, ObjectMeta, PodSpec


# Sample data fixtures


@pytest.fixture
def sample_annotations() -> dict[str, str]:
    """Return a valid set of mesh annotations."""
    return {
        "config.linkerd.io/opaque-ports": "3306,11211",
        "config.linkerd.io/proxy-require-identity-inbound-ports": "8080-8082",
        "config.linkerd.io/default-inbound-policy": "cluster-authenticated",
        "kubectl.kubernetes.io/restartedAt": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def sample_object_meta(sample_annotations: dict[str, str]) -> ObjectMeta:
    """Return pod metadata carrying labels and mesh annotations."""
    return ObjectMeta(
        name="web-7d9f8b6c5-abcde",
        namespace="emojivoto",
        labels={"app": "web", "version": "v11"},
        annotations=sample_annotations,
    )


@pytest.fixture
def mixed_protocol_pod_spec() -> PodSpec:
    """Return a pod spec with named, unnamed, TCP and UDP ports."""
    return PodSpec(
        containers=(
            Container(
                name="app",
                ports=(
                    ContainerPort(container_port=80, protocol="TCP", name="http"),
                    ContainerPort(container_port=8080, protocol=None, name="http"),
                    ContainerPort(container_port=53, protocol="UDP", name="udp1"),
                    ContainerPort(container_port=9, protocol="TCP", name=None),
                ),
            ),
        ),
    )


@pytest.fixture
def sample_deployment_manifest() -> dict[str, Any]:
    """Return a Deployment manifest as loaded from YAML."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": "web",
            "namespace": "emojivoto",
            "annotations": {"deployment.kubernetes.io/revision": "3"},
        },
        "spec": {
            "replicas": 2,
            "template": {
                "metadata": {
                    "labels": {"app": "web"},
                    "annotations": {
                        "config.linkerd.io/opaque-ports": "4444",
                        "config.linkerd.io/default-inbound-policy": "deny",
                    },
                },
                "spec": {
                    "containers": [
                        {
                            "name": "web-svc",
                            "image": "buoyantio/emojivoto-web:v11",
                            "ports": [
                                {"name": "http", "containerPort": 8080},
                                {"name": "admin", "containerPort": 9990, "protocol": "TCP"},
                                {"name": "dns", "containerPort": 53, "protocol": "UDP"},
                            ],
                        },
                        {
                            "name": "sidecar",
                            "image": "busybox",
                        },
                    ],
                },
            },
        },
    }


@pytest.fixture
def k8s_pod() -> SimpleNamespace:
    """Return an object shaped like a kubernetes client ``V1Pod``."""
    return SimpleNamespace(
        metadata=SimpleNamespace(
            name="api-0",
            namespace="default",
            labels={"app": "api"},
            annotations={"config.linkerd.io/opaque-ports": "5432"},
        ),
        spec=SimpleNamespace(
            containers=[
                SimpleNamespace(
                    name="api",
                    ports=[
                        SimpleNamespace(container_port=8080, protocol="TCP", name="http"),
                        SimpleNamespace(container_port=9000, protocol=None, name="grpc"),
                    ],
                ),
                SimpleNamespace(name="proxy", ports=None),
            ],
        ),
    )
