"""Cluster layer: Kubernetes access behind a narrow gateway interface."""

from rollout_check.cluster.gateway import ClusterGateway, KubernetesGateway, LogStream, connect
from rollout_check.cluster.models import (
    ContainerSnapshot,
    PodSnapshot,
    SecretLookup,
    WorkloadDescriptor,
    WorkloadRef,
)

__all__ = [
    "ClusterGateway",
    "ContainerSnapshot",
    "KubernetesGateway",
    "LogStream",
    "PodSnapshot",
    "SecretLookup",
    "WorkloadDescriptor",
    "WorkloadRef",
    "connect",
]
