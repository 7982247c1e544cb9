from __future__ import annotations

from kubernetes.client import V1Service

from vcsync.constants import (
    APISERVER_SERVICE,
    DEFAULT_NAMESPACE,
    FEATURE_SUPER_CLUSTER_POOLING,
    FEATURE_SUPER_CLUSTER_SERVICE_NETWORK,
    KUBERNETES_SERVICE,
)
from vcsync.conversion.keys import to_super_namespace
from vcsync.core.config import FeatureGates, settings


def control_plane_service_key(cluster: str, gates: FeatureGates) -> tuple[str, str]:
    """(namespace, name) of the super cluster service backing ``default/kubernetes``."""
    namespace = to_super_namespace(cluster, DEFAULT_NAMESPACE)
    name = KUBERNETES_SERVICE

    # With service networking the real apiserver service in the cluster's
    # root namespace is surfaced as the tenant's default/kubernetes.
    if gates.enabled(FEATURE_SUPER_CLUSTER_SERVICE_NETWORK):
        namespace = cluster
        name = APISERVER_SERVICE

    # Pooling wins over service networking.
    if gates.enabled(FEATURE_SUPER_CLUSTER_POOLING):
        namespace = DEFAULT_NAMESPACE
        name = KUBERNETES_SERVICE
    return namespace, name


def is_control_plane_service(service: V1Service, cluster: str, gates: FeatureGates | None = None) -> bool:
    if gates is None:
        gates = settings.gates()
    meta = service.metadata
    if meta is None:
        return False
    return (meta.namespace, meta.name) == control_plane_service_key(cluster, gates)
