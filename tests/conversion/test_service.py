from __future__ import annotations

import pytest
from kubernetes.client import V1ObjectMeta, V1Service

from vcsync.constants import FEATURE_SUPER_CLUSTER_POOLING, FEATURE_SUPER_CLUSTER_SERVICE_NETWORK
from vcsync.conversion.service import control_plane_service_key, is_control_plane_service
from vcsync.core.config import FeatureGates

CLUSTER = "team-a-6ca13d-dev"

NONE = FeatureGates()
NETWORK = FeatureGates.of(FEATURE_SUPER_CLUSTER_SERVICE_NETWORK)
POOLING = FeatureGates.of(FEATURE_SUPER_CLUSTER_POOLING)
BOTH = FeatureGates.of(FEATURE_SUPER_CLUSTER_POOLING, FEATURE_SUPER_CLUSTER_SERVICE_NETWORK)


def _svc(namespace: str, name: str) -> V1Service:
    return V1Service(metadata=V1ObjectMeta(namespace=namespace, name=name))


@pytest.mark.parametrize(
    "gates, expected",
    [
        (NONE, (f"{CLUSTER}-default", "kubernetes")),
        (NETWORK, (CLUSTER, "apiserver-svc")),
        (POOLING, ("default", "kubernetes")),
        (BOTH, ("default", "kubernetes")),
    ],
)
def test_expected_service_per_policy(gates, expected):
    assert control_plane_service_key(CLUSTER, gates) == expected
    assert is_control_plane_service(_svc(*expected), CLUSTER, gates)


def test_pooling_wins_over_service_network():
    assert not is_control_plane_service(_svc(CLUSTER, "apiserver-svc"), CLUSTER, BOTH)
    assert is_control_plane_service(_svc("default", "kubernetes"), CLUSTER, BOTH)


def test_default_policy_rejects_other_services():
    assert not is_control_plane_service(_svc(f"{CLUSTER}-default", "web"), CLUSTER, NONE)
    assert not is_control_plane_service(_svc("default", "kubernetes"), CLUSTER, NONE)
    assert not is_control_plane_service(_svc(CLUSTER, "apiserver-svc"), CLUSTER, NONE)


def test_uses_process_settings_when_gates_omitted(monkeypatch):
    from vcsync.core import config

    monkeypatch.setattr(config.settings, "feature_gates", f"{FEATURE_SUPER_CLUSTER_SERVICE_NETWORK}=true")
    assert is_control_plane_service(_svc(CLUSTER, "apiserver-svc"), CLUSTER)


def test_same_inputs_same_answer():
    svc = _svc(CLUSTER, "apiserver-svc")
    assert {is_control_plane_service(svc, CLUSTER, NETWORK) for _ in range(5)} == {True}


def test_service_without_metadata():
    assert not is_control_plane_service(V1Service(), CLUSTER, NONE)
