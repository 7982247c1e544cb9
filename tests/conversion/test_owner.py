from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException, V1Namespace, V1ObjectMeta, V1Pod

from tests.conftest import FakeNamespaceLister
from vcsync.constants import LABEL_CLUSTER, LABEL_NAMESPACE
from vcsync.conversion.keys import to_cluster_key
from vcsync.conversion.metadata import build_metadata, build_super_namespace
from vcsync.conversion.owner import CoreV1NamespaceLister, get_virtual_namespace, get_virtual_owner
from vcsync.core.errors import NotFoundError


def test_scenario_round_trip_through_namespace(vc):
    cluster = to_cluster_key(vc)
    p_ns = build_super_namespace(cluster, vc.name, vc.namespace, vc.uid, V1Namespace(metadata=V1ObjectMeta(name="default")))
    lister = FakeNamespaceLister(p_ns)

    assert get_virtual_namespace(lister, cluster + "-default") == (cluster, "default")


def test_namespace_without_annotations_returns_empty():
    lister = FakeNamespaceLister(V1Namespace(metadata=V1ObjectMeta(name="kube-system")))
    assert get_virtual_namespace(lister, "kube-system") == ("", "")


def test_missing_namespace_is_not_found():
    with pytest.raises(NotFoundError) as exc:
        get_virtual_namespace(FakeNamespaceLister(), "gone")
    assert exc.value.kind == "namespace"
    assert exc.value.name == "gone"


@pytest.mark.parametrize("namespace", ["default", "kube-public", "team-x"])
def test_round_trip_through_object(namespace):
    pod = V1Pod(metadata=V1ObjectMeta(name="p", namespace=namespace, uid="u"))
    projected = build_metadata("c-123456-v", "team-a", "dev", "c-123456-v-" + namespace, pod)
    assert get_virtual_owner(projected) == ("c-123456-v", namespace)


def test_owner_of_plain_object():
    assert get_virtual_owner(V1Pod(metadata=V1ObjectMeta(name="p"))) == ("", "")
    assert get_virtual_owner({"metadata": {"annotations": {LABEL_CLUSTER: "c", LABEL_NAMESPACE: "n"}}}) == ("c", "n")
    assert get_virtual_owner(object()) == ("", "")


class TestCoreV1NamespaceLister:
    def test_reads_namespace(self):
        api = MagicMock()
        api.read_namespace.return_value = V1Namespace(metadata=V1ObjectMeta(name="x"))
        assert CoreV1NamespaceLister(api).get("x").metadata.name == "x"
        api.read_namespace.assert_called_once_with("x")

    def test_404_becomes_not_found(self):
        api = MagicMock()
        api.read_namespace.side_effect = ApiException(status=404, reason="Not Found")
        with pytest.raises(NotFoundError) as exc:
            CoreV1NamespaceLister(api).get("x")
        assert isinstance(exc.value.__cause__, ApiException)

    def test_other_errors_propagate(self):
        api = MagicMock()
        api.read_namespace.side_effect = ApiException(status=500, reason="boom")
        with pytest.raises(ApiException):
            CoreV1NamespaceLister(api).get("x")


def test_owner_lookup_leaves_object_alone():
    obj = {"kind": "Widget"}
    pod = V1Pod()
    assert get_virtual_owner(obj) == ("", "")
    assert get_virtual_owner(pod) == ("", "")
    assert obj == {"kind": "Widget"}
    assert pod.metadata is None


def test_malformed_owner_lookup_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="vcsync.conversion.owner"):
        assert get_virtual_owner({"metadata": "nope"}) == ("", "")
    assert "no readable metadata" in caplog.text
