from __future__ import annotations

import logging

from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from vcsync.constants import VIRTUAL_CLUSTER_GROUP, VIRTUAL_CLUSTER_PLURAL, VIRTUAL_CLUSTER_VERSION
from vcsync.core.config import settings
from vcsync.core.errors import NotFoundError
from vcsync.domain.models import VirtualCluster

log = logging.getLogger("vcsync.k8s")


def load() -> None:
    """Load credentials for the super cluster."""
    if settings.in_cluster is True:
        config.load_incluster_config()
        return
    if settings.in_cluster is False:
        config.load_kube_config(config_file=settings.kubeconfig)
        return
    try:
        config.load_incluster_config()
    except ConfigException:
        log.debug("not running in cluster, falling back to kubeconfig")
        config.load_kube_config(config_file=settings.kubeconfig)


def core() -> client.CoreV1Api:
    return client.CoreV1Api()


def custom() -> client.CustomObjectsApi:
    return client.CustomObjectsApi()


def read_virtual_cluster(namespace: str, name: str, api: client.CustomObjectsApi | None = None) -> VirtualCluster:
    if api is None:
        load()
        api = custom()
    try:
        obj = api.get_namespaced_custom_object(
            VIRTUAL_CLUSTER_GROUP, VIRTUAL_CLUSTER_VERSION, namespace, VIRTUAL_CLUSTER_PLURAL, name
        )
    except ApiException as e:
        if e.status == 404:
            raise NotFoundError("virtualcluster", name, namespace) from e
        raise
    return VirtualCluster.from_custom_object(obj)
