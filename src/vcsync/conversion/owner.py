from __future__ import annotations

import logging
from typing import Any, Protocol

from kubernetes.client import ApiException, CoreV1Api, V1Namespace

from vcsync.constants import LABEL_CLUSTER, LABEL_NAMESPACE
from vcsync.conversion.metadata import object_meta
from vcsync.core.errors import MalformedObjectError, NotFoundError

log = logging.getLogger("vcsync.conversion.owner")


class NamespaceLister(Protocol):
    def get(self, name: str) -> V1Namespace: ...


class CoreV1NamespaceLister:
    """Serve namespace lookups straight from the API server."""

    def __init__(self, api: CoreV1Api):
        self.api = api

    def get(self, name: str) -> V1Namespace:
        try:
            return self.api.read_namespace(name)
        except ApiException as e:
            if e.status == 404:
                raise NotFoundError("namespace", name) from e
            raise


def get_virtual_namespace(ns_lister: NamespaceLister, p_namespace: str) -> tuple[str, str]:
    """Find the tenant (cluster, namespace) a super cluster namespace belongs to.

    Used for objects created in the super cluster itself, such as events.
    Returns empty strings when the namespace is not a projection; lookup
    failures propagate.
    """
    namespace = ns_lister.get(p_namespace)
    if namespace is None:
        raise NotFoundError("namespace", p_namespace)
    return get_virtual_owner(namespace)


def get_virtual_owner(obj: Any) -> tuple[str, str]:
    try:
        annotations = object_meta(obj).annotations
    except MalformedObjectError as e:
        log.debug("object has no readable metadata, treating as unowned", extra={"error": e.message, "details": e.details})
        return "", ""
    return annotations.get(LABEL_CLUSTER, ""), annotations.get(LABEL_NAMESPACE, "")
