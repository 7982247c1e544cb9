from __future__ import annotations

import base64
import binascii
import logging

from kubernetes.client import ApiException, CoreV1Api

from vcsync.constants import KUBECONFIG_ADMIN_SECRET_NAME, LABEL_ADMIN_KUBECONFIG
from vcsync.conversion.keys import to_cluster_key
from vcsync.core.errors import EncodingError, NotFoundError
from vcsync.domain.models import VirtualCluster

log = logging.getLogger("vcsync.conversion.credentials")


def _b64decode(value: str, source: str) -> bytes:
    try:
        decoded = base64.b64decode("".join(value.split()), validate=True)
    except (binascii.Error, ValueError) as err:
        raise EncodingError(f"failed to decode kubeconfig from {source}: {err}", {"source": source}) from err
    if not decoded:
        raise EncodingError(f"kubeconfig from {source} is empty", {"source": source})
    return decoded


def get_admin_kubeconfig(api: CoreV1Api, vc: VirtualCluster) -> bytes:
    """Inline annotation first, then the admin-kubeconfig secret in the root namespace."""
    inline = vc.inline_kubeconfig
    if inline is not None:
        log.debug("using inline admin kubeconfig", extra={"vc_namespace": vc.namespace, "vc_name": vc.name})
        return _b64decode(inline, f"annotation {LABEL_ADMIN_KUBECONFIG}")

    root_namespace = to_cluster_key(vc)
    try:
        secret = api.read_namespaced_secret(KUBECONFIG_ADMIN_SECRET_NAME, root_namespace)
    except ApiException as e:
        if e.status == 404:
            raise NotFoundError("secret", KUBECONFIG_ADMIN_SECRET_NAME, root_namespace) from e
        raise

    # The python client leaves secret data base64 encoded.
    data = secret.data or {}
    encoded = data.get(KUBECONFIG_ADMIN_SECRET_NAME)
    if not encoded:
        raise NotFoundError(
            "secret key",
            KUBECONFIG_ADMIN_SECRET_NAME,
            root_namespace,
            message=f"secret {root_namespace}/{KUBECONFIG_ADMIN_SECRET_NAME} has no {KUBECONFIG_ADMIN_SECRET_NAME} key",
        )
    return _b64decode(encoded, f"secret {root_namespace}/{KUBECONFIG_ADMIN_SECRET_NAME}")
