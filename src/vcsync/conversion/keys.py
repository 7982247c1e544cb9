from __future__ import annotations

import hashlib
import logging
import re

from kubernetes.client import V1Namespace

from vcsync.constants import (
    CLUSTER_KEY_DIGEST_LENGTH,
    LABEL_CLUSTER,
    LABEL_VC_UID,
    MAX_NAMESPACE_LENGTH,
    TRUNCATED_DIGEST_LENGTH,
    TRUNCATED_PREFIX_LENGTH,
)
from vcsync.core.errors import NamespaceConflictError
from vcsync.domain.models import VirtualCluster

log = logging.getLogger("vcsync.conversion.keys")

_DNS1123_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
DNS1123_SUBDOMAIN_MAX_LENGTH = 253


def _sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def to_cluster_key(vc: VirtualCluster) -> str:
    """Return ``<namespace>-<sha256(uid)[:6]>-<name>``."""
    digest = _sha256_hex(vc.uid)[:CLUSTER_KEY_DIGEST_LENGTH]
    return f"{vc.namespace}-{digest}-{vc.name}"


def to_super_namespace(cluster: str, namespace: str) -> str:
    """Name of the super cluster namespace backing a tenant namespace."""
    target = f"{cluster}-{namespace}"
    if len(target) > MAX_NAMESPACE_LENGTH:
        # Digest the full name so truncated siblings stay distinct.
        digest = _sha256_hex(target)[:TRUNCATED_DIGEST_LENGTH]
        truncated = f"{target[:TRUNCATED_PREFIX_LENGTH]}-{digest}"
        log.debug("truncated super namespace", extra={"cluster": cluster, "namespace": namespace, "target": truncated})
        return truncated
    return target


def is_dns1123_label(name: str) -> bool:
    return 0 < len(name) <= MAX_NAMESPACE_LENGTH and bool(_DNS1123_LABEL.match(name))


def is_dns1123_subdomain(name: str) -> bool:
    if not 0 < len(name) <= DNS1123_SUBDOMAIN_MAX_LENGTH:
        return False
    return all(_DNS1123_LABEL.match(part) for part in name.split("."))


def check_namespace_owner(namespace: V1Namespace, vc: VirtualCluster) -> None:
    """Raise NamespaceConflictError if ``namespace`` is owned by a virtual cluster other than ``vc``."""
    meta = namespace.metadata
    annotations = (meta.annotations if meta else None) or {}
    owner_uid = annotations.get(LABEL_VC_UID)
    owner_cluster = annotations.get(LABEL_CLUSTER)
    if owner_uid is None and owner_cluster is None:
        return
    if owner_uid == vc.uid:
        return
    name = meta.name if meta else None
    log.warning(
        "super namespace owned by another virtual cluster",
        extra={"namespace": name, "owner_uid": owner_uid, "owner_cluster": owner_cluster, "vc_uid": vc.uid},
    )
    raise NamespaceConflictError(
        f"namespace {name} is already owned by {owner_cluster or 'unknown cluster'}",
        {"namespace": name, "owner_uid": owner_uid, "owner_cluster": owner_cluster, "vc_uid": vc.uid},
    )
