from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from kubernetes.client import ApiClient, V1ObjectMeta

from vcsync.constants import (
    LABEL_CLUSTER,
    LABEL_NAMESPACE,
    LABEL_OWNER_REFERENCES,
    LABEL_SCHEMA_VERSION,
    LABEL_UID,
    LABEL_VC_NAME,
    LABEL_VC_NAMESPACE,
    LABEL_VC_UID,
    SCHEMA_VERSION,
)
from vcsync.conversion.keys import to_super_namespace
from vcsync.core.errors import EncodingError, MalformedObjectError

log = logging.getLogger("vcsync.conversion.metadata")

T = TypeVar("T")

# snake_case attribute -> wire name, for objects handled as plain dicts.
_WIRE_NAMES = {
    "owner_references": "ownerReferences",
    "self_link": "selfLink",
    "resource_version": "resourceVersion",
    "deletion_timestamp": "deletionTimestamp",
    "deletion_grace_period_seconds": "deletionGracePeriodSeconds",
    "cluster_name": "clusterName",
}

# Fields the super cluster assigns; never carried across a projection.
_RESET_FIELDS = (
    "self_link",
    "uid",
    "resource_version",
    "generation",
    "deletion_timestamp",
    "deletion_grace_period_seconds",
    "owner_references",
    "finalizers",
    "cluster_name",
)

_serializer = ApiClient()


class ObjectMeta:
    """Uniform read/write view over typed (``V1ObjectMeta``) and dict metadata."""

    def __init__(self, raw: V1ObjectMeta | Mapping[str, Any]):
        self._raw = raw

    @property
    def typed(self) -> bool:
        return isinstance(self._raw, V1ObjectMeta)

    def get(self, attr: str) -> Any:
        if self.typed:
            return getattr(self._raw, attr, None)
        return self._raw.get(_WIRE_NAMES.get(attr, attr))

    def set(self, attr: str, value: Any) -> None:
        if self.typed:
            # cluster_name is gone from recent client models.
            if hasattr(self._raw, attr):
                setattr(self._raw, attr, value)
            return
        key = _WIRE_NAMES.get(attr, attr)
        if value is None:
            self._raw.pop(key, None)
        else:
            self._raw[key] = value

    @property
    def uid(self) -> str:
        return str(self.get("uid") or "")

    @property
    def name(self) -> str:
        return self.get("name") or ""

    @property
    def namespace(self) -> str:
        return self.get("namespace") or ""

    @property
    def annotations(self) -> dict[str, str]:
        return dict(self.get("annotations") or {})

    def merge(self, attr: str, values: dict[str, str]) -> None:
        """Add ``values`` to labels/annotations, keeping unrelated existing keys."""
        merged = dict(self.get(attr) or {})
        merged.update(values)
        self.set(attr, merged)


def object_meta(obj: Any, create: bool = False) -> ObjectMeta:
    """Return a metadata accessor for ``obj``.

    Missing metadata is attached to ``obj`` only when ``create`` is set;
    otherwise a detached empty one is returned and ``obj`` is left alone.
    Raises :class:`MalformedObjectError` when ``obj`` carries no usable
    metadata.
    """
    if isinstance(obj, Mapping):
        raw = obj.get("metadata")
        if raw is None:
            raw = {}
            if create:
                obj["metadata"] = raw
        if not isinstance(raw, MutableMapping if create else Mapping):
            raise MalformedObjectError("object metadata is not a mapping", {"type": type(raw).__name__})
        return ObjectMeta(raw)

    if not hasattr(obj, "metadata"):
        raise MalformedObjectError("object has no metadata", {"type": type(obj).__name__})
    raw = obj.metadata
    if raw is None:
        raw = V1ObjectMeta()
        if create:
            obj.metadata = raw
    if not isinstance(raw, V1ObjectMeta):
        raise MalformedObjectError("object metadata is not V1ObjectMeta", {"type": type(raw).__name__})
    return ObjectMeta(raw)


def reset_metadata(obj: T) -> T:
    """Clear every super-cluster-assigned field of ``obj`` in place; idempotent."""
    meta = obj if isinstance(obj, ObjectMeta) else object_meta(obj, create=True)
    for attr in _RESET_FIELDS:
        meta.set(attr, None)
    return obj


def _owner_references_json(meta: ObjectMeta) -> str:
    refs = meta.get("owner_references")
    try:
        return json.dumps(_serializer.sanitize_for_serialization(refs), separators=(",", ":"))
    except (AttributeError, TypeError, ValueError) as err:
        raise EncodingError("failed to marshal owner references", {"error": str(err)}) from err


def build_metadata(cluster: str, vc_namespace: str, vc_name: str, target_namespace: str, obj: T) -> T:
    """Return a copy of ``obj`` placed in ``target_namespace`` with tenant ownership recorded."""
    target = copy.deepcopy(obj)
    meta = object_meta(target, create=True)

    ownership = {
        LABEL_CLUSTER: cluster,
        LABEL_UID: meta.uid,
        LABEL_OWNER_REFERENCES: _owner_references_json(meta),
        LABEL_NAMESPACE: meta.namespace,
        LABEL_VC_NAME: vc_name,
        LABEL_VC_NAMESPACE: vc_namespace,
        LABEL_SCHEMA_VERSION: SCHEMA_VERSION,
    }

    reset_metadata(meta)
    if target_namespace:
        meta.set("namespace", target_namespace)

    meta.merge("annotations", ownership)
    meta.merge("labels", {LABEL_VC_NAME: vc_name, LABEL_VC_NAMESPACE: vc_namespace})
    return target


def build_super_namespace(cluster: str, vc_name: str, vc_namespace: str, vc_uid: str, obj: T) -> T:
    """Project a tenant namespace into its super cluster namespace.

    Namespaces cannot hold an owner reference to the namespaced
    VirtualCluster, so ownership lives only in annotations; the namespace
    garbage collector matches on them.
    """
    target = copy.deepcopy(obj)
    meta = object_meta(target, create=True)

    meta.merge(
        "annotations",
        {
            LABEL_CLUSTER: cluster,
            LABEL_UID: meta.uid,
            LABEL_NAMESPACE: meta.name,
            LABEL_VC_NAME: vc_name,
            LABEL_VC_NAMESPACE: vc_namespace,
            LABEL_VC_UID: vc_uid,
            LABEL_SCHEMA_VERSION: SCHEMA_VERSION,
        },
    )

    reset_metadata(meta)
    meta.set("name", to_super_namespace(cluster, meta.name))
    log.debug("built super namespace", extra={"cluster": cluster, "target": meta.name})
    return target
