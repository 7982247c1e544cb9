from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from kubernetes.client import V1ObjectMeta

from vcsync.constants import LABEL_ADMIN_KUBECONFIG
from vcsync.core.errors import MalformedObjectError


@dataclass(frozen=True)
class VirtualCluster:
    """Identity of a tenant control plane.

    ``uid``, ``namespace`` and ``name`` never change for the lifetime of the
    object; everything derived from them (cluster key, physical namespaces)
    is therefore stable too.
    """

    uid: str
    namespace: str
    name: str
    annotations: Mapping[str, str] = field(default_factory=dict)

    @property
    def inline_kubeconfig(self) -> str | None:
        return self.annotations.get(LABEL_ADMIN_KUBECONFIG)

    @classmethod
    def from_meta(cls, meta: V1ObjectMeta) -> "VirtualCluster":
        return cls(
            uid=str(meta.uid or ""),
            namespace=meta.namespace or "",
            name=meta.name or "",
            annotations=dict(meta.annotations or {}),
        )

    @classmethod
    def from_custom_object(cls, obj: Mapping[str, Any]) -> "VirtualCluster":
        """Build from the dict ``CustomObjectsApi`` returns for a virtualcluster."""
        meta = obj.get("metadata") if isinstance(obj, Mapping) else None
        if not isinstance(meta, Mapping):
            raise MalformedObjectError("virtualcluster object has no metadata", {"type": type(obj).__name__})
        for key in ("uid", "namespace", "name"):
            if not meta.get(key):
                raise MalformedObjectError(f"virtualcluster metadata.{key} is empty", {"field": key})
        return cls(
            uid=str(meta["uid"]),
            namespace=str(meta["namespace"]),
            name=str(meta["name"]),
            annotations=dict(meta.get("annotations") or {}),
        )
