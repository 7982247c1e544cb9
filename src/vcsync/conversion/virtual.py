from __future__ import annotations

import copy

from kubernetes.client import (
    CoreV1Event,
    V1CustomResourceDefinition,
    V1PersistentVolume,
    V1PersistentVolumeClaim,
    V1PriorityClass,
    V1StorageClass,
)

from vcsync.conversion.metadata import build_metadata, object_meta, reset_metadata


def build_virtual_event(cluster: str, p_event: CoreV1Event, v_obj) -> CoreV1Event:
    """Copy a super cluster event onto the tenant object it is about.

    The cluster key is scrubbed from the message: super cluster names show
    up in free text (``<cluster>-<ns>``) where metadata stripping cannot
    reach them.
    """
    v_meta = object_meta(v_obj)
    v_event = reset_metadata(copy.deepcopy(p_event))
    v_event.metadata.namespace = v_meta.namespace
    if v_event.involved_object is not None:
        v_event.involved_object.namespace = v_meta.namespace
        v_event.involved_object.uid = v_meta.uid or None
        v_event.involved_object.resource_version = None

    if v_event.message and cluster:
        message = v_event.message
        # Removing one occurrence can splice together another.
        while cluster in message:
            message = message.replace(cluster + "-", "").replace(cluster, "")
        v_event.message = message
    return v_event


def build_virtual_storage_class(cluster: str, p_storage_class: V1StorageClass) -> V1StorageClass:
    return reset_metadata(copy.deepcopy(p_storage_class))


def build_virtual_priority_class(cluster: str, p_priority_class: V1PriorityClass) -> V1PriorityClass:
    return reset_metadata(copy.deepcopy(p_priority_class))


def build_virtual_crd(cluster: str, p_crd: V1CustomResourceDefinition) -> V1CustomResourceDefinition:
    return reset_metadata(copy.deepcopy(p_crd))


def build_virtual_persistent_volume(
    cluster: str,
    vc_namespace: str,
    vc_name: str,
    p_pv: V1PersistentVolume,
    v_pvc: V1PersistentVolumeClaim,
) -> V1PersistentVolume:
    """Project a super cluster PV so that it binds to the tenant's claim."""
    v_pv = build_metadata(cluster, vc_namespace, vc_name, "", p_pv)
    claim_ref = v_pv.spec.claim_ref if v_pv.spec is not None else None
    if claim_ref is not None:
        claim_meta = object_meta(v_pvc)
        claim_ref.namespace = claim_meta.namespace
        claim_ref.uid = claim_meta.uid or None
    return v_pv
