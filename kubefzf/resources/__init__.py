"""Resource variant registry and public API.

The kind set is closed: every :class:`ResourceKind` maps to exactly one
variant class.

Usage::

    from kubefzf.resources import construct
    from kubefzf.models.config import CtorConfig
    from kubefzf.models.resources import ObjectSource, ResourceKind

    pod = construct(ResourceKind.POD, raw_dict, CtorConfig(cluster="prod"), ObjectSource.DYNAMIC)
    line = pod.render()
"""

from __future__ import annotations

from typing import Any

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ObjectSource, ResourceKind
from kubefzf.resources.base import K8sResource
from kubefzf.resources.configmap import ConfigMap
from kubefzf.resources.daemonset import DaemonSet
from kubefzf.resources.deployment import Deployment
from kubefzf.resources.hpa import HorizontalPodAutoscaler
from kubefzf.resources.ingress import Ingress
from kubefzf.resources.job import CronJob, Job
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.node import Namespace, Node
from kubefzf.resources.pod import Pod
from kubefzf.resources.replicaset import ReplicaSet
from kubefzf.resources.service import Service
from kubefzf.resources.statefulset import StatefulSet
from kubefzf.resources.unstructured import ResourceConstructionError
from kubefzf.resources.volumes import PersistentVolume, PersistentVolumeClaim

__all__ = [
    "RESOURCE_TYPES",
    "K8sResource",
    "ResourceConstructionError",
    "ResourceMeta",
    "UnknownKindError",
    "construct",
    "resource_type",
]


class UnknownKindError(KeyError):
    """Raised for a kind outside the supported set."""


RESOURCE_TYPES: dict[ResourceKind, type[K8sResource]] = {
    cls.kind: cls
    for cls in (
        Pod,
        Deployment,
        StatefulSet,
        DaemonSet,
        ReplicaSet,
        Service,
        Ingress,
        ConfigMap,
        Job,
        CronJob,
        PersistentVolumeClaim,
        HorizontalPodAutoscaler,
        Node,
        Namespace,
        PersistentVolume,
    )
}


def resource_type(kind: ResourceKind | str) -> type[K8sResource]:
    """Return the variant class for *kind* (a :class:`ResourceKind` or its string value)."""
    try:
        return RESOURCE_TYPES[ResourceKind(kind)]
    except (ValueError, KeyError) as exc:
        raise UnknownKindError(kind) from exc


def construct(
    kind: ResourceKind | str,
    obj: Any,
    config: CtorConfig,
    source: ObjectSource = ObjectSource.TYPED,
) -> K8sResource:
    """Build the variant for *kind* from a typed or dynamic object.

    Raises:
        UnknownKindError: if *kind* is not supported.
        ResourceConstructionError: if a required field is missing or malformed.
    """
    return resource_type(kind).from_runtime(obj, config, ObjectSource(source))
