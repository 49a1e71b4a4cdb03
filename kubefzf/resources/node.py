"""Node and Namespace resource variants (cluster-scoped)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource
from kubefzf.resources.format import join_or_none
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import nested_bool, nested_maps, nested_string

_ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
_LEGACY_ROLE_LABEL = "kubernetes.io/role"
_INSTANCE_TYPE_LABELS = ("node.kubernetes.io/instance-type", "beta.kubernetes.io/instance-type")
_ZONE_LABELS = ("topology.kubernetes.io/zone", "failure-domain.beta.kubernetes.io/zone")


@dataclass(frozen=True)
class Node(K8sResource):
    """A node's readiness, placement labels, addresses and taints.

    Roles, instance type and zone are derived from well-known labels, so
    they are identical whichever representation the node came from.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.NODE
    namespaced: ClassVar[bool] = False

    meta: ResourceMeta
    status: str = "Unknown"
    internal_ip: str = ""
    external_ip: str = ""
    taints: tuple[str, ...] = ()
    kubelet_version: str = ""

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Node:
        spec = obj.spec
        status = obj.status
        ready = next(
            (c.status for c in (getattr(status, "conditions", None) or []) if c.type == "Ready"),
            None,
        )
        addresses = {a.type: a.address for a in (getattr(status, "addresses", None) or [])}
        taints = [_taint_string(t.key, t.value, t.effect) for t in (getattr(spec, "taints", None) or [])]
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            status=_node_status(ready, bool(getattr(spec, "unschedulable", None))),
            internal_ip=addresses.get("InternalIP", ""),
            external_ip=addresses.get("ExternalIP", ""),
            taints=tuple(sorted(taints)),
            kubelet_version=getattr(getattr(status, "node_info", None), "kubelet_version", None) or "",
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Node:
        meta = ResourceMeta.from_dynamic(obj, config)
        ready = None
        for condition in nested_maps(obj, "status", "conditions"):
            if nested_string(condition, "type")[0] == "Ready":
                ready = nested_string(condition, "status")[0]
        addresses = {}
        for address in nested_maps(obj, "status", "addresses"):
            addresses[nested_string(address, "type")[0]] = nested_string(address, "address")[0]
        taints = [
            _taint_string(nested_string(t, "key")[0], nested_string(t, "value")[0], nested_string(t, "effect")[0])
            for t in nested_maps(obj, "spec", "taints")
        ]
        return cls(
            meta=meta,
            status=_node_status(ready, nested_bool(obj, "spec", "unschedulable")[0]),
            internal_ip=addresses.get("InternalIP", ""),
            external_ip=addresses.get("ExternalIP", ""),
            taints=tuple(sorted(taints)),
            kubelet_version=nested_string(obj, "status", "nodeInfo", "kubeletVersion")[0],
        )

    @property
    def roles(self) -> tuple[str, ...]:
        roles = {k[len(_ROLE_LABEL_PREFIX) :] for k in self.meta.labels if k.startswith(_ROLE_LABEL_PREFIX)}
        legacy = self.meta.labels.get(_LEGACY_ROLE_LABEL)
        if legacy:
            roles.add(legacy)
        return tuple(sorted(r for r in roles if r))

    @property
    def instance_type(self) -> str:
        return _first_label(self.meta.labels, _INSTANCE_TYPE_LABELS)

    @property
    def zone(self) -> str:
        return _first_label(self.meta.labels, _ZONE_LABELS)

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            join_or_none(self.roles),
            self.status,
            self.instance_type,
            self.zone,
            self.internal_ip,
            self.external_ip,
            join_or_none(self.taints),
            self.kubelet_version,
        ]


@dataclass(frozen=True)
class Namespace(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.NAMESPACE
    namespaced: ClassVar[bool] = False

    meta: ResourceMeta
    phase: str = ""

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Namespace:
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            phase=getattr(obj.status, "phase", None) or "",
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Namespace:
        return cls(meta=ResourceMeta.from_dynamic(obj, config), phase=nested_string(obj, "status", "phase")[0])

    def columns(self, now: datetime | None = None) -> list[object]:
        return [self.phase]


def _node_status(ready: str | None, unschedulable: bool) -> str:
    if ready is None:
        status = "Unknown"
    else:
        status = "Ready" if ready == "True" else "NotReady"
    return f"{status},SchedulingDisabled" if unschedulable else status


def _taint_string(key: str | None, value: str | None, effect: str | None) -> str:
    text = f"{key}={value}" if value else (key or "")
    return f"{text}:{effect}" if effect else text


def _first_label(labels: Mapping[str, str], keys: Iterable[str]) -> str:
    for key in keys:
        if labels.get(key):
            return labels[key]
    return ""
