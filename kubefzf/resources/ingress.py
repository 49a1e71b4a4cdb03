"""Ingress resource variant."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource
from kubefzf.resources.format import join_or_none
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import nested_maps, nested_string


@dataclass(frozen=True)
class Ingress(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.INGRESS

    meta: ResourceMeta
    class_name: str = ""
    hosts: tuple[str, ...] = ()
    addresses: tuple[str, ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Ingress:
        spec = obj.spec
        lb = getattr(getattr(obj.status, "load_balancer", None), "ingress", None) or []
        hosts = {r.host for r in (getattr(spec, "rules", None) or []) if r.host}
        addresses = {i.ip or i.hostname for i in lb if i.ip or i.hostname}
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            class_name=getattr(spec, "ingress_class_name", None) or "",
            hosts=tuple(sorted(hosts)),
            addresses=tuple(sorted(addresses)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Ingress:
        meta = ResourceMeta.from_dynamic(obj, config)
        hosts = set()
        for rule in nested_maps(obj, "spec", "rules"):
            host, found = nested_string(rule, "host")
            if found and host:
                hosts.add(host)
        addresses = set()
        for ingress in nested_maps(obj, "status", "loadBalancer", "ingress"):
            ip, _ = nested_string(ingress, "ip")
            hostname, _ = nested_string(ingress, "hostname")
            if ip or hostname:
                addresses.add(ip or hostname)
        return cls(
            meta=meta,
            class_name=nested_string(obj, "spec", "ingressClassName")[0],
            hosts=tuple(sorted(hosts)),
            addresses=tuple(sorted(addresses)),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [self.class_name, join_or_none(self.hosts), join_or_none(self.addresses)]
