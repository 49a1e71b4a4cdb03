"""Service resource variant."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource, frozen_pairs
from kubefzf.resources.format import join_or_none
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import (
    nested_int,
    nested_maps,
    nested_string,
    nested_string_map,
    nested_string_slice,
)


@dataclass(frozen=True)
class Service(K8sResource):
    """A service's addressing and port mapping.

    ``external_ips`` merges ``spec.externalIPs`` with the load balancer
    ingress points reported in status.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.SERVICE

    meta: ResourceMeta
    service_type: str = "ClusterIP"
    cluster_ip: str = ""
    external_ips: tuple[str, ...] = ()
    ports: tuple[str, ...] = ()
    selectors: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Service:
        spec = obj.spec
        lb = getattr(getattr(obj.status, "load_balancer", None), "ingress", None) or []
        external = list(getattr(spec, "external_i_ps", None) or [])
        external.extend(i.ip or i.hostname for i in lb if i.ip or i.hostname)
        ports = [_port_string(p.port, p.node_port, p.protocol) for p in (getattr(spec, "ports", None) or [])]
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            service_type=getattr(spec, "type", None) or "ClusterIP",
            cluster_ip=getattr(spec, "cluster_ip", None) or "",
            external_ips=tuple(sorted(set(external))),
            ports=tuple(sorted(ports)),
            selectors=frozen_pairs(getattr(spec, "selector", None)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Service:
        meta = ResourceMeta.from_dynamic(obj, config)
        external, _ = nested_string_slice(obj, "spec", "externalIPs")
        external = list(external)
        for ingress in nested_maps(obj, "status", "loadBalancer", "ingress"):
            ip, _ = nested_string(ingress, "ip")
            hostname, _ = nested_string(ingress, "hostname")
            if ip or hostname:
                external.append(ip or hostname)

        ports = []
        for p in nested_maps(obj, "spec", "ports"):
            port, _ = nested_int(p, "port")
            node_port, _ = nested_int(p, "nodePort")
            protocol, _ = nested_string(p, "protocol")
            ports.append(_port_string(port, node_port, protocol))

        service_type, _ = nested_string(obj, "spec", "type")
        return cls(
            meta=meta,
            service_type=service_type or "ClusterIP",
            cluster_ip=nested_string(obj, "spec", "clusterIP")[0],
            external_ips=tuple(sorted(set(external))),
            ports=tuple(sorted(ports)),
            selectors=frozen_pairs(nested_string_map(obj, "spec", "selector")[0]),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.service_type,
            self.cluster_ip,
            join_or_none(self.external_ips),
            join_or_none(self.ports),
            self.selectors_string(dict(self.selectors)),
        ]


def _port_string(port: int | None, node_port: int | None, protocol: str | None) -> str:
    """Render a service port the way kubectl does: ``80:30080/TCP``."""
    text = f"{port}:{node_port}" if node_port else f"{port}"
    return f"{text}/{protocol or 'TCP'}"
