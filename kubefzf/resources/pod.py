"""Pod resource variant."""

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
from kubefzf.resources.unstructured import nested_field, nested_maps, nested_string, required_string

# Tolerations added to every pod by the DefaultTolerationSeconds admission plugin
_DEFAULT_TOLERATION_KEYS: frozenset[str] = frozenset(
    {
        "node.kubernetes.io/not-ready",
        "node.kubernetes.io/unreachable",
    }
)


@dataclass(frozen=True)
class Pod(K8sResource):
    """A pod with its placement, phase and container layout."""

    kind: ClassVar[ResourceKind] = ResourceKind.POD

    meta: ResourceMeta
    phase: str = ""
    pod_ip: str = ""
    host_ip: str = ""
    node_name: str = ""
    containers: tuple[str, ...] = ()
    claims: tuple[str, ...] = ()
    tolerations: tuple[str, ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Pod:
        meta = ResourceMeta.from_object_meta(obj.metadata, config)
        spec = obj.spec
        status = obj.status
        deleting = obj.metadata.deletion_timestamp is not None

        tolerations = [
            _toleration_string(t.key, t.operator, t.value, t.effect)
            for t in (getattr(spec, "tolerations", None) or [])
            if t.key not in _DEFAULT_TOLERATION_KEYS
        ]
        claims = [
            v.persistent_volume_claim.claim_name
            for v in (getattr(spec, "volumes", None) or [])
            if v.persistent_volume_claim is not None
        ]
        return cls(
            meta=meta,
            phase=_pod_phase(getattr(status, "phase", None), getattr(status, "reason", None), deleting),
            pod_ip=getattr(status, "pod_ip", None) or "",
            host_ip=getattr(status, "host_ip", None) or "",
            node_name=getattr(spec, "node_name", None) or "",
            containers=tuple(c.name for c in (getattr(spec, "containers", None) or [])),
            claims=tuple(sorted(claims)),
            tolerations=tuple(sorted(tolerations)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Pod:
        meta = ResourceMeta.from_dynamic(obj, config)
        phase, _ = nested_string(obj, "status", "phase")
        reason, _ = nested_string(obj, "status", "reason")
        _, deleting = nested_field(obj, "metadata", "deletionTimestamp")

        tolerations = []
        for t in nested_maps(obj, "spec", "tolerations"):
            key, _ = nested_string(t, "key")
            if key in _DEFAULT_TOLERATION_KEYS:
                continue
            operator, _ = nested_string(t, "operator")
            value, _ = nested_string(t, "value")
            effect, _ = nested_string(t, "effect")
            tolerations.append(_toleration_string(key, operator, value, effect))

        claims = []
        for volume in nested_maps(obj, "spec", "volumes"):
            claim, found = nested_string(volume, "persistentVolumeClaim", "claimName")
            if found:
                claims.append(claim)

        return cls(
            meta=meta,
            phase=_pod_phase(phase, reason, deleting),
            pod_ip=nested_string(obj, "status", "podIP")[0],
            host_ip=nested_string(obj, "status", "hostIP")[0],
            node_name=nested_string(obj, "spec", "nodeName")[0],
            containers=tuple(required_string(c, "name") for c in nested_maps(obj, "spec", "containers")),
            claims=tuple(sorted(claims)),
            tolerations=tuple(sorted(tolerations)),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.phase,
            self.pod_ip,
            self.host_ip,
            self.node_name,
            join_or_none(self.containers),
            join_or_none(self.claims),
            join_or_none(self.tolerations),
        ]


def _pod_phase(phase: str | None, reason: str | None, deleting: bool) -> str:
    """Phase as shown by kubectl: a status reason (e.g. Evicted) wins over the phase."""
    if deleting:
        return "Terminating"
    return reason or phase or ""


def _toleration_string(key: str | None, operator: str | None, value: str | None, effect: str | None) -> str:
    """Render a toleration as ``key=value:effect``; an empty key with Exists tolerates everything."""
    if not key and operator == "Exists":
        text = "*"
    elif value:
        text = f"{key}={value}"
    else:
        text = key or ""
    return f"{text}:{effect}" if effect else text
