"""ReplicaSet resource variant."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource, frozen_pairs
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import nested_int, nested_string_map


@dataclass(frozen=True)
class ReplicaSet(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.REPLICA_SET

    meta: ResourceMeta
    desired_replicas: int = 1
    current_replicas: int = 0
    ready_replicas: int = 0
    selectors: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> ReplicaSet:
        spec = obj.spec
        status = obj.status
        desired = getattr(spec, "replicas", None)
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            desired_replicas=1 if desired is None else desired,
            current_replicas=getattr(status, "replicas", None) or 0,
            ready_replicas=getattr(status, "ready_replicas", None) or 0,
            selectors=frozen_pairs(getattr(getattr(spec, "selector", None), "match_labels", None)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> ReplicaSet:
        meta = ResourceMeta.from_dynamic(obj, config)
        desired, found = nested_int(obj, "spec", "replicas")
        return cls(
            meta=meta,
            desired_replicas=desired if found else 1,
            current_replicas=nested_int(obj, "status", "replicas")[0],
            ready_replicas=nested_int(obj, "status", "readyReplicas")[0],
            selectors=frozen_pairs(nested_string_map(obj, "spec", "selector", "matchLabels")[0]),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.desired_replicas,
            self.current_replicas,
            self.ready_replicas,
            self.selectors_string(dict(self.selectors)),
        ]
