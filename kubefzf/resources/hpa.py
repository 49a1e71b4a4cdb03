"""HorizontalPodAutoscaler resource variant (autoscaling/v2)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import nested_int, nested_string, required_string


@dataclass(frozen=True)
class HorizontalPodAutoscaler(K8sResource):
    """Scale target as ``Kind/name`` plus replica bounds."""

    kind: ClassVar[ResourceKind] = ResourceKind.HORIZONTAL_POD_AUTOSCALER

    meta: ResourceMeta
    reference: str = ""
    min_replicas: int = 1
    max_replicas: int = 0
    current_replicas: int = 0

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> HorizontalPodAutoscaler:
        spec = obj.spec
        target = spec.scale_target_ref
        min_replicas = spec.min_replicas
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            reference=f"{target.kind}/{target.name}",
            min_replicas=1 if min_replicas is None else min_replicas,
            max_replicas=spec.max_replicas or 0,
            current_replicas=getattr(obj.status, "current_replicas", None) or 0,
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> HorizontalPodAutoscaler:
        meta = ResourceMeta.from_dynamic(obj, config)
        target_kind, _ = nested_string(obj, "spec", "scaleTargetRef", "kind")
        target_name = required_string(obj, "spec", "scaleTargetRef", "name")
        min_replicas, found = nested_int(obj, "spec", "minReplicas")
        return cls(
            meta=meta,
            reference=f"{target_kind}/{target_name}",
            min_replicas=min_replicas if found else 1,
            max_replicas=nested_int(obj, "spec", "maxReplicas")[0],
            current_replicas=nested_int(obj, "status", "currentReplicas")[0],
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [self.reference, self.min_replicas, self.max_replicas, self.current_replicas]
