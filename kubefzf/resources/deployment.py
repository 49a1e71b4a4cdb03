"""Deployment resource variant."""

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

# spec.replicas defaults to 1 server-side when omitted
_DEFAULT_REPLICAS = 1


@dataclass(frozen=True)
class Deployment(K8sResource):
    """A deployment's rollout counters and pod selector."""

    kind: ClassVar[ResourceKind] = ResourceKind.DEPLOYMENT

    meta: ResourceMeta
    desired_replicas: int = _DEFAULT_REPLICAS
    current_replicas: int = 0
    updated_replicas: int = 0
    available_replicas: int = 0
    selectors: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Deployment:
        spec = obj.spec
        status = obj.status
        desired = getattr(spec, "replicas", None)
        selector = getattr(spec, "selector", None)
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            desired_replicas=_DEFAULT_REPLICAS if desired is None else desired,
            current_replicas=getattr(status, "replicas", None) or 0,
            updated_replicas=getattr(status, "updated_replicas", None) or 0,
            available_replicas=getattr(status, "available_replicas", None) or 0,
            selectors=frozen_pairs(getattr(selector, "match_labels", None)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Deployment:
        meta = ResourceMeta.from_dynamic(obj, config)
        desired, found = nested_int(obj, "spec", "replicas")
        return cls(
            meta=meta,
            desired_replicas=desired if found else _DEFAULT_REPLICAS,
            current_replicas=nested_int(obj, "status", "replicas")[0],
            updated_replicas=nested_int(obj, "status", "updatedReplicas")[0],
            available_replicas=nested_int(obj, "status", "availableReplicas")[0],
            selectors=frozen_pairs(nested_string_map(obj, "spec", "selector", "matchLabels")[0]),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.desired_replicas,
            self.current_replicas,
            self.updated_replicas,
            self.available_replicas,
            self.selectors_string(dict(self.selectors)),
        ]
