"""DaemonSet resource variant."""

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
class DaemonSet(K8sResource):
    """Scheduling counters are read from status; a daemonset has no replica count."""

    kind: ClassVar[ResourceKind] = ResourceKind.DAEMON_SET

    meta: ResourceMeta
    desired_scheduled: int = 0
    current_scheduled: int = 0
    ready: int = 0
    selectors: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> DaemonSet:
        status = obj.status
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            desired_scheduled=getattr(status, "desired_number_scheduled", None) or 0,
            current_scheduled=getattr(status, "current_number_scheduled", None) or 0,
            ready=getattr(status, "number_ready", None) or 0,
            selectors=frozen_pairs(getattr(getattr(obj.spec, "selector", None), "match_labels", None)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> DaemonSet:
        return cls(
            meta=ResourceMeta.from_dynamic(obj, config),
            desired_scheduled=nested_int(obj, "status", "desiredNumberScheduled")[0],
            current_scheduled=nested_int(obj, "status", "currentNumberScheduled")[0],
            ready=nested_int(obj, "status", "numberReady")[0],
            selectors=frozen_pairs(nested_string_map(obj, "spec", "selector", "matchLabels")[0]),
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.desired_scheduled,
            self.current_scheduled,
            self.ready,
            self.selectors_string(dict(self.selectors)),
        ]
