"""Job and CronJob resource variants."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ResourceKind
from kubefzf.resources.base import K8sResource
from kubefzf.resources.format import NONE_STR, time_to_age
from kubefzf.resources.meta import ResourceMeta, coerce_timestamp, parse_timestamp
from kubefzf.resources.unstructured import nested_bool, nested_int, nested_slice, nested_string, required_string


@dataclass(frozen=True)
class Job(K8sResource):
    """A job's completion counters.

    ``completions`` defaults to 1 when unset, matching a non-parallel job.
    """

    kind: ClassVar[ResourceKind] = ResourceKind.JOB

    meta: ResourceMeta
    completions: int = 1
    succeeded: int = 0
    active: int = 0
    failed: int = 0

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Job:
        status = obj.status
        completions = getattr(obj.spec, "completions", None)
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            completions=1 if completions is None else completions,
            succeeded=getattr(status, "succeeded", None) or 0,
            active=getattr(status, "active", None) or 0,
            failed=getattr(status, "failed", None) or 0,
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Job:
        meta = ResourceMeta.from_dynamic(obj, config)
        completions, found = nested_int(obj, "spec", "completions")
        return cls(
            meta=meta,
            completions=completions if found else 1,
            succeeded=nested_int(obj, "status", "succeeded")[0],
            active=nested_int(obj, "status", "active")[0],
            failed=nested_int(obj, "status", "failed")[0],
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [f"{self.succeeded}/{self.completions}", self.active, self.failed]


@dataclass(frozen=True)
class CronJob(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.CRON_JOB

    meta: ResourceMeta
    schedule: str = ""
    suspend: bool = False
    active: int = 0
    last_schedule: datetime | None = None

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> CronJob:
        spec = obj.spec
        status = obj.status
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            schedule=getattr(spec, "schedule", None) or "",
            suspend=bool(getattr(spec, "suspend", None)),
            active=len(getattr(status, "active", None) or []),
            last_schedule=coerce_timestamp(getattr(status, "last_schedule_time", None)),
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> CronJob:
        meta = ResourceMeta.from_dynamic(obj, config)
        raw_last, found = nested_string(obj, "status", "lastScheduleTime")
        active, _ = nested_slice(obj, "status", "active")
        return cls(
            meta=meta,
            schedule=required_string(obj, "spec", "schedule"),
            suspend=nested_bool(obj, "spec", "suspend")[0],
            active=len(active),
            last_schedule=parse_timestamp(raw_last, "status.lastScheduleTime") if found else None,
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        last = time_to_age(self.last_schedule, now) if self.last_schedule else NONE_STR
        return [self.schedule, str(self.suspend), self.active, last]
