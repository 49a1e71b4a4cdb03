"""PersistentVolume and PersistentVolumeClaim resource variants."""

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
from kubefzf.resources.unstructured import nested_quantity, nested_string, nested_string_slice


@dataclass(frozen=True)
class PersistentVolume(K8sResource):
    """A cluster-scoped volume; ``claim`` is ``namespace/name`` of the bound claim."""

    kind: ClassVar[ResourceKind] = ResourceKind.PERSISTENT_VOLUME
    namespaced: ClassVar[bool] = False

    meta: ResourceMeta
    capacity: str = ""
    access_modes: tuple[str, ...] = ()
    reclaim_policy: str = ""
    phase: str = ""
    claim: str = ""
    storage_class: str = ""

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> PersistentVolume:
        spec = obj.spec
        claim_ref = getattr(spec, "claim_ref", None)
        claim = f"{claim_ref.namespace}/{claim_ref.name}" if claim_ref is not None and claim_ref.name else ""
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            capacity=str((getattr(spec, "capacity", None) or {}).get("storage", "")),
            access_modes=tuple(sorted(getattr(spec, "access_modes", None) or [])),
            reclaim_policy=getattr(spec, "persistent_volume_reclaim_policy", None) or "",
            phase=getattr(obj.status, "phase", None) or "",
            claim=claim,
            storage_class=getattr(spec, "storage_class_name", None) or "",
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> PersistentVolume:
        meta = ResourceMeta.from_dynamic(obj, config)
        claim_name, found = nested_string(obj, "spec", "claimRef", "name")
        claim_ns, _ = nested_string(obj, "spec", "claimRef", "namespace")
        return cls(
            meta=meta,
            capacity=nested_quantity(obj, "spec", "capacity", "storage")[0],
            access_modes=tuple(sorted(nested_string_slice(obj, "spec", "accessModes")[0])),
            reclaim_policy=nested_string(obj, "spec", "persistentVolumeReclaimPolicy")[0],
            phase=nested_string(obj, "status", "phase")[0],
            claim=f"{claim_ns}/{claim_name}" if found and claim_name else "",
            storage_class=nested_string(obj, "spec", "storageClassName")[0],
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [
            self.capacity,
            join_or_none(self.access_modes),
            self.reclaim_policy,
            self.phase,
            self.claim,
            self.storage_class,
        ]


@dataclass(frozen=True)
class PersistentVolumeClaim(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.PERSISTENT_VOLUME_CLAIM

    meta: ResourceMeta
    phase: str = ""
    volume: str = ""
    capacity: str = ""
    access_modes: tuple[str, ...] = ()
    storage_class: str = ""

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> PersistentVolumeClaim:
        spec = obj.spec
        status = obj.status
        return cls(
            meta=ResourceMeta.from_object_meta(obj.metadata, config),
            phase=getattr(status, "phase", None) or "",
            volume=getattr(spec, "volume_name", None) or "",
            capacity=str((getattr(status, "capacity", None) or {}).get("storage", "")),
            access_modes=tuple(sorted(getattr(spec, "access_modes", None) or [])),
            storage_class=getattr(spec, "storage_class_name", None) or "",
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> PersistentVolumeClaim:
        return cls(
            meta=ResourceMeta.from_dynamic(obj, config),
            phase=nested_string(obj, "status", "phase")[0],
            volume=nested_string(obj, "spec", "volumeName")[0],
            capacity=nested_quantity(obj, "status", "capacity", "storage")[0],
            access_modes=tuple(sorted(nested_string_slice(obj, "spec", "accessModes")[0])),
            storage_class=nested_string(obj, "spec", "storageClassName")[0],
        )

    def columns(self, now: datetime | None = None) -> list[object]:
        return [self.phase, self.volume, self.capacity, join_or_none(self.access_modes), self.storage_class]
