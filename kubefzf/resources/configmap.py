"""ConfigMap resource variant.

Only the key names are kept; values may be large and are never indexed.
"""

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
from kubefzf.resources.unstructured import nested_string_map


@dataclass(frozen=True)
class ConfigMap(K8sResource):
    kind: ClassVar[ResourceKind] = ResourceKind.CONFIG_MAP

    meta: ResourceMeta
    keys: tuple[str, ...] = ()

    @classmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> ConfigMap:
        keys = set(obj.data or {}) | set(obj.binary_data or {})
        return cls(meta=ResourceMeta.from_object_meta(obj.metadata, config), keys=tuple(sorted(keys)))

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> ConfigMap:
        meta = ResourceMeta.from_dynamic(obj, config)
        data, _ = nested_string_map(obj, "data")
        binary, _ = nested_string_map(obj, "binaryData")
        return cls(meta=meta, keys=tuple(sorted(set(data) | set(binary))))

    def columns(self, now: datetime | None = None) -> list[object]:
        return [join_or_none(self.keys)]
