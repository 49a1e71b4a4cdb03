"""Resource variant base class.

Every supported Kubernetes kind is a frozen dataclass deriving from
:class:`K8sResource`.  The capability set is:

    from_typed()   -- construct from a kubernetes_asyncio model object
    from_dynamic() -- construct from a dynamic object dict
    has_changed()  -- does a candidate differ in anything displayed or indexed?
    render()       -- one deterministic line for the fuzzy index

Variants hold a :class:`ResourceMeta` (composition) plus kind-specific
fields.  Kind fields are compared by value; a field declared with
``field(compare=False)`` is excluded from change detection.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar, Self

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ObjectSource, ResourceKind
from kubefzf.observability.metrics import construction_errors_total, resources_constructed_total
from kubefzf.resources.format import column, join_or_none, join_string_map
from kubefzf.resources.meta import ResourceMeta
from kubefzf.resources.unstructured import ResourceConstructionError

# Kind field holding a label selector as sorted (key, value) pairs
_SELECTORS_FIELD = "selectors"


class K8sResource(ABC):
    """Abstract base class for all resource variants.

    Subclasses MUST define class-level attributes:
        kind       -- the :class:`ResourceKind` tag
        namespaced -- False for cluster-scoped kinds (namespace column omitted)

    and a ``meta: ResourceMeta`` dataclass field.
    """

    kind: ClassVar[ResourceKind]
    namespaced: ClassVar[bool] = True

    meta: ResourceMeta

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def from_typed(cls, obj: Any, config: CtorConfig) -> Self:
        """Build from a typed object (e.g. ``V1Pod``)."""

    @classmethod
    @abstractmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> Self:
        """Build from a dynamic object dict (camelCase keys)."""

    @classmethod
    def from_runtime(cls, obj: Any, config: CtorConfig, source: ObjectSource) -> Self:
        """Dispatch to the entry point matching *source*.

        Raises:
            ResourceConstructionError: tagged with this variant's kind.
        """
        try:
            if source == ObjectSource.TYPED:
                if isinstance(obj, Mapping) or not hasattr(obj, "metadata"):
                    raise ResourceConstructionError("", obj, f"expected a typed object, got {type(obj).__name__}")
                resource = cls.from_typed(obj, config)
            else:
                if not isinstance(obj, Mapping):
                    raise ResourceConstructionError("", obj, f"expected a dynamic object, got {type(obj).__name__}")
                resource = cls.from_dynamic(obj, config)
        except ResourceConstructionError as exc:
            exc.kind = exc.kind or cls.kind.value
            construction_errors_total.labels(kind=cls.kind.value, source=source.value).inc()
            raise
        resources_constructed_total.labels(kind=cls.kind.value, source=source.value).inc()
        return resource

    # ------------------------------------------------------------------
    # Change detection
    # ------------------------------------------------------------------

    def change_key(self) -> tuple[object, ...]:
        """Metadata key plus every comparable kind-specific field.

        Selector pairs drop the same controller-injected keys as labels.
        """
        excluded = self.meta.excluded_labels
        kind_values: list[object] = []
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            if f.name == "meta" or not f.compare:
                continue
            value = getattr(self, f.name)
            if f.name == _SELECTORS_FIELD:
                value = tuple(pair for pair in value if pair[0] not in excluded)
            kind_values.append(value)
        return self.meta.change_key() + tuple(kind_values)

    def has_changed(self, other: K8sResource) -> bool:
        """Return True if *other* differs from this record in a way worth re-indexing."""
        if type(other) is not type(self):
            return True
        return self.change_key() != other.change_key()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @abstractmethod
    def columns(self, now: datetime | None = None) -> list[object]:
        """Kind-specific column values, in display order."""

    def render(self, now: datetime | None = None) -> str:
        """Render ``cluster [namespace] name <kind columns> age labels`` as one line."""
        values: list[object] = [self.meta.cluster]
        if self.namespaced:
            values.append(self.meta.namespace)
        values.append(self.meta.name)
        values.extend(self.columns(now))
        values.append(self.meta.age(now))
        values.append(self.meta.labels_string())
        return " ".join(column(v) for v in values)

    def selectors_string(self, selectors: Mapping[str, str]) -> str:
        """Render a selector map, hiding the same noise keys as labels."""
        return join_or_none(join_string_map(selectors, self.meta.excluded_labels), ",")


def frozen_pairs(values: Mapping[str, str] | None) -> tuple[tuple[str, str], ...]:
    """Canonical, hashable form of a string map."""
    return tuple(sorted((values or {}).items()))
