"""Shared identity envelope for every resource variant.

``ResourceMeta`` is populated through one of two entry points, one per raw
representation:

- :meth:`ResourceMeta.from_object_meta` takes a typed ``V1ObjectMeta``
  (kubernetes_asyncio model, already schema-validated).
- :meth:`ResourceMeta.from_dynamic` takes a dynamic object dict and applies
  required / best-effort lookups: a missing ``metadata.name`` is fatal, a
  missing ``metadata.labels`` is logged at debug level and treated as empty,
  and a present-but-malformed label set or timestamp is fatal.

Both converge on :meth:`ResourceMeta._populate`, so the resulting records
are indistinguishable for equivalent input.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from kubefzf.models.config import DEFAULT_EXCLUDED_LABELS, CtorConfig
from kubefzf.observability.logging import get_logger
from kubefzf.resources.format import filter_string_map, render_labels, time_to_age
from kubefzf.resources.unstructured import (
    ResourceConstructionError,
    nested_string,
    nested_string_map,
    required_string,
)

_log = get_logger("resources.meta")

_RFC3339_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$")


@dataclass(frozen=True)
class ResourceMeta:
    """Identity, labels and creation time shared by all kinds.

    ``cluster`` always comes from the :class:`CtorConfig`, never from the
    raw object.  ``labels`` are stored unfiltered; the exclusion set only
    applies when rendering and comparing.
    """

    name: str
    namespace: str
    cluster: str
    labels: dict[str, str]
    creation_time: datetime
    excluded_labels: frozenset[str] = field(default=DEFAULT_EXCLUDED_LABELS, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_object_meta(cls, meta: Any, config: CtorConfig) -> ResourceMeta:
        """Populate from a typed ``V1ObjectMeta``."""
        if meta is None or not getattr(meta, "name", None):
            raise ResourceConstructionError("metadata.name", getattr(meta, "name", None), "required field is missing")
        created = coerce_timestamp(getattr(meta, "creation_timestamp", None))
        if created is None:
            raise ResourceConstructionError(
                "metadata.creationTimestamp", getattr(meta, "creation_timestamp", None), "required field is missing"
            )
        return cls._populate(
            name=meta.name,
            namespace=meta.namespace or "",
            labels=meta.labels or {},
            creation_time=created,
            config=config,
        )

    @classmethod
    def from_dynamic(cls, obj: Mapping[str, Any], config: CtorConfig) -> ResourceMeta:
        """Populate from a dynamic object dict."""
        name = required_string(obj, "metadata", "name")
        namespace, _ = nested_string(obj, "metadata", "namespace")

        labels, found = nested_string_map(obj, "metadata", "labels")
        if not found:
            _log.debug("metadata_labels_missing", name=name, namespace=namespace, cluster=config.cluster)

        raw_ts, found = nested_string(obj, "metadata", "creationTimestamp")
        if not found:
            raise ResourceConstructionError("metadata.creationTimestamp", None, "required field is missing")

        return cls._populate(
            name=name,
            namespace=namespace,
            labels=labels,
            creation_time=parse_timestamp(raw_ts, "metadata.creationTimestamp"),
            config=config,
        )

    @classmethod
    def _populate(
        cls,
        name: str,
        namespace: str,
        labels: Mapping[str, str],
        creation_time: datetime,
        config: CtorConfig,
    ) -> ResourceMeta:
        return cls(
            name=name,
            namespace=namespace,
            cluster=config.cluster,
            labels=dict(labels),
            creation_time=creation_time,
            excluded_labels=config.excluded_labels,
        )

    # ------------------------------------------------------------------
    # Display and comparison
    # ------------------------------------------------------------------

    def __hash__(self) -> int:
        # labels is a dict; hash the fields that take part in equality
        return hash((self.name, self.namespace, self.cluster, self.creation_time, frozenset(self.labels.items())))

    def age(self, now: datetime | None = None) -> str:
        """Return the relative age of the resource.  Display only."""
        return time_to_age(self.creation_time, now)

    def labels_string(self) -> str:
        return render_labels(self.labels, self.excluded_labels)

    def significant_labels(self) -> dict[str, str]:
        """Labels with controller-injected keys removed."""
        return filter_string_map(self.labels, self.excluded_labels)

    def change_key(self) -> tuple[object, ...]:
        """Values that count for change detection (age is derived, never compared)."""
        return (
            self.cluster,
            self.namespace,
            self.name,
            self.creation_time,
            tuple(sorted(self.significant_labels().items())),
        )


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------


def coerce_timestamp(value: Any) -> datetime | None:
    """Coerce a kubernetes_asyncio datetime field (already a datetime) or None."""
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_timestamp(value: str, field_path: str) -> datetime:
    """Parse an RFC3339 timestamp from a dynamic object.

    Raises:
        ResourceConstructionError: if *value* is not RFC3339.
    """
    if not _RFC3339_RE.match(value):
        raise ResourceConstructionError(field_path, value, "not an RFC3339 timestamp")
    normalised = value.upper().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalised)
    except ValueError as exc:
        # Shape matched but a component is out of range (e.g. month 13)
        raise ResourceConstructionError(field_path, value, f"not an RFC3339 timestamp: {exc}") from exc
