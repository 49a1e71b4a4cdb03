"""In-memory cache of normalised resource records.

Applies the per-identity state machine::

    absent  --observe-->  present(new)                  changed
    present(old) --observe, has_changed-->  present(new) changed
    present(old) --observe, no change-->    present(old) unchanged, candidate dropped
    present --delete-->  absent

Records are keyed by (kind, namespace, name); the cluster is fixed by the
cache's :class:`CtorConfig`.  Construction failures are logged and counted,
and the offending event is skipped so one malformed object never stops the
caller's watch loop.

The cache does no locking.  Callers must serialise observe/delete for a
given identity (watch events for one object arrive in order on one stream).
"""

from __future__ import annotations

import builtins
from collections import defaultdict
from datetime import datetime
from typing import Any

from kubefzf.models.config import CtorConfig
from kubefzf.models.resources import ObjectSource, ResourceKind
from kubefzf.observability.logging import get_logger
from kubefzf.observability.metrics import cache_resources, cache_updates_total
from kubefzf.resources import K8sResource, ResourceConstructionError, construct, resource_type

# Resource store: kind -> namespace -> name -> K8sResource
_Store = dict[ResourceKind, dict[str, dict[str, K8sResource]]]


class ResourceCache:
    """Holds the latest meaningful record per identity.

    Example::

        cache = ResourceCache(CtorConfig(cluster="prod"))
        if cache.observe(ResourceKind.POD, v1_pod):
            reindex(cache.lines(ResourceKind.POD))
    """

    def __init__(self, config: CtorConfig) -> None:
        self._config = config
        self._log = get_logger("cache.resource")
        self._store: _Store = defaultdict(lambda: defaultdict(dict))

    @property
    def config(self) -> CtorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Write interface (called by watchers)
    # ------------------------------------------------------------------

    def observe(
        self,
        kind: ResourceKind | str,
        obj: Any,
        source: ObjectSource = ObjectSource.TYPED,
    ) -> bool:
        """Construct a record from an ADDED/MODIFIED event and store it if it changed.

        Returns:
            True when the cache entry was created or replaced, False when the
            candidate was unchanged or could not be constructed.
        """
        kind = resource_type(kind).kind
        try:
            candidate = construct(kind, obj, self._config, source)
        except ResourceConstructionError as exc:
            self._log.error(
                "resource_construction_failed",
                kind=kind.value,
                source=ObjectSource(source).value,
                field=exc.field_path,
                value=repr(exc.value),
                reason=exc.reason,
            )
            cache_updates_total.labels(kind=kind.value, outcome="rejected").inc()
            return False

        per_ns = self._store[kind][candidate.meta.namespace]
        existing = per_ns.get(candidate.meta.name)

        if existing is None:
            outcome = "added"
        elif existing.has_changed(candidate):
            outcome = "changed"
        else:
            cache_updates_total.labels(kind=kind.value, outcome="unchanged").inc()
            return False

        per_ns[candidate.meta.name] = candidate
        cache_updates_total.labels(kind=kind.value, outcome=outcome).inc()
        cache_resources.labels(kind=kind.value).set(self._kind_count(kind))
        self._log.debug(
            "cache_resource_updated",
            kind=kind.value,
            namespace=candidate.meta.namespace,
            name=candidate.meta.name,
            outcome=outcome,
        )
        return True

    def delete(self, kind: ResourceKind | str, namespace: str, name: str) -> bool:
        """Remove a record (DELETED watch event).  Returns True if it was present."""
        kind = resource_type(kind).kind
        per_ns = self._store.get(kind, {}).get(namespace)
        if not per_ns or name not in per_ns:
            return False
        del per_ns[name]
        if not per_ns:
            del self._store[kind][namespace]
        cache_updates_total.labels(kind=kind.value, outcome="deleted").inc()
        cache_resources.labels(kind=kind.value).set(self._kind_count(kind))
        return True

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------

    def get(self, kind: ResourceKind | str, namespace: str, name: str) -> K8sResource | None:
        return self._store.get(resource_type(kind).kind, {}).get(namespace, {}).get(name)

    def list(self, kind: ResourceKind | str, namespace: str = "") -> builtins.list[K8sResource]:
        """Return records of *kind* sorted by (namespace, name).

        An empty *namespace* returns every namespace.
        """
        ns_map = self._store.get(resource_type(kind).kind, {})
        if namespace:
            records = builtins.list(ns_map.get(namespace, {}).values())
        else:
            records = [r for per_ns in ns_map.values() for r in per_ns.values()]
        return sorted(records, key=lambda r: (r.meta.namespace, r.meta.name))

    def lines(self, kind: ResourceKind | str, now: datetime | None = None) -> builtins.list[str]:
        """Rendered lines for the fuzzy index, one per record."""
        return [r.render(now) for r in self.list(kind)]

    def __len__(self) -> int:
        return sum(self._kind_count(kind) for kind in self._store)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _kind_count(self, kind: ResourceKind) -> int:
        return sum(len(per_ns) for per_ns in self._store.get(kind, {}).values())
