"""Prometheus metrics for kubefzf."""

from __future__ import annotations

from prometheus_client import Counter, Gauge

# Construction metrics
resources_constructed_total = Counter(
    "kubefzf_resources_constructed_total",
    "Total resource variants constructed from raw objects",
    ["kind", "source"],
)

construction_errors_total = Counter(
    "kubefzf_construction_errors_total",
    "Total raw objects rejected during construction",
    ["kind", "source"],
)

# Cache metrics
cache_updates_total = Counter(
    "kubefzf_cache_updates_total",
    "Cache update decisions by outcome",
    ["kind", "outcome"],
)

cache_resources = Gauge(
    "kubefzf_cache_resources",
    "Number of cached resources",
    ["kind"],
)
