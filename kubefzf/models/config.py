"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

# Labels and selectors injected by controllers; hidden from rendering and
# ignored by change detection.
DEFAULT_EXCLUDED_LABELS: frozenset[str] = frozenset(
    {
        "pod-template-generation",
        "app.kubernetes.io/name",
        "controller-revision-hash",
        "app.kubernetes.io/managed-by",
        "pod-template-hash",
        "statefulset.kubernetes.io/pod-name",
        "controller-uid",
    }
)


@dataclass(frozen=True)
class CtorConfig:
    """Context merged into every resource at construction time.

    None of these values are read from the raw object.
    """

    cluster: str = ""
    excluded_labels: frozenset[str] = DEFAULT_EXCLUDED_LABELS


@dataclass(frozen=True)
class LogConfig:
    level: str = "info"
    format: str = "json"


@dataclass(frozen=True)
class KubeFzfConfig:
    """Top-level configuration loaded from ``KUBEFZF_*`` environment variables."""

    cluster: str = ""
    excluded_labels: frozenset[str] = DEFAULT_EXCLUDED_LABELS
    log: LogConfig = field(default_factory=LogConfig)

    def ctor_config(self) -> CtorConfig:
        """Return the immutable construction context for resource variants."""
        return CtorConfig(cluster=self.cluster, excluded_labels=self.excluded_labels)
