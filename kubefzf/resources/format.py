"""Display helpers shared by every resource variant.

Age and label rendering, plus the column conventions used by
``K8sResource.render``: empty values render as ``None`` and whitespace
inside a value is replaced by ``_`` so that every rendered line has a fixed
number of space-separated columns per kind.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta

NONE_STR = "None"

_WHITESPACE_RE = re.compile(r"\s+")


def time_to_age(created: datetime, now: datetime | None = None) -> str:
    """Return a short relative age such as ``"45s"``, ``"5m"``, ``"3h"`` or ``"2d"``.

    Timestamps in the future (clock skew between the API server and this
    host) render as ``"0s"``.
    """
    current = now or datetime.now(tz=UTC)
    return duration_to_age(current - created)


def duration_to_age(delta: timedelta) -> str:
    """Render a duration with day, hour, minute or second granularity."""
    seconds = max(int(delta.total_seconds()), 0)
    if seconds >= 86_400:
        return f"{seconds // 86_400}d"
    if seconds >= 3_600:
        return f"{seconds // 3_600}h"
    if seconds >= 60:
        return f"{seconds // 60}m"
    return f"{seconds}s"


def filter_string_map(values: Mapping[str, str], excluded: Iterable[str] = ()) -> dict[str, str]:
    """Return a copy of *values* without the *excluded* keys."""
    skip = frozenset(excluded)
    return {k: v for k, v in values.items() if k not in skip}


def join_string_map(values: Mapping[str, str], excluded: Iterable[str] = (), sep: str = "=") -> list[str]:
    """Return sorted ``key<sep>value`` pairs, skipping *excluded* keys."""
    return sorted(f"{k}{sep}{v}" for k, v in filter_string_map(values, excluded).items())


def join_or_none(values: Iterable[str], sep: str = ",") -> str:
    """Join non-empty *values* with *sep*, or return ``"None"`` when nothing is left."""
    kept = [v for v in values if v]
    return sep.join(kept) if kept else NONE_STR


def render_labels(labels: Mapping[str, str], excluded: Iterable[str] = ()) -> str:
    """Render a label set as ``k1=v1,k2=v2`` in lexicographic order.

    Returns ``"None"`` for an empty set and when every key is excluded.
    """
    if not labels:
        return NONE_STR
    return join_or_none(join_string_map(labels, excluded), ",")


def column(value: object) -> str:
    """Normalise one rendered column."""
    text = "" if value is None else str(value)
    text = _WHITESPACE_RE.sub("_", text.strip())
    return text or NONE_STR
