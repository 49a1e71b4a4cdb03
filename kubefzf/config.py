"""Environment-driven configuration loading.

Every setting is read from a ``KUBEFZF_*`` environment variable:

    KUBEFZF_CLUSTER                 Cluster name injected into every record.
    KUBEFZF_LOG_LEVEL               debug | info | warning | error (default info).
    KUBEFZF_LOG_FORMAT              json | console (default json).
    KUBEFZF_EXCLUDED_LABELS         Comma-separated label keys replacing the
                                    default exclusion set ("" excludes nothing).
    KUBEFZF_EXTRA_EXCLUDED_LABELS   Comma-separated label keys added to the set.
"""

from __future__ import annotations

import os

from kubefzf.models.config import DEFAULT_EXCLUDED_LABELS, KubeFzfConfig, LogConfig

_ENV_PREFIX = "KUBEFZF_"

_VALID_LOG_LEVELS: frozenset[str] = frozenset({"debug", "info", "warning", "error"})
_VALID_LOG_FORMATS: frozenset[str] = frozenset({"json", "console"})


def load_config() -> KubeFzfConfig:
    """Build a :class:`KubeFzfConfig` from the process environment.

    Raises:
        ValueError: if the log level or log format is not recognised.
    """
    log_level = _env("LOG_LEVEL", "info").lower()
    if log_level not in _VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level {log_level!r}; expected one of {sorted(_VALID_LOG_LEVELS)}")

    log_format = _env("LOG_FORMAT", "json").lower()
    if log_format not in _VALID_LOG_FORMATS:
        raise ValueError(f"Invalid log format {log_format!r}; expected one of {sorted(_VALID_LOG_FORMATS)}")

    excluded_raw = os.environ.get(f"{_ENV_PREFIX}EXCLUDED_LABELS")
    excluded = DEFAULT_EXCLUDED_LABELS if excluded_raw is None else _split_keys(excluded_raw)
    excluded = excluded | _split_keys(_env("EXTRA_EXCLUDED_LABELS", ""))

    return KubeFzfConfig(
        cluster=_env("CLUSTER", "").strip(),
        excluded_labels=excluded,
        log=LogConfig(level=log_level, format=log_format),
    )


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{_ENV_PREFIX}{name}", default)


def _split_keys(value: str) -> frozenset[str]:
    """Split a comma-separated list, dropping blanks."""
    return frozenset(part.strip() for part in value.split(",") if part.strip())
