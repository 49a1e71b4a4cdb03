"""Tests for kubefzf.config — environment variable loading and validation.

Covers:
  - Default values when no KUBEFZF_* env vars are set
  - Each config field read from its corresponding KUBEFZF_* env var
  - Invalid values raise ValueError for validated fields
  - Label exclusion set replacement and extension
"""

from __future__ import annotations

import pytest

from kubefzf.config import load_config
from kubefzf.models.config import DEFAULT_EXCLUDED_LABELS, CtorConfig, KubeFzfConfig

_VARS = (
    "KUBEFZF_CLUSTER",
    "KUBEFZF_LOG_LEVEL",
    "KUBEFZF_LOG_FORMAT",
    "KUBEFZF_EXCLUDED_LABELS",
    "KUBEFZF_EXTRA_EXCLUDED_LABELS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestConfigDefaults:
    def test_returns_kubefzf_config_type(self) -> None:
        assert isinstance(load_config(), KubeFzfConfig)

    def test_cluster_empty_by_default(self) -> None:
        assert load_config().cluster == ""

    def test_log_defaults(self) -> None:
        config = load_config()
        assert config.log.level == "info"
        assert config.log.format == "json"

    def test_default_exclusion_set(self) -> None:
        assert load_config().excluded_labels == DEFAULT_EXCLUDED_LABELS

    def test_default_set_contents(self) -> None:
        assert "pod-template-hash" in DEFAULT_EXCLUDED_LABELS
        assert "controller-uid" in DEFAULT_EXCLUDED_LABELS
        assert "app" not in DEFAULT_EXCLUDED_LABELS
        assert len(DEFAULT_EXCLUDED_LABELS) == 7


# ---------------------------------------------------------------------------
# Custom env var values
# ---------------------------------------------------------------------------


class TestConfigCustomValues:
    def test_cluster_read_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_CLUSTER", " prod-eu ")
        assert load_config().cluster == "prod-eu"

    def test_log_level_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_LOG_LEVEL", "debug")
        assert load_config().log.level == "debug"

    def test_log_level_uppercase_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_LOG_LEVEL", "WARNING")
        assert load_config().log.level == "warning"

    def test_log_format_console(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_LOG_FORMAT", "Console")
        assert load_config().log.format == "console"

    def test_excluded_labels_replace_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_EXCLUDED_LABELS", "team, ,owner")
        assert load_config().excluded_labels == frozenset({"team", "owner"})

    def test_empty_excluded_labels_exclude_nothing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_EXCLUDED_LABELS", "")
        assert load_config().excluded_labels == frozenset()

    def test_extra_excluded_labels_extend_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_EXTRA_EXCLUDED_LABELS", "helm.sh/chart")
        excluded = load_config().excluded_labels
        assert "helm.sh/chart" in excluded
        assert DEFAULT_EXCLUDED_LABELS <= excluded

    def test_extra_applies_after_replacement(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_EXCLUDED_LABELS", "team")
        monkeypatch.setenv("KUBEFZF_EXTRA_EXCLUDED_LABELS", "owner")
        assert load_config().excluded_labels == frozenset({"team", "owner"})


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestConfigValidation:
    def test_invalid_log_level_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_invalid_log_format_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="Invalid log format"):
            load_config()


# ---------------------------------------------------------------------------
# Construction context
# ---------------------------------------------------------------------------


class TestCtorConfig:
    def test_ctor_config_carries_cluster_and_exclusions(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KUBEFZF_CLUSTER", "staging")
        monkeypatch.setenv("KUBEFZF_EXCLUDED_LABELS", "team")
        ctor = load_config().ctor_config()
        assert ctor == CtorConfig(cluster="staging", excluded_labels=frozenset({"team"}))

    def test_ctor_config_is_frozen(self) -> None:
        ctor = CtorConfig(cluster="prod")
        with pytest.raises(AttributeError):
            ctor.cluster = "other"  # type: ignore[misc]
