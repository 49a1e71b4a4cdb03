"""Tests for kubefzf.resources.format — age and label rendering."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from kubefzf.models.config import DEFAULT_EXCLUDED_LABELS
from kubefzf.resources.format import (
    column,
    duration_to_age,
    join_or_none,
    join_string_map,
    render_labels,
    time_to_age,
)

_NOW = datetime(2026, 2, 19, 12, 0, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Age formatter
# ---------------------------------------------------------------------------


class TestTimeToAge:
    def test_seconds(self) -> None:
        assert time_to_age(_NOW - timedelta(seconds=45), _NOW) == "45s"

    def test_minutes(self) -> None:
        assert time_to_age(_NOW - timedelta(minutes=5), _NOW) == "5m"

    def test_exactly_one_minute(self) -> None:
        assert time_to_age(_NOW - timedelta(seconds=60), _NOW) == "1m"

    def test_hours_truncate(self) -> None:
        assert time_to_age(_NOW - timedelta(hours=23, minutes=59), _NOW) == "23h"

    def test_days(self) -> None:
        assert time_to_age(_NOW - timedelta(days=3, hours=4), _NOW) == "3d"

    def test_future_timestamp_is_zero(self) -> None:
        assert time_to_age(_NOW + timedelta(minutes=2), _NOW) == "0s"

    def test_defaults_to_wall_clock(self) -> None:
        created = datetime.now(tz=UTC) - timedelta(days=10)
        assert time_to_age(created) == "10d"

    def test_duration_zero(self) -> None:
        assert duration_to_age(timedelta()) == "0s"


# ---------------------------------------------------------------------------
# Label formatter
# ---------------------------------------------------------------------------


class TestRenderLabels:
    def test_excluded_key_is_hidden(self) -> None:
        labels = {"app": "foo", "pod-template-hash": "abc123"}
        assert render_labels(labels, DEFAULT_EXCLUDED_LABELS) == "app=foo"

    def test_empty_renders_none(self) -> None:
        assert render_labels({}, DEFAULT_EXCLUDED_LABELS) == "None"

    def test_only_excluded_keys_render_none(self) -> None:
        labels = {"pod-template-hash": "abc", "controller-revision-hash": "def", "controller-uid": "123"}
        assert render_labels(labels, DEFAULT_EXCLUDED_LABELS) == "None"

    def test_sorted_lexicographically(self) -> None:
        labels = {"tier": "web", "app": "shop", "env": "prod"}
        assert render_labels(labels) == "app=shop,env=prod,tier=web"

    def test_insertion_order_does_not_matter(self) -> None:
        a = {"b": "2", "a": "1", "c": "3"}
        b = {"c": "3", "a": "1", "b": "2"}
        assert render_labels(a) == render_labels(b) == "a=1,b=2,c=3"

    def test_idempotent(self) -> None:
        labels = {"app": "foo", "team": "core"}
        assert render_labels(labels) == render_labels(labels)

    def test_no_exclusions_keeps_everything(self) -> None:
        labels = {"pod-template-hash": "abc"}
        assert render_labels(labels, frozenset()) == "pod-template-hash=abc"

    def test_misspelled_controller_uid_is_not_excluded(self) -> None:
        assert render_labels({"controler-uid": "x"}, DEFAULT_EXCLUDED_LABELS) == "controler-uid=x"


class TestJoinHelpers:
    def test_join_string_map_custom_separator(self) -> None:
        assert join_string_map({"b": "2", "a": "1"}, sep=":") == ["a:1", "b:2"]

    def test_join_or_none_empty(self) -> None:
        assert join_or_none([]) == "None"

    def test_join_or_none_skips_blanks(self) -> None:
        assert join_or_none(["a", "", "b"]) == "a,b"


class TestColumn:
    def test_empty_is_none(self) -> None:
        assert column("") == "None"

    def test_none_is_none(self) -> None:
        assert column(None) == "None"

    def test_int_is_stringified(self) -> None:
        assert column(3) == "3"

    def test_whitespace_is_replaced(self) -> None:
        assert column("*/5 * * * *") == "*/5_*_*_*_*"
