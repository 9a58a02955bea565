"""Tests for the season monitoring policy."""

import pytest

from utils.monitor import MONITOR_TYPES, apply_monitor_policy


def seasons(*numbers, monitored=True):
    return [{"seasonNumber": n, "monitored": monitored} for n in numbers]


def monitored_map(result):
    return {s["seasonNumber"]: s["monitored"] for s in result}


class TestMonitorPolicy:
    def test_latest_monitors_only_last_season(self):
        result, add_options = apply_monitor_policy("latest", seasons(0, 1, 2, 3))
        assert monitored_map(result) == {0: False, 1: False, 2: False, 3: True}
        assert add_options is None

    def test_first_monitors_first_real_season(self):
        result, add_options = apply_monitor_policy("first", seasons(0, 1, 2, 3))
        assert monitored_map(result) == {0: False, 1: True, 2: False, 3: False}
        assert add_options is None

    def test_first_ignores_specials_when_unordered(self):
        result, _ = apply_monitor_policy("first", seasons(3, 0, 2))
        assert monitored_map(result) == {3: False, 0: False, 2: True}

    def test_none_unmonitors_everything(self):
        result, add_options = apply_monitor_policy("none", seasons(0, 1, 2))
        assert not any(s["monitored"] for s in result)
        assert add_options is None

    def test_first_differs_from_none_at_one_season(self):
        original = seasons(0, 1, 2, 3, 4)
        none_result, _ = apply_monitor_policy("none", original)
        first_result, _ = apply_monitor_policy("first", original)
        diff = [a["seasonNumber"] for a, b in zip(none_result, first_result) if a["monitored"] != b["monitored"]]
        assert diff == [1]

    @pytest.mark.parametrize("monitor", ["future", "all"])
    def test_future_and_all_leave_flags_alone(self, monitor):
        original = [
            {"seasonNumber": 1, "monitored": True},
            {"seasonNumber": 2, "monitored": False},
        ]
        result, _ = apply_monitor_policy(monitor, original)
        assert result == original

    def test_future_and_all_differ_only_in_add_options(self):
        _, future = apply_monitor_policy("future", seasons(1))
        _, every = apply_monitor_policy("all", seasons(1))
        assert future == {"ignoreEpisodesWithFiles": True, "ignoreEpisodesWithoutFiles": True}
        assert every == {"ignoreEpisodesWithFiles": False, "ignoreEpisodesWithoutFiles": False}

    @pytest.mark.parametrize("monitor", MONITOR_TYPES)
    def test_input_is_not_mutated(self, monitor):
        original = seasons(0, 1, 2)
        apply_monitor_policy(monitor, original)
        assert original == seasons(0, 1, 2)

    def test_only_specials(self):
        result, _ = apply_monitor_policy("first", seasons(0))
        assert monitored_map(result) == {0: False}

    def test_empty_season_list(self):
        assert apply_monitor_policy("latest", []) == ([], None)

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown monitor type"):
            apply_monitor_policy("pilot", seasons(1))
