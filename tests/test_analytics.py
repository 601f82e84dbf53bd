"""
Tests for progress analytics, the max-weight chart, and lenient parsing.
"""

import pytest

from fitness_suite.core.analytics import ProgressAnalytics
from fitness_suite.core.ascii_plot import create_max_weight_plot
from fitness_suite.core.models import SeriesPoint
from fitness_suite.core.parsing import coerce_reps, coerce_weight, exercise_key, rest_seconds, set_count
from fitness_suite.core.progress_log import ProgressLog
from fitness_suite.io.kv_store import MemoryKeyValueStore, PersistentStore


@pytest.fixture
def log():
    return ProgressLog(PersistentStore(MemoryKeyValueStore()))


class TestParsing:
    @pytest.mark.parametrize("field,expected", [("4", 4), ("3-4 rounds", 3), ("abc", 1), ("", 1), ("0", 1), (5, 5)])
    def test_set_count(self, field, expected):
        assert set_count(field) == expected

    @pytest.mark.parametrize("field,expected", [("90s", 90), ("120", 120), ("N/A", 0), ("", 0), (None, 0)])
    def test_rest_seconds(self, field, expected):
        assert rest_seconds(field) == expected

    @pytest.mark.parametrize("value,expected", [("82.5", 82.5), ("100kg", 100.0), ("abc", 0.0), ("-5", 0.0), ("inf", 0.0), (None, 0.0)])
    def test_coerce_weight(self, value, expected):
        assert coerce_weight(value) == expected

    @pytest.mark.parametrize("value,expected", [("8", 8), ("8.7", 8), (8.7, 8), ("", 0), ("-3", 0), ("x", 0)])
    def test_coerce_reps(self, value, expected):
        assert coerce_reps(value) == expected

    def test_exercise_key(self):
        assert exercise_key("Main Workout", 0) == "main-workout-0"
        assert exercise_key("Core Finisher", 2) == "core-finisher-2"


class TestProgressAnalytics:
    def test_empty_log(self, log):
        analytics = ProgressAnalytics(log)
        assert analytics.exercises() == []
        assert analytics.selected == ""
        assert analytics.series() == []
        assert analytics.summary().best_lift == 0.0
        assert analytics.summary().total_workout_days == 0

    def test_defaults_to_first_logged_exercise(self, log):
        log.record_sets("2024-01-15", "main-workout-0", "Squat", [{"weight": 100, "reps": 5}])
        log.record_sets("2024-01-15", "main-workout-1", "Bench Press", [{"weight": 80, "reps": 5}])
        analytics = ProgressAnalytics(log)
        assert analytics.selected == "Squat"

    def test_select_switches_series(self, log):
        log.record_sets("2024-01-15", "main-workout-0", "Squat", [{"weight": 100, "reps": 5}])
        log.record_sets("2024-01-15", "main-workout-1", "Bench Press", [{"weight": 80, "reps": 5}])
        analytics = ProgressAnalytics(log)
        analytics.select("Bench Press")
        assert analytics.series() == [SeriesPoint("2024-01-15", 80.0)]
        assert analytics.summary().best_lift == 80.0

    def test_unknown_selection_falls_back(self, log):
        log.record_sets("2024-01-15", "main-workout-0", "Squat", [{"weight": 100, "reps": 5}])
        analytics = ProgressAnalytics(log, selected="Deadlift")
        assert analytics.selected == "Squat"

    def test_reads_are_live(self, log):
        analytics = ProgressAnalytics(log)
        log.record_sets("2024-01-15", "main-workout-0", "Squat", [{"weight": 100, "reps": 5}])
        assert analytics.needs_more_days()
        log.record_sets("2024-01-17", "main-workout-0", "Squat", [{"weight": 105, "reps": 5}])
        assert not analytics.needs_more_days()
        assert [p.max_weight for p in analytics.series()] == [100.0, 105.0]


class TestMaxWeightPlot:
    def test_empty_series_message(self):
        assert create_max_weight_plot([]) == "No sets logged for this exercise yet."

    def test_title_and_points(self):
        series = [SeriesPoint("2024-01-15", 100.0), SeriesPoint("2024-01-22", 120.0)]
        chart = create_max_weight_plot(series, exercise_name="Squat")
        assert chart.splitlines()[0] == "Max Weight Lifted for Squat"
        assert chart.count("●") == 2
        assert "Jan 15" in chart
        assert "Jan 22" in chart

    def test_single_point(self):
        chart = create_max_weight_plot([SeriesPoint("2024-03-01", 60.0)])
        assert chart.count("●") == 1
        assert "Mar 01" in chart
