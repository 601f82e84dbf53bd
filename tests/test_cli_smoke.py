"""
Minimal smoke tests for fitness-suite CLI.

Tests basic functionality:
- App runs without errors
- Plan is shown from the bundled default
- Sets can be logged and reach the progress log file
- Progress stats are reported
- Timers run and exit
- AI commands report missing credentials
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fitness_suite.cli.main import app
from fitness_suite.core.assistant import Assistant


runner = CliRunner()


@pytest.fixture
def temp_data_dir():
    """Create a temporary directory for plan and log files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


def _log(data_dir, key, *sets, date="2024-01-15", day="Monday"):
    args = ["log", key, "--day", day, "--date", date, "--no-rest", "--data-dir", str(data_dir)]
    for s in sets:
        args += ["--set", s]
    return runner.invoke(app, args)


class StubGenerator:
    def __init__(self, text):
        self.text = text

    async def generate(self, prompt, schema=None):
        return self.text


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        """Test that app runs and shows help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "log" in result.output
        assert "progress" in result.output

    def test_plan_shows_default_day(self, temp_data_dir):
        """Test plan shows the bundled Monday workout."""
        result = runner.invoke(app, ["plan", "--day", "Monday", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "Upper Body Push" in result.output
        assert "Main Workout" in result.output

    def test_plan_unknown_day(self, temp_data_dir):
        result = runner.invoke(app, ["plan", "--day", "Sunday", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Sunday" in result.output

    def test_log_writes_progress_file(self, temp_data_dir):
        """Test log records sets for an exercise key."""
        result = _log(temp_data_dir, "main-workout-0", "100,8", "105,6")

        assert result.exit_code == 0
        assert "Logged Barbell Bench Press" in result.output

        stored = json.loads((temp_data_dir / "progressLog.json").read_text(encoding="utf-8"))
        entry = stored["2024-01-15"]["main-workout-0"]
        assert entry["name"] == "Barbell Bench Press"
        assert entry["isCompleted"] is True
        assert entry["sets"][:2] == [{"weight": 100.0, "reps": 8}, {"weight": 105.0, "reps": 6}]
        assert len(entry["sets"]) == 4

    def test_log_unknown_key(self, temp_data_dir):
        result = _log(temp_data_dir, "main-workout-99", "100,8")
        assert result.exit_code == 1
        assert "No exercise" in result.output
        assert not (temp_data_dir / "progressLog.json").exists()

    def test_log_invalid_date(self, temp_data_dir):
        result = _log(temp_data_dir, "main-workout-0", "100,8", date="15-01-2024")
        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_log_prompts_without_sets(self, temp_data_dir):
        """Test interactive entry: one weight/reps prompt pair per set."""
        result = runner.invoke(
            app,
            ["log", "main-workout-4", "--day", "Monday", "--date", "2024-01-15", "--no-rest",
             "--data-dir", str(temp_data_dir)],
            input="10\n15\n12\n15\n\n\n\n\n",
        )
        assert result.exit_code == 0
        stored = json.loads((temp_data_dir / "progressLog.json").read_text(encoding="utf-8"))
        sets = stored["2024-01-15"]["main-workout-4"]["sets"]
        assert sets[0] == {"weight": 10.0, "reps": 15}
        assert sets[1] == {"weight": 12.0, "reps": 15}
        assert sets[2] == {"weight": 0.0, "reps": 0}

    def test_plan_marks_logged_exercise(self, temp_data_dir):
        _log(temp_data_dir, "main-workout-0", "100,8", date="2024-01-15")
        result = runner.invoke(app, ["plan", "--day", "Monday", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0

    def test_progress_json(self, temp_data_dir):
        """Test progress reports series and stats as JSON."""
        _log(temp_data_dir, "main-workout-0", "100,8", date="2024-01-15")
        _log(temp_data_dir, "main-workout-0", "110,6", date="2024-01-22")
        _log(temp_data_dir, "main-workout-0", "50,8", date="2024-01-16", day="Tuesday")

        result = runner.invoke(app, ["progress", "--json", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["exercise"] == "Barbell Bench Press"
        assert data["exercises"] == ["Barbell Bench Press", "Barbell Back Squats"]
        assert data["series"] == [
            {"date": "2024-01-15", "maxWeight": 100.0},
            {"date": "2024-01-22", "maxWeight": 110.0},
        ]
        assert data["bestLift"] == 110.0
        assert data["totalWorkoutDays"] == 3

    def test_progress_selected_exercise(self, temp_data_dir):
        _log(temp_data_dir, "main-workout-0", "100,8")
        _log(temp_data_dir, "main-workout-0", "140,5", date="2024-01-16", day="Tuesday")
        result = runner.invoke(
            app, ["progress", "--exercise", "Barbell Back Squats", "--json", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["bestLift"] == 140.0

    def test_progress_unknown_exercise(self, temp_data_dir):
        result = runner.invoke(app, ["progress", "--exercise", "Deadlift", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1

    def test_progress_empty_log(self, temp_data_dir):
        result = runner.invoke(app, ["progress", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "Log some workouts" in result.output

    def test_progress_chart(self, temp_data_dir):
        _log(temp_data_dir, "main-workout-0", "100,8", date="2024-01-15")
        _log(temp_data_dir, "main-workout-0", "110,6", date="2024-01-22")
        result = runner.invoke(app, ["progress", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "Max Weight Lifted for Barbell Bench Press" in result.output

    def test_clock_once(self):
        result = runner.invoke(app, ["clock", "--once"])
        assert result.exit_code == 0
        assert "|" in result.output

    def test_rest_zero(self):
        result = runner.invoke(app, ["rest", "0"])
        assert result.exit_code == 0
        assert "Nothing to time." in result.output

    def test_rest_countdown_completes(self):
        result = runner.invoke(app, ["rest", "1"])
        assert result.exit_code == 0
        assert "Rest over!" in result.output

    def test_stopwatch_with_limit(self):
        result = runner.invoke(app, ["stopwatch", "--seconds", "0.05"])
        assert result.exit_code == 0
        assert "00:00." in result.output

    def test_explain_without_api_key(self, temp_data_dir, no_api_key):
        result = runner.invoke(app, ["explain", "Squat", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "API key missing" in result.output

    def test_nutrition_empty_query(self, temp_data_dir):
        result = runner.invoke(app, ["nutrition", " ", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Please enter a question first." in result.output

    def test_generate_adopts_plan_and_clears_log(self, temp_data_dir, monkeypatch):
        """Test generate --yes replaces the plan and clears the progress log."""
        plan = {
            "Monday": {
                "emoji": "🏋️",
                "title": "Strength A",
                "mainWorkout": {
                    "title": "Main Workout",
                    "exercises": [{"name": "Deadlift", "sets": "5", "reps": "5", "rest": "180s"}],
                },
                "warmUp": [],
                "coolDown": "",
            }
        }
        monkeypatch.setattr(
            "fitness_suite.cli.commands.planning.get_assistant",
            lambda data_dir: Assistant(StubGenerator(json.dumps(plan))),
        )
        _log(temp_data_dir, "main-workout-0", "100,8")

        result = runner.invoke(app, ["generate", "--yes", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "New plan adopted" in result.output

        stored_plan = json.loads((temp_data_dir / "workoutPlan.json").read_text(encoding="utf-8"))
        assert list(stored_plan) == ["Monday"]
        assert json.loads((temp_data_dir / "progressLog.json").read_text(encoding="utf-8")) == {}

        shown = runner.invoke(app, ["plan", "--day", "Monday", "--data-dir", str(temp_data_dir)])
        assert "Strength A" in shown.output

    def test_generate_declined_keeps_plan(self, temp_data_dir, monkeypatch):
        monkeypatch.setattr(
            "fitness_suite.cli.commands.planning.get_assistant",
            lambda data_dir: Assistant(StubGenerator('{"Monday": {"title": "X", "warmUp": []}}')),
        )
        result = runner.invoke(app, ["generate", "--data-dir", str(temp_data_dir)], input="n\n")
        assert result.exit_code == 0
        assert "Kept the current plan." in result.output
        assert not (temp_data_dir / "workoutPlan.json").exists()

    def test_generate_bad_response(self, temp_data_dir, monkeypatch):
        monkeypatch.setattr(
            "fitness_suite.cli.commands.planning.get_assistant",
            lambda data_dir: Assistant(StubGenerator("not json")),
        )
        result = runner.invoke(app, ["generate", "--yes", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 1
        assert "Generation Failed" in result.output

    def test_menu_quit(self, temp_data_dir):
        result = runner.invoke(app, ["--data-dir", str(temp_data_dir)], input="0\n")
        assert result.exit_code == 0
        assert "Today's workout" in result.output

    def test_menu_default_shows_plan(self, temp_data_dir):
        result = runner.invoke(app, ["--data-dir", str(temp_data_dir)], input="\n")
        assert result.exit_code == 0
        assert "Main Workout" in result.output or "Functional Circuit" in result.output

    def test_bracketed_names_are_shown_literally(self, temp_data_dir, monkeypatch):
        """Test plan text containing Rich markup syntax is printed, not parsed."""
        plan = {
            "Monday": {
                "title": "Arms [bold]",
                "mainWorkout": {
                    "title": "Main Workout",
                    "exercises": [{"name": "Curls [/b]", "sets": "3", "reps": "12", "rest": "60s"}],
                },
            }
        }
        monkeypatch.setattr(
            "fitness_suite.cli.commands.planning.get_assistant",
            lambda data_dir: Assistant(StubGenerator(json.dumps(plan))),
        )
        result = runner.invoke(app, ["generate", "--yes", "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0
        assert "Curls [/b]" in result.output

        shown = runner.invoke(app, ["plan", "--day", "Monday", "--data-dir", str(temp_data_dir)])
        assert shown.exit_code == 0
        assert "Curls [/b]" in shown.output
        assert "Arms [bold]" in shown.output

    def test_bracketed_exercise_option_in_error(self, temp_data_dir):
        _log(temp_data_dir, "main-workout-0", "100,8")
        result = runner.invoke(
            app, ["progress", "--exercise", "Deadlift [/b]", "--data-dir", str(temp_data_dir)]
        )
        assert result.exit_code == 1
        assert "Deadlift [/b]" in result.output
