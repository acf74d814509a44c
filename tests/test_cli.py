"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from fitplan.cli import main
from fitplan.services.plan_service import INVALID_FREQUENCY


@pytest.fixture
def runner(data_dir):
    """A CLI runner with an initialized database and one profile."""
    cli_runner = CliRunner()
    result = cli_runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output

    result = cli_runner.invoke(
        main,
        ["profile", "set", "--name", "Sam", "--age", "31", "--goal", "MUSCLE_GAIN", "--weight", "78"],
    )
    assert result.exit_code == 0, result.output
    return cli_runner


def _export(runner) -> dict:
    result = runner.invoke(main, ["plan", "export", "--format", "json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestInit:
    """Tests for the init command."""

    def test_init(self, data_dir):
        result = CliRunner().invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Database initialized" in result.output
        assert (data_dir / "fitplan.db").exists()

    def test_commands_require_init(self, data_dir):
        result = CliRunner().invoke(main, ["plan", "show"])

        assert result.exit_code == 1
        assert "fitplan init" in result.output


class TestProfileCommands:
    """Tests for profile commands."""

    def test_show(self, runner):
        result = runner.invoke(main, ["profile", "show"])

        assert result.exit_code == 0
        assert "Sam" in result.output
        assert "Goal: Muscle gain" in result.output

    def test_update_preferences(self, runner):
        result = runner.invoke(main, ["profile", "set", "-u", "1", "--focus", "legs", "-t", "30"])

        assert result.exit_code == 0
        assert "Focus areas: legs" in result.output

    def test_unknown_profile(self, runner):
        result = runner.invoke(main, ["profile", "show", "-u", "99"])
        assert result.exit_code == 1


class TestPlanCommands:
    """Tests for plan commands."""

    def test_show_without_plan(self, runner):
        result = runner.invoke(main, ["plan", "show"])

        assert result.exit_code == 0
        assert "No plan yet" in result.output

    def test_generate_and_export(self, runner):
        result = runner.invoke(main, ["plan", "generate", "--frequency", "4"])
        assert result.exit_code == 0, result.output
        assert "Plan created" in result.output

        data = _export(runner)
        assert data["frequency"] == 4
        assert len(data["exercises"]) == 5

        text = runner.invoke(main, ["plan", "export"]).output
        assert "## Warm-up" in text

    def test_export_to_file(self, runner, tmp_path):
        runner.invoke(main, ["plan", "generate"])
        output = tmp_path / "plan.txt"

        result = runner.invoke(main, ["plan", "export", "-o", str(output)])

        assert result.exit_code == 0
        assert "Frequency: 3/week" in output.read_text()

    def test_bad_frequency(self, runner):
        runner.invoke(main, ["plan", "generate"])
        plan_id = _export(runner)["id"]

        result = runner.invoke(main, ["plan", "frequency", str(plan_id), "9"])

        assert result.exit_code == 1
        assert INVALID_FREQUENCY in result.output

    def test_regenerate(self, runner):
        runner.invoke(main, ["plan", "generate"])
        result = runner.invoke(main, ["plan", "regenerate", "--difficulty", "easy"])

        assert result.exit_code == 0, result.output
        assert all(e["difficulty"] == 1 for e in _export(runner)["exercises"])

    def test_add_exercise(self, runner):
        runner.invoke(main, ["plan", "generate"])
        plan_id = str(_export(runner)["id"])

        result = runner.invoke(
            main, ["plan", "add-exercise", plan_id, "Farmer Carry", "-m", "forearms", "--reps", "1"]
        )
        assert result.exit_code == 0, result.output
        assert _export(runner)["exercises"][-1]["name"] == "Farmer Carry"

        result = runner.invoke(main, ["plan", "add-exercise", plan_id, "Farmer Carry", "-m", "traps", "--rest", "5"])
        assert result.exit_code == 1
        assert "Rest time must be between 30 and 180 seconds" in result.output

    def test_delete(self, runner):
        runner.invoke(main, ["plan", "generate"])
        plan_id = str(_export(runner)["id"])

        result = runner.invoke(main, ["plan", "delete", plan_id, "--yes"])
        assert result.exit_code == 0
        assert "No plan yet" in runner.invoke(main, ["plan", "show"]).output


class TestRecordCommands:
    """Tests for record, history and stats."""

    def test_record_by_name_and_stats(self, runner):
        runner.invoke(main, ["plan", "generate"])
        exercise = next(e for e in _export(runner)["exercises"] if e["exercise_type"] == "strength")

        result = runner.invoke(main, ["record", exercise["name"].lower(), str(exercise["sets"])])
        assert result.exit_code == 0, result.output
        assert f"Recorded {exercise['sets']}/{exercise['sets']} sets" in result.output

        history = runner.invoke(main, ["history"])
        assert exercise["name"] in history.output
        assert "Reps" in history.output
        assert str(exercise["sets"] * exercise["reps"]) in history.output

        stats = runner.invoke(main, ["stats"])
        assert "Workouts recorded:   1" in stats.output
        assert "Current streak:      1 day(s)" in stats.output

    def test_record_toggle_by_id(self, runner):
        runner.invoke(main, ["plan", "generate"])
        exercise = _export(runner)["exercises"][0]

        runner.invoke(main, ["record", str(exercise["id"]), "1"])
        result = runner.invoke(main, ["record", str(exercise["id"]), "1"])

        assert result.exit_code == 0
        assert "No record kept" in result.output

    def test_record_unknown_exercise(self, runner):
        runner.invoke(main, ["plan", "generate"])
        result = runner.invoke(main, ["record", "underwater basket weaving", "3"])

        assert result.exit_code == 1

    def test_history_bad_month(self, runner):
        result = runner.invoke(main, ["history", "--month", "May"])
        assert result.exit_code == 1
