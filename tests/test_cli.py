"""Tests for the command line interface."""

import json
from datetime import datetime
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from texttodo.cli import main
from texttodo.config import Config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fixed_env():
    with patch("texttodo.cli.load_config", return_value=Config()), patch(
        "texttodo.cli.now_for", return_value=datetime(2024, 10, 2, 9, 5)
    ):
        yield


@pytest.fixture
def todo_file(tmp_path):
    path = tmp_path / "todo.txt"
    path.write_text("TODOs:\n* A 60m <=10/7\n* B 120m <=10/7\n")
    return path


class TestSort:
    def test_prints_sorted_region(self, runner, todo_file):
        result = runner.invoke(main, ["sort", str(todo_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].endswith("##∑: 36m/d")
        assert lines[1].startswith("* B 2hr <=10/7")
        assert lines[2].startswith("* A 1hr <=10/7")

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["sort", str(tmp_path / "nope.txt")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_no_file_configured(self, runner):
        result = runner.invoke(main, ["sort"])
        assert result.exit_code == 1
        assert "not configured" in result.output

    def test_no_region(self, runner, tmp_path):
        path = tmp_path / "prose.txt"
        path.write_text("Nothing to do here\n")
        result = runner.invoke(main, ["sort", str(path)])
        assert result.exit_code == 1
        assert "No TODOs header" in result.output


class TestDone:
    def test_marks_done(self, runner, todo_file):
        result = runner.invoke(main, ["done", str(todo_file), "--line", "2"])
        assert result.exit_code == 0
        assert "Marked done" in result.output
        assert todo_file.read_text().splitlines()[1] == "W A 1hr <=10/7"

    def test_requires_line(self, runner, todo_file):
        result = runner.invoke(main, ["done", str(todo_file)])
        assert result.exit_code != 0

    def test_header_is_not_a_todo(self, runner, todo_file):
        result = runner.invoke(main, ["done", str(todo_file), "--line", "1"])
        assert result.exit_code == 1
        assert "Not a TODO line" in result.output


class TestTiming:
    def test_start_and_stop(self, runner, todo_file):
        result = runner.invoke(main, ["start", str(todo_file), "-l", "3"])
        assert result.exit_code == 0
        assert "Timing line 3" in result.output
        assert "@9:05" in todo_file.read_text().splitlines()[2]

        result = runner.invoke(main, ["stop", str(todo_file)])
        assert result.exit_code == 0
        assert "Stopped 1 timer(s)" in result.output
        assert todo_file.read_text().splitlines()[2] == "* B 2hr +0m <=10/7".ljust(65) + " ##24m/d"

    def test_start_on_header_fails(self, runner, todo_file):
        result = runner.invoke(main, ["start", str(todo_file), "-l", "1"])
        assert result.exit_code == 1

    def test_stop_with_nothing_running(self, runner, todo_file):
        result = runner.invoke(main, ["stop", str(todo_file)])
        assert result.exit_code == 0
        assert "No timers running." in result.output


class TestArchive:
    def test_archive_to_file(self, runner, tmp_path):
        path = tmp_path / "todo.txt"
        path.write_text("TODOs:\n* A\nM B\n")
        archive = tmp_path / "done.txt"

        result = runner.invoke(main, ["archive", str(path), "--to", str(archive)])

        assert result.exit_code == 0
        assert path.read_text() == "TODOs:\n* A\n"
        assert archive.read_text() == "TODOs:\nM B\n"

    def test_nothing_to_archive(self, runner, todo_file):
        result = runner.invoke(main, ["archive", str(todo_file)])
        assert result.exit_code == 0
        assert "Nothing to archive." in result.output


class TestShow:
    def test_json(self, runner):
        result = runner.invoke(main, ["show", "* Report 2hr +30m <=10/7", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["desc"] == "Report"
        assert data["duration"] == 120
        assert data["spent_minutes"] == 30
        assert data["due_date"] == "2024-10-07"
        assert data["days_left"] == 5
        assert data["completion_rate"] == 24
        assert data["done"] is False

    def test_json_elapsed(self, runner):
        result = runner.invoke(main, ["show", "* Report 30m <=10/2", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["days_left"] == 0
        assert data["elapsed"] is True
        assert data["completion_rate"] is None

    def test_text(self, runner):
        result = runner.invoke(main, ["show", "* Report 2hr <=10/7"])
        assert result.exit_code == 0
        assert "pending: Report" in result.output
        assert "rate:     24m/d" in result.output

    def test_not_a_todo_line(self, runner):
        result = runner.invoke(main, ["show", "hello"])
        assert result.exit_code == 1
        assert "Not a TODO line" in result.output
