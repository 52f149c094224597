"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tasklist.adapters.file_blob_store import FileBlobStore
from tasklist.adapters.json_tasks import JsonTaskRepository
from tasklist.cli import main
from tasklist.config import Config
from tasklist.core.tasks import Task


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=str(tmp_path))


@pytest.fixture
def runner(config):
    with patch("tasklist.cli.load_config", return_value=config):
        yield CliRunner()


@pytest.fixture
def repo(tmp_path):
    return JsonTaskRepository(FileBlobStore(tmp_path))


def _ids(repo):
    return [t.id for t in repo.load()]


class TestAdd:
    def test_adds_and_persists(self, runner, repo):
        result = runner.invoke(main, ["add", "  Buy milk ", "-p", "high", "-c", "Shopping"])
        assert result.exit_code == 0, result.output
        assert "Added #" in result.output

        tasks = repo.load()
        assert len(tasks) == 1
        assert tasks[0].text == "Buy milk"
        assert tasks[0].priority == "high"
        assert tasks[0].category == "Shopping"

    def test_blank_text_rejected(self, runner, repo):
        runner.invoke(main, ["add", "Existing"])
        result = runner.invoke(main, ["add", "   "])
        assert result.exit_code == 1
        assert "Please enter a task title" in result.output
        assert len(repo.load()) == 1

    def test_bad_due_date(self, runner, repo):
        result = runner.invoke(main, ["add", "Pay rent", "--due", "someday"])
        assert result.exit_code == 1
        assert repo.load() == []


class TestList:
    @pytest.fixture
    def seeded(self, repo):
        repo.save(
            [
                Task(id="a1", text="Buy milk", priority="high", category="Shopping"),
                Task(id="b2", text="Read book", priority="low", done=True),
                Task(id="c3", text="Ship release", priority="medium", category="Work"),
            ]
        )
        return repo

    def test_lists_all(self, runner, seeded):
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "Read book" in result.output
        assert "#c3" in result.output

    def test_hide_completed(self, runner, seeded):
        result = runner.invoke(main, ["list", "--hide-completed"])
        assert "Read book" not in result.output
        assert "Buy milk" in result.output

    def test_filters_and_sort_json(self, runner, seeded):
        result = runner.invoke(main, ["list", "--priority", "high", "--sort", "alphabetical", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["id"] for t in data] == ["a1"]

    def test_sort_priority(self, runner, seeded):
        result = runner.invoke(main, ["list", "--sort", "priority", "--json"])
        assert [t["priority"] for t in json.loads(result.output)] == ["high", "medium", "low"]

    def test_no_match(self, runner, seeded):
        result = runner.invoke(main, ["list", "--search", "zzz"])
        assert "No tasks match" in result.output

    def test_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert "No tasks." in result.output

    def test_config_hides_completed(self, seeded, tmp_path):
        config = Config(data_dir=str(tmp_path), show_completed=False)
        with patch("tasklist.cli.load_config", return_value=config):
            runner = CliRunner()
            hidden = runner.invoke(main, ["list"])
            shown = runner.invoke(main, ["list", "--show-completed"])
        assert "Read book" not in hidden.output
        assert "Read book" in shown.output


class TestMutations:
    @pytest.fixture
    def seeded(self, repo):
        repo.save([Task(id="t1", text="Buy milk"), Task(id="t2", text="Read book")])
        return repo

    def test_done_toggles(self, runner, seeded):
        result = runner.invoke(main, ["done", "t1"])
        assert result.exit_code == 0
        assert "done" in result.output
        assert seeded.load()[0].done is True

        runner.invoke(main, ["done", "t1"])
        assert seeded.load()[0].done is False

    def test_done_unknown_id(self, runner, seeded):
        result = runner.invoke(main, ["done", "nope"])
        assert result.exit_code == 1
        assert "No task with id" in result.output

    def test_edit_keeps_unspecified_fields(self, runner, seeded):
        runner.invoke(main, ["edit", "t1", "--priority", "high", "--category", "Shopping"])
        result = runner.invoke(main, ["edit", "t1", "--text", "Buy oat milk"])
        assert result.exit_code == 0

        task = seeded.load()[0]
        assert task.text == "Buy oat milk"
        assert task.priority == "high"
        assert task.category == "Shopping"

    def test_edit_clear_due(self, runner, seeded):
        runner.invoke(main, ["edit", "t2", "--due", "2025-03-01"])
        assert seeded.load()[1].due_date is not None
        runner.invoke(main, ["edit", "t2", "--clear-due"])
        assert seeded.load()[1].due_date is None

    def test_edit_blank_text(self, runner, seeded):
        result = runner.invoke(main, ["edit", "t1", "--text", " "])
        assert result.exit_code == 1
        assert seeded.load()[0].text == "Buy milk"

    def test_delete_with_yes(self, runner, seeded):
        result = runner.invoke(main, ["delete", "t1", "--yes"])
        assert result.exit_code == 0
        assert _ids(seeded) == ["t2"]

    def test_delete_declined(self, runner, seeded):
        result = runner.invoke(main, ["delete", "t1"], input="n\n")
        assert result.exit_code == 0
        assert _ids(seeded) == ["t1", "t2"]

    def test_delete_unknown(self, runner, seeded):
        result = runner.invoke(main, ["delete", "zzz", "-y"])
        assert result.exit_code == 1


class TestStatsAndCategories:
    def test_stats_json(self, runner, repo):
        repo.save(
            [
                Task(id="1", text="a", priority="high"),
                Task(id="2", text="b", done=True),
            ]
        )
        result = runner.invoke(main, ["stats", "--json"])
        data = json.loads(result.output)
        assert data["total"] == 2
        assert data["completionPercentage"] == 50
        assert data["pendingByPriority"]["high"] == 1

    def test_stats_empty(self, runner):
        result = runner.invoke(main, ["stats"])
        assert "Total:     0" in result.output
        assert "Progress:  0%" in result.output

    def test_categories(self, runner, repo):
        repo.save(
            [
                Task(id="1", text="a", category="Work"),
                Task(id="2", text="b", category="Health"),
                Task(id="3", text="c", category="Work"),
            ]
        )
        result = runner.invoke(main, ["categories"])
        assert result.output.splitlines() == ["Work", "Health"]

    def test_categories_empty_shows_suggestions(self, runner):
        result = runner.invoke(main, ["categories"])
        assert "Suggestions: Personal" in result.output


class TestStorageWarnings:
    def test_corrupt_file_warns_and_continues(self, runner, tmp_path):
        (tmp_path / "tasks.json").write_text("{broken")
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "Warning:" in result.output
        assert "No tasks." in result.output


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
