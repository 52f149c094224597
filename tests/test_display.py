"""Tests for plain-text formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from tasklist.core.display import format_due, format_stats, format_task_line
from tasklist.core.stats import TaskStats, compute_stats
from tasklist.core.tasks import Task


@pytest.fixture
def now():
    return datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestFormatTaskLine:
    def test_pending_task(self, now):
        task = Task(id="abc", text="Buy milk", priority="high", category="Shopping")
        line = format_task_line(task, now)
        assert line.startswith("[ ] !!!")
        assert "Buy milk (Shopping)" in line
        assert line.endswith("#abc")

    def test_done_task(self, now):
        line = format_task_line(Task(id="1", text="Read", done=True), now)
        assert line.startswith("[x] !")

    def test_overdue_marker(self, now):
        task = Task(id="1", text="Pay rent", due_date=now - timedelta(days=2))
        assert "OVERDUE" in format_task_line(task, now, date_format="%Y")

    def test_no_details(self, now):
        line = format_task_line(Task(id="1", text="Plain"), now)
        assert "(" not in line

    def test_unknown_priority_marker(self, now):
        assert "?" in format_task_line(Task(id="1", text="a", priority="someday"), now)


class TestFormatDue:
    def test_no_due_date(self, now):
        assert format_due(Task(id="1", text="a"), now) == ""

    def test_future(self, now):
        task = Task(id="1", text="a", due_date=now + timedelta(days=30))
        assert format_due(task, now, date_format="%Y") == "due 2025"


class TestFormatStats:
    def test_includes_counts_and_progress(self, now):
        tasks = [
            Task(id="1", text="a", priority="high"),
            Task(id="2", text="b", done=True),
        ]
        text = format_stats(compute_stats(tasks, now))
        assert "Total:     2" in text
        assert "Progress:  50%" in text
        assert "Pending by priority:" in text
        assert "high" in text
        assert "medium" not in text

    def test_no_breakdown_when_nothing_pending(self):
        text = format_stats(TaskStats())
        assert "Pending by priority" not in text
        assert "Progress:  0%" in text
