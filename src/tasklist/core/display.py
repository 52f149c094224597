"""Plain-text formatting for tasks and stats - no I/O dependencies."""

from datetime import datetime

from .stats import TaskStats
from .tasks import Task, utcnow

PRIORITY_MARKERS = {"high": "!!!", "medium": "!!", "low": "!"}

DEFAULT_DATE_FORMAT = "%b %d %H:%M"


def format_due(task: Task, as_of: datetime | None = None, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Due date for display, flagged when overdue. Empty if no deadline."""
    if not task.due_date:
        return ""
    due = task.due_date.astimezone().strftime(date_format)
    if task.is_overdue(as_of):
        return f"due {due}, OVERDUE"
    return f"due {due}"


def format_task_line(
    task: Task,
    as_of: datetime | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """
    Format a single task for the list view.

    Pure function - no I/O.
    """
    as_of = as_of or utcnow()
    check = "x" if task.done else " "
    marker = PRIORITY_MARKERS.get(task.priority, "?")

    details = []
    if task.category:
        details.append(task.category)
    due = format_due(task, as_of, date_format)
    if due:
        details.append(due)
    suffix = f" ({', '.join(details)})" if details else ""

    return f"[{check}] {marker:3} {task.text}{suffix}  #{task.id}"


def format_stats(stats: TaskStats) -> str:
    """
    Format the overview block.

    Pending-by-priority lines are only listed when something is pending.
    """
    lines = [
        f"Total:     {stats.total}",
        f"Completed: {stats.completed}",
        f"Pending:   {stats.pending}",
        f"Overdue:   {stats.overdue}",
        f"Progress:  {stats.completion_percentage}%",
    ]

    if stats.pending > 0:
        lines.append("")
        lines.append("Pending by priority:")
        for priority in ("high", "medium", "low"):
            count = stats.pending_by_priority.get(priority, 0)
            if count:
                lines.append(f"  {priority:6} {count}")

    return "\n".join(lines)
