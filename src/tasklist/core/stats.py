"""Completion statistics over the task collection - no I/O dependencies."""

import math
from dataclasses import dataclass, field
from datetime import datetime

from .tasks import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, Task, utcnow


@dataclass
class TaskStats:
    """Counts shown in the overview."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    completion_percentage: int = 0
    pending_by_priority: dict[str, int] = field(
        default_factory=lambda: {PRIORITY_HIGH: 0, PRIORITY_MEDIUM: 0, PRIORITY_LOW: 0}
    )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "overdue": self.overdue,
            "completionPercentage": self.completion_percentage,
            "pendingByPriority": dict(self.pending_by_priority),
        }


def completion_percentage(completed: int, total: int) -> int:
    """Whole percent, halves rounded up. 0 for an empty collection."""
    if total <= 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def compute_stats(tasks: list[Task], as_of: datetime | None = None) -> TaskStats:
    """
    Aggregate counts over the full (unfiltered) collection.

    Pure function apart from the wall clock used for overdue when as_of is omitted.
    """
    as_of = as_of or utcnow()
    stats = TaskStats(total=len(tasks))

    for task in tasks:
        if task.done:
            stats.completed += 1
            continue
        if task.is_overdue(as_of):
            stats.overdue += 1
        if task.priority in stats.pending_by_priority:
            stats.pending_by_priority[task.priority] += 1

    stats.pending = stats.total - stats.completed
    stats.completion_percentage = completion_percentage(stats.completed, stats.total)
    return stats
