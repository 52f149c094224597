"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TaskDraft, create_task, apply_edit, normalize_draft
from .filters import ALL, FilterState, matches, filter_tasks
from .sorting import SortMode, sort_tasks
from .stats import TaskStats, compute_stats
from .views import compose_view, unique_categories, task_id_at
from .display import format_task_line, format_stats

__all__ = [
    # Tasks
    "Task",
    "TaskDraft",
    "create_task",
    "apply_edit",
    "normalize_draft",
    # Filters
    "ALL",
    "FilterState",
    "matches",
    "filter_tasks",
    # Sorting
    "SortMode",
    "sort_tasks",
    # Stats
    "TaskStats",
    "compute_stats",
    # Views
    "compose_view",
    "unique_categories",
    "task_id_at",
    # Display
    "format_task_line",
    "format_stats",
]
