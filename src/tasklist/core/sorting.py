"""Sort modes for the task list - pure functions, no I/O."""

import unicodedata
from datetime import datetime, timezone
from enum import Enum

from .tasks import Task

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class SortMode(Enum):
    """Ordering applied to the filtered task list."""

    CREATED = "created"  # Newest first
    DUE_DATE = "dueDate"  # Soonest first, undated last
    PRIORITY = "priority"  # High to low
    ALPHABETICAL = "alphabetical"  # A-Z

    @classmethod
    def parse(cls, value: "str | SortMode | None") -> "SortMode":
        """Sort mode for a value; anything unrecognized means CREATED."""
        if isinstance(value, cls):
            return value
        for mode in cls:
            if mode.value == value:
                return mode
        return cls.CREATED


def collation_key(text: str) -> tuple[str, str]:
    """Accent- and case-insensitive key, raw text as tie-break."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text)


def sort_tasks(tasks: list[Task], mode: "SortMode | str | None" = SortMode.CREATED) -> list[Task]:
    """
    Return a new list ordered by the given mode.

    Ties keep the input order. Pure function - no I/O.
    """
    match SortMode.parse(mode):
        case SortMode.DUE_DATE:
            return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or _OLDEST))
        case SortMode.PRIORITY:
            return sorted(tasks, key=lambda t: -t.priority_rank)
        case SortMode.ALPHABETICAL:
            return sorted(tasks, key=lambda t: collation_key(t.text))
        case _:
            # Missing created_at counts as the oldest possible value
            return sorted(tasks, key=lambda t: t.created_at or _OLDEST, reverse=True)
