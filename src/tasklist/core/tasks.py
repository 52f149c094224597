"""Pure task domain logic - no I/O dependencies."""

import random
import string
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timezone

from ..errors import ValidationError

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)
PRIORITY_RANK = {PRIORITY_HIGH: 3, PRIORITY_MEDIUM: 2, PRIORITY_LOW: 1}

# Offered when editing; the data layer accepts any category.
SUGGESTED_CATEGORIES = ["Personal", "Work", "Shopping", "Health", "Education", "Other"]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | date | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing "Z" and date-only strings. Naive values are taken as UTC.
    Raises ValueError for malformed input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _optional_str(data: dict, key: str) -> str | None:
    """String field of a persisted record; TypeError for any other type."""
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {value!r}")
    return value


def new_task_id(now: datetime | None = None) -> str:
    """Epoch milliseconds followed by a random base-36 suffix."""
    now = now or utcnow()
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(now.timestamp() * 1000)}{suffix}"


@dataclass
class Task:
    """A single to-do item."""

    id: str
    text: str
    description: str = ""
    category: str | None = None
    priority: str = PRIORITY_LOW
    due_date: datetime | None = None
    done: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def priority_rank(self) -> int:
        """high=3, medium=2, low=1, anything else 0."""
        return PRIORITY_RANK.get(self.priority, 0)

    def is_overdue(self, as_of: datetime | None = None) -> bool:
        """Not done and past its due date."""
        if self.done or not self.due_date:
            return False
        as_of = as_of or utcnow()
        return self.due_date < as_of

    def touched(self, now: datetime | None = None) -> datetime:
        """Timestamp for a mutation, never earlier than created_at."""
        now = now or utcnow()
        if self.created_at and now < self.created_at:
            return self.created_at
        return now

    def toggled(self, now: datetime | None = None) -> "Task":
        """Copy with done flipped and updated_at refreshed."""
        return replace(self, done=not self.done, updated_at=self.touched(now))

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """
        Create Task from its persisted form.

        Raises KeyError, TypeError or ValueError when the record is unusable.
        """
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError("task text is empty")
        done = data.get("done", False)
        if not isinstance(done, bool):
            raise TypeError(f"done must be true or false, got {done!r}")
        return cls(
            id=str(data["id"]),
            text=text,
            description=_optional_str(data, "description") or "",
            category=_optional_str(data, "category") or None,
            priority=_optional_str(data, "priority") or PRIORITY_LOW,
            due_date=parse_timestamp(data.get("dueDate")),
            done=done,
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "description": self.description,
            "category": self.category,
            "priority": self.priority,
            "dueDate": format_timestamp(self.due_date),
            "done": self.done,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }


@dataclass
class TaskDraft:
    """Add/edit payload as entered by the user, before normalization."""

    text: str
    description: str = ""
    category: str | None = None
    priority: str | None = None
    due_date: datetime | str | None = None


def normalize_draft(draft: TaskDraft) -> TaskDraft:
    """
    Trim fields, default the priority and parse the due date.

    Raises ValidationError for empty text, an unknown priority or a bad date.
    """
    text = (draft.text or "").strip()
    if not text:
        raise ValidationError("Please enter a task title")

    priority = (draft.priority or PRIORITY_LOW).strip().lower()
    if priority not in PRIORITIES:
        raise ValidationError(
            f"Unknown priority {draft.priority!r} (expected one of: {', '.join(PRIORITIES)})"
        )

    try:
        due_date = parse_timestamp(draft.due_date)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid due date: {draft.due_date!r}")

    category = (draft.category or "").strip() or None

    return TaskDraft(
        text=text,
        description=(draft.description or "").strip(),
        category=category,
        priority=priority,
        due_date=due_date,
    )


def create_task(
    draft: TaskDraft,
    task_id: str | None = None,
    now: datetime | None = None,
) -> Task:
    """Build a new Task from a draft, assigning id and timestamps."""
    clean = normalize_draft(draft)
    now = now or utcnow()
    return Task(
        id=task_id or new_task_id(now),
        text=clean.text,
        description=clean.description,
        category=clean.category,
        priority=clean.priority,
        due_date=clean.due_date,
        done=False,
        created_at=now,
        updated_at=now,
    )


def apply_edit(task: Task, draft: TaskDraft, now: datetime | None = None) -> Task:
    """Copy of task with the draft's fields; id, done and created_at are kept."""
    clean = normalize_draft(draft)
    return replace(
        task,
        text=clean.text,
        description=clean.description,
        category=clean.category,
        priority=clean.priority,
        due_date=clean.due_date,
        updated_at=task.touched(now),
    )
