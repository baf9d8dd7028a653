"""Core models for tasklist.

This module defines the core data structures for task management:
- Task: An immutable dataclass representing a single to-do item
- Priority: Enum for task priority levels
- TaskFilter: Enum for the view selector applied to the task list
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class Priority(Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return PRIORITY_LABELS[self]


class TaskFilter(Enum):
    """Which tasks the visible list keeps."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return FILTER_LABELS[self]


PRIORITY_LABELS = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Med",
    Priority.HIGH: "High",
}

FILTER_LABELS = {
    TaskFilter.ALL: "All",
    TaskFilter.ACTIVE: "Active",
    TaskFilter.COMPLETED: "Done",
}


@dataclass(frozen=True)
class Task:
    """Task model representing a single task item.

    Instances are immutable; state changes go through TaskStore, which
    swaps in a replacement object.

    Attributes:
        id: Unique identifier issued by the owning store, never reused
        text: Trimmed, non-empty task description
        completed: Whether the task is done
        priority: Priority level, fixed at creation
        created_at: Timestamp when the task was created
    """

    id: int
    text: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    created_at: datetime = field(default_factory=datetime.now)

    def toggled(self) -> "Task":
        """Return a copy of this task with ``completed`` flipped."""
        return replace(self, completed=not self.completed)
