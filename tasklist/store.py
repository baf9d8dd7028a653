"""In-memory task store for tasklist.

This module provides the TaskStore class, the single owner of the task
collection and the current filter/priority selection. Presentation code
calls the mutation methods and re-reads the derived views afterwards;
views are recomputed on every call and never cached.

The store is not thread-safe. Hosts that share one across threads must
serialize whole read/mutate cycles themselves.
"""

import itertools
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple, Union

from tasklist.models import Priority, Task, TaskFilter

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 120


def starter_tasks() -> List[Task]:
    """Return the demonstration tasks, newest first."""
    return [
        Task(id=1, text="Review pull request from the team", priority=Priority.HIGH),
        Task(id=2, text="Update component library to latest MUI version", priority=Priority.MEDIUM),
        Task(id=3, text="Write unit tests for auth module", completed=True, priority=Priority.HIGH),
        Task(id=4, text="Refactor legacy CSS to Tailwind", priority=Priority.LOW),
    ]


class TaskStore:
    """Store for tasks and the selection state around them.

    Mutations never raise for in-domain input: empty text and unknown ids
    are silent no-ops. The only rejected input is a bad construction
    argument.

    Attributes:
        max_text_length: Cap applied to task text after trimming
    """

    def __init__(
        self,
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
        tasks: Optional[Iterable[Task]] = None,
    ):
        """Initialize TaskStore, optionally with seed tasks.

        Args:
            max_text_length: Maximum task text length. Must be positive.
            tasks: Seed collection, newest first. Ids must be unique. Text is
                trimmed and capped the same way add_task does it.

        Raises:
            ValueError: If max_text_length is not positive, seed ids collide
                or a seed task has blank text
        """
        if max_text_length <= 0:
            raise ValueError(f"max_text_length must be positive, got {max_text_length}")

        self._max_text_length = max_text_length

        seed = []
        for task in tasks or []:
            text = self._normalize_text(task.text)
            if not text:
                raise ValueError(f"Seed task #{task.id} has blank text")
            seed.append(task if text == task.text else replace(task, text=text))

        ids = [task.id for task in seed]
        if len(set(ids)) != len(ids):
            raise ValueError("Seed tasks must have unique ids")

        self._tasks: List[Task] = seed
        self._filter = TaskFilter.ALL
        self._pending_priority = Priority.MEDIUM

        # Counter only moves forward, so deleted ids are never handed out again
        self._ids = itertools.count(max(ids, default=0) + 1)

        logger.info("TaskStore ready total=%s max_text_length=%s", len(seed), max_text_length)

    def _normalize_text(self, raw_text: str) -> str:
        """Trim text and cut it to max_text_length. Blank input gives ''."""
        text = raw_text.strip()
        if len(text) > self._max_text_length:
            text = text[: self._max_text_length].rstrip()
        return text

    @classmethod
    def with_starter_tasks(cls, max_text_length: int = DEFAULT_MAX_TEXT_LENGTH) -> "TaskStore":
        """Create a store seeded with the demonstration tasks."""
        return cls(max_text_length=max_text_length, tasks=starter_tasks())

    # ---- state ----

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Snapshot of the whole collection, newest first."""
        return tuple(self._tasks)

    @property
    def active_filter(self) -> TaskFilter:
        return self._filter

    @property
    def pending_priority(self) -> Priority:
        return self._pending_priority

    @property
    def max_text_length(self) -> int:
        return self._max_text_length

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get a task by ID, or None if it doesn't exist."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ---- mutations ----

    def add_task(self, raw_text: str) -> Optional[Task]:
        """Create a task from user input and put it first.

        The text is trimmed and then cut to max_text_length. Whitespace-only
        input changes nothing.

        Args:
            raw_text: Text as typed by the user

        Returns:
            The created Task, or None when the trimmed text was empty
        """
        text = self._normalize_text(raw_text)
        if not text:
            logger.debug("add_task ignored empty text")
            return None

        task = Task(id=next(self._ids), text=text, priority=self._pending_priority)
        self._tasks.insert(0, task)

        logger.debug("add_task id=%s priority=%s", task.id, task.priority.value)
        return task

    def toggle_task(self, task_id: int) -> None:
        """Flip the completion state of a task. Unknown ids are ignored."""
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks[index] = task.toggled()
                logger.debug("toggle_task id=%s completed=%s", task_id, not task.completed)
                return
        logger.debug("toggle_task ignored unknown id=%s", task_id)

    def delete_task(self, task_id: int) -> None:
        """Remove a task by ID. Unknown ids are ignored."""
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            logger.debug("delete_task ignored unknown id=%s", task_id)
            return

        self._tasks = remaining
        logger.debug("delete_task id=%s", task_id)

    def clear_completed(self) -> int:
        """Remove every completed task, keeping the order of the rest.

        Returns:
            Number of tasks removed
        """
        remaining = [task for task in self._tasks if not task.completed]
        removed = len(self._tasks) - len(remaining)
        self._tasks = remaining

        if removed:
            logger.debug("clear_completed removed=%s", removed)
        return removed

    def set_filter(self, task_filter: Union[TaskFilter, str]) -> None:
        self._filter = TaskFilter(task_filter)

    def set_pending_priority(self, priority: Union[Priority, str]) -> None:
        self._pending_priority = Priority(priority)

    # ---- derived views ----

    def visible_tasks(self) -> List[Task]:
        """Get the tasks to display under the active filter.

        Incomplete tasks come before completed ones. The sort is stable, so
        tasks with the same completion state keep their collection order.
        Filtering is applied after sorting.

        Returns:
            New list of Task objects
        """
        ordered = sorted(self._tasks, key=lambda task: task.completed)

        if self._filter is TaskFilter.ACTIVE:
            return [task for task in ordered if not task.completed]
        if self._filter is TaskFilter.COMPLETED:
            return [task for task in ordered if task.completed]
        return ordered

    def completed_count(self) -> int:
        return sum(1 for task in self._tasks if task.completed)

    def total_count(self) -> int:
        return len(self._tasks)

    def remaining_count(self) -> int:
        return self.total_count() - self.completed_count()

    def has_completed(self) -> bool:
        return any(task.completed for task in self._tasks)

    def progress_percent(self) -> int:
        """Share of completed tasks as a whole percentage.

        Rounds half up (1 of 8 done is 13, not 12) and returns 0 for an
        empty collection. The result is 100 only when every task is done
        and 0 only when none is.
        """
        total = self.total_count()
        if total == 0:
            return 0

        completed = self.completed_count()
        # floor(100 * completed / total + 1/2) in exact integer arithmetic
        percent = (200 * completed + total) // (2 * total)

        if completed < total:
            percent = min(percent, 99)
        if completed > 0:
            percent = max(percent, 1)
        return percent

    def priority_breakdown(self) -> Dict[Priority, int]:
        """Count outstanding tasks per priority.

        Completed tasks are not counted. Every priority is present in the
        result, in LOW, MEDIUM, HIGH order.
        """
        counts = {priority: 0 for priority in Priority}
        for task in self._tasks:
            if not task.completed:
                counts[task.priority] += 1
        return counts
