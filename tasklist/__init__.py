"""tasklist: an in-memory personal task list with a console front-end."""

from tasklist.models import Priority, Task, TaskFilter
from tasklist.store import TaskStore

__all__ = ["Priority", "Task", "TaskFilter", "TaskStore"]
