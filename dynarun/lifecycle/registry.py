"""Task registry: the authoritative task rows and aggregate counters of a run."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..errors import DuplicateCompletionError, LifecycleError, UnknownTaskError
from ..models import Task, TaskStatus

logger = logging.getLogger(__name__)


@dataclass
class TaskRow:
    """Live status record for one task."""

    task: Task
    status: TaskStatus = TaskStatus.PENDING

    @property
    def task_id(self) -> str:
        return self.task.id


class TaskRegistry:
    """Task rows, start times, buffered outputs and aggregate counters.

    Rows keep declaration order. Counters only grow and each one is updated
    exactly once per task, so after every call:

        total_completed == total_succeeded + total_failed
        total_cached <= total_succeeded
        total_completed <= total_tasks
    """

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns):
        """Initialize an empty registry.

        Args:
            clock: Monotonic nanosecond clock used for start times
        """
        self._clock = clock
        self._rows: dict[str, TaskRow] = {}
        self._registered = False

        self.start_times: dict[str, int] = {}
        self.pending_outputs: dict[str, str] = {}
        self.failed_ids: list[str] = []

        self.total_tasks = 0
        self.total_completed = 0
        self.total_succeeded = 0
        self.total_failed = 0
        self.total_cached = 0

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def rows(self) -> list[TaskRow]:
        """Rows in declaration order."""
        return list(self._rows.values())

    @property
    def running_rows(self) -> list[TaskRow]:
        return [row for row in self._rows.values() if row.status is TaskStatus.RUNNING]

    @property
    def remaining(self) -> int:
        """Tasks not yet completed."""
        return self.total_tasks - self.total_completed

    @property
    def all_succeeded(self) -> bool:
        return self.total_succeeded == self.total_tasks

    def row(self, task_id: str) -> TaskRow:
        """Get the row of a task.

        Raises:
            UnknownTaskError: If the task was never registered
        """
        try:
            return self._rows[task_id]
        except KeyError:
            raise UnknownTaskError(task_id) from None

    def status(self, task_id: str) -> TaskStatus:
        return self.row(task_id).status

    # =========================================================================
    # Mutations
    # =========================================================================

    def register_all(self, tasks: Iterable[Task]) -> None:
        """Seed one pending row per task. Must be called exactly once."""
        if self._registered:
            raise LifecycleError("Tasks have already been registered for this run")

        rows: dict[str, TaskRow] = {}
        for task in tasks:
            if task.id in rows:
                raise LifecycleError(f"Task '{task.id}' is declared more than once")
            rows[task.id] = TaskRow(task=task)

        self._rows = rows
        self.total_tasks = len(rows)
        self._registered = True

    def mark_running(self, tasks: Iterable[Task]) -> list[TaskRow]:
        """Move tasks to RUNNING and record their start time.

        Unknown tasks and tasks that already finished are ignored.

        Returns:
            The rows that are now running
        """
        started = []
        for task in tasks:
            row = self._rows.get(task.id)
            if row is None:
                logger.debug("Ignoring start of unknown task %s", task.id)
                continue
            if row.status.is_terminal:
                logger.debug("Ignoring start of finished task %s (%s)", task.id, row.status.value)
                continue
            row.status = TaskStatus.RUNNING
            self.start_times.setdefault(task.id, self._clock())
            started.append(row)
        return started

    def record_output(self, task_id: str, text: str) -> None:
        """Buffer the latest terminal output of a task."""
        self.row(task_id)
        self.pending_outputs[task_id] = text

    def consume_output(self, task_id: str) -> Optional[str]:
        """Take the buffered terminal output of a task, clearing it."""
        return self.pending_outputs.pop(task_id, None)

    def complete(self, task_id: str, status: TaskStatus) -> TaskRow:
        """Move a task to its terminal status and update the counters.

        Raises:
            UnknownTaskError: If the task was never registered
            DuplicateCompletionError: If the task already finished
            ValueError: If the status is not terminal
        """
        status = TaskStatus.parse(status)
        if not status.is_terminal:
            raise ValueError(f"Cannot complete task '{task_id}' with status '{status.value}'")

        row = self.row(task_id)
        if row.status.is_terminal:
            raise DuplicateCompletionError(task_id, row.status.value)

        row.status = status
        self.total_completed += 1

        if status is TaskStatus.SUCCESS:
            self.total_succeeded += 1
        elif status.is_cached:
            self.total_succeeded += 1
            self.total_cached += 1
        elif status is TaskStatus.FAILURE:
            self.total_failed += 1
            self.failed_ids.append(task_id)
        else:
            raise ValueError(f"Unhandled terminal status '{status.value}'")

        return row

    def elapsed_ns(self, task_id: str) -> Optional[int]:
        """Nanoseconds since the task started, or None if it never started."""
        start = self.start_times.get(task_id)
        if start is None:
            return None
        return max(0, self._clock() - start)
