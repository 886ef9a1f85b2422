"""Run lifecycle base class consumed by the task executor.

Provides the abstract interface through which the executor reports the
progress of a run. See dynamic.py for the live terminal implementation.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union

from ..models import CacheStatus, Task, TaskResult


class RunLifeCycle(ABC):
    """Abstract base class for run progress reporting.

    The executor calls ``start_command`` once, then any interleaving of
    ``start_tasks``, ``print_task_terminal_output`` and ``end_tasks``, and
    finally ``end_command``.
    """

    @abstractmethod
    def start_command(self) -> None:
        """Start reporting the run."""
        pass

    @abstractmethod
    def start_tasks(self, tasks: Sequence[Task], group_id: Optional[Any] = None) -> None:
        """Mark tasks as running.

        Args:
            tasks: The tasks that started executing
            group_id: Optional id of the batch the tasks belong to
        """
        pass

    @abstractmethod
    def print_task_terminal_output(
        self,
        task: Task,
        cache_status: Union[CacheStatus, str],
        output: str,
    ) -> None:
        """Buffer a task's terminal output for display when it finishes.

        Args:
            task: The task that produced the output
            cache_status: Where the output came from
            output: The terminal output text
        """
        pass

    @abstractmethod
    def end_tasks(self, results: Sequence[TaskResult], group_id: Optional[Any] = None) -> None:
        """Report finished tasks, in order.

        Args:
            results: One result per finished task
            group_id: Optional id of the batch the tasks belong to
        """
        pass

    @abstractmethod
    def end_command(self) -> None:
        """Finish the run and print its summary."""
        pass
