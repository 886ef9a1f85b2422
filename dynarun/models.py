"""Data models for tasks, task statuses and task results.

The task-execution side of a run hands these to the lifecycle. Tasks are
matched back to their rows by ``Task.id``, never by object identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class TaskTarget:
    """Which project, target and configuration a task runs."""

    project: str
    target: str
    configuration: Optional[str] = None


@dataclass(frozen=True)
class Task:
    """A single task of a run.

    Attributes:
        id: Unique identifier, stable for the run (e.g. "app:build")
        target: Project/target the task belongs to
        overrides: Overrides for the configured options of the target
    """

    id: str
    target: TaskTarget
    overrides: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        return self.id


class TaskStatus(Enum):
    """Status of a task row.

    A row only ever moves PENDING -> RUNNING -> one terminal status.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    LOCAL_CACHE = "local-cache"
    REMOTE_CACHE = "remote-cache"
    LOCAL_CACHE_KEPT_EXISTING = "local-cache-kept-existing"

    @classmethod
    def parse(cls, value: str | TaskStatus) -> TaskStatus:
        """Parse a wire value ("local-cache", ...) into a status.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, TaskStatus):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown task status '{value}'. Expected one of: {known}") from None

    @property
    def is_terminal(self) -> bool:
        return self not in (TaskStatus.PENDING, TaskStatus.RUNNING)

    @property
    def is_cached(self) -> bool:
        return self in (
            TaskStatus.LOCAL_CACHE,
            TaskStatus.REMOTE_CACHE,
            TaskStatus.LOCAL_CACHE_KEPT_EXISTING,
        )

    @property
    def is_success(self) -> bool:
        return self is TaskStatus.SUCCESS or self.is_cached


class CacheStatus(Enum):
    """Where a task's terminal output came from."""

    LOCAL_CACHE = "local-cache"
    REMOTE_CACHE = "remote-cache"
    LOCAL_CACHE_KEPT_EXISTING = "local-cache-kept-existing"
    NOT_CACHED = "not-cached"


@dataclass(frozen=True)
class TaskResult:
    """Outcome of a task as reported by the executor."""

    task: Task
    status: TaskStatus
    terminal_output: Optional[str] = None
    code: Optional[int] = None

    def __post_init__(self) -> None:
        status = TaskStatus.parse(self.status)
        if not status.is_terminal:
            raise ValueError(f"Task result for '{self.task.id}' has non-terminal status '{status.value}'")
        object.__setattr__(self, "status", status)


@dataclass(frozen=True)
class RunArgs:
    """Invocation arguments that shape the footer.

    Attributes:
        targets: Requested target names (derived from the tasks when empty)
        configuration: Requested configuration, if any
        parallel: Configured parallelism; None when not a concrete integer
    """

    targets: list[str] = field(default_factory=list)
    configuration: Optional[str] = None
    parallel: Optional[int] = None
