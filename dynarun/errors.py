"""Exceptions raised when the lifecycle contract is violated."""


class LifecycleError(Exception):
    """Raised when a caller drives the run lifecycle incorrectly."""


class UnknownTaskError(LifecycleError):
    """Raised when an event references a task the run was not told about."""

    def __init__(self, task_id: str):
        super().__init__(f"Task '{task_id}' is not part of this run")
        self.task_id = task_id


class DuplicateCompletionError(LifecycleError):
    """Raised when a task is completed more than once."""

    def __init__(self, task_id: str, status: str):
        super().__init__(f"Task '{task_id}' already finished with status '{status}'")
        self.task_id = task_id
        self.status = status


class RunFinishedError(LifecycleError):
    """Raised when task events arrive after the run has been resolved."""
