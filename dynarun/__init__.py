"""dynarun - live terminal output for runs of many concurrently executing tasks."""

from .config import RendererConfig
from .errors import DuplicateCompletionError, LifecycleError, RunFinishedError, UnknownTaskError
from .lifecycle import DynamicRunLifeCycle, RunLifeCycle, create_run_many_dynamic_output_renderer
from .models import CacheStatus, RunArgs, Task, TaskResult, TaskStatus, TaskTarget

__version__ = "0.1.0"

__all__ = [
    "RendererConfig",
    "DuplicateCompletionError",
    "LifecycleError",
    "RunFinishedError",
    "UnknownTaskError",
    "DynamicRunLifeCycle",
    "RunLifeCycle",
    "create_run_many_dynamic_output_renderer",
    "CacheStatus",
    "RunArgs",
    "Task",
    "TaskResult",
    "TaskStatus",
    "TaskTarget",
]
