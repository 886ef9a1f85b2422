"""Lifecycle module: registry, pinned footer, animation and run summary."""

from .clock import AnimationClock
from .composer import FooterComposer
from .dynamic import DynamicRunLifeCycle, create_run_many_dynamic_output_renderer
from .footer import FooterRegion
from .life_cycle import RunLifeCycle
from .registry import TaskRegistry, TaskRow
from .session import TerminalSession
from .summary import SummaryRenderer

__all__ = [
    "AnimationClock",
    "FooterComposer",
    "DynamicRunLifeCycle",
    "create_run_many_dynamic_output_renderer",
    "FooterRegion",
    "RunLifeCycle",
    "TaskRegistry",
    "TaskRow",
    "TerminalSession",
    "SummaryRenderer",
]
