"""Task formatting utilities with Rich styling support.

Provides the text of per-task completion lines, indented terminal output
blocks and the "target X for N projects" run description. All formatting
methods return Rich Text objects; no_color is handled by the console.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from rich.text import Text

from ..models import Task, TaskStatus

if TYPE_CHECKING:
    from .output import OutputFormatter

# Indent of a completion line after the X padding
RESULT_INDENT = "   "
# Indent of terminal output lines after the X padding
OUTPUT_INDENT = "      "

CACHE_ANNOTATIONS = {
    TaskStatus.LOCAL_CACHE: "[local cache]",
    TaskStatus.REMOTE_CACHE: "[remote cache]",
    TaskStatus.LOCAL_CACHE_KEPT_EXISTING: "[existing outputs match the cache, left as is]",
}


def normalize_output_block(output: Optional[str]) -> list[str]:
    """Neaten up terminal output we do not control.

    Leading whitespace is trimmed and excess trailing blank lines are
    collapsed so at most one remains.
    """
    text = (output or "").replace("\r\n", "\n").lstrip()
    lines = text.split("\n")

    trailing_empty = 0
    for line in reversed(lines):
        if line != "":
            break
        trailing_empty += 1

    if trailing_empty > 1:
        del lines[len(lines) - (trailing_empty - 1):]
    return lines


def derive_targets(tasks: Sequence[Task]) -> list[str]:
    """Target names of the tasks, in declaration order, without duplicates."""
    targets: list[str] = []
    for task in tasks:
        if task.target.target not in targets:
            targets.append(task.target.target)
    return targets


class TaskFormatter:
    """Formats task ids, completion lines and run descriptions."""

    def __init__(self, output: OutputFormatter, command_prefix: str = "run"):
        """Initialize the task formatter.

        Args:
            output: The styled writer, for glyphs and padding
            command_prefix: Dimmed command shown before each task id
        """
        self._output = output
        self._command_prefix = command_prefix

    def format_command(self, task_id: str, style: str = "") -> Text:
        """Format a task id as the command that runs it."""
        text = Text()
        text.append(self._command_prefix, style="dim")
        text.append(" ")
        text.append(task_id, style=style)
        return text

    def format_result(self, task_id: str, status: TaskStatus, duration: Optional[str] = None) -> Text:
        """Format the one-line outcome of a finished task.

        Args:
            task_id: The finished task
            status: Its terminal status
            duration: Formatted run time, shown for plain successes

        Returns:
            The completion line, without the X padding
        """
        sym = self._output.symbols
        line = Text(RESULT_INDENT)

        if status is TaskStatus.FAILURE:
            line.append(sym.Cross, style="red")
            line.append("  ")
            line.append_text(self.format_command(task_id, style="red"))
        elif status is TaskStatus.SUCCESS:
            line.append(sym.Tick, style="green")
            line.append("  ")
            line.append_text(self.format_command(task_id))
            if duration is not None:
                line.append(f" ({duration})", style="dim")
        elif status.is_cached:
            line.append(sym.Tick, style="green")
            line.append("  ")
            line.append_text(self.format_command(task_id))
            line.append("  ")
            line.append(CACHE_ANNOTATIONS[status], style="dim")
        else:
            raise ValueError(f"Task '{task_id}' has not finished (status '{status.value}')")

        return line

    def format_output_block(self, output: Optional[str]) -> list[Text]:
        """Indent a task's terminal output so it sits under its result line."""
        return [Text(f"{OUTPUT_INDENT}{line}") for line in normalize_output_block(output)]

    def describe_run(
        self,
        project_names: Sequence[str],
        targets: Sequence[str],
        tasks: Sequence[Task],
    ) -> Text:
        """Describe what a run covers.

        Examples:
            "target build for project app"
            "targets build, test for 3 projects and 2 tasks they depend on"
        """
        targets = list(targets) or derive_targets(tasks)
        first_target = targets[0] if targets else ""

        if len(tasks) == 1:
            first_project = project_names[0] if project_names else tasks[0].target.project
            return Text(f"target {first_target} for project {first_project}")

        if len(project_names) == 1:
            project = f"project {project_names[0]}"
        else:
            project = f"{len(project_names)} projects"

        text = Text()
        if len(targets) == 1:
            text.append("target ")
            text.append(first_target, style="bold")
        else:
            text.append("targets ")
            for index, target in enumerate(targets):
                if index:
                    text.append(", ")
                text.append(target, style="bold")
        text.append(f" for {project}")

        dependent_tasks = sum(
            1
            for task in tasks
            if task.target.project not in project_names or task.target.target not in targets
        )
        if dependent_tasks > 0:
            noun = "task" if dependent_tasks == 1 else "tasks"
            verb = "it depends on" if len(project_names) == 1 else "they depend on"
            text.append(" and ")
            text.append(str(dependent_tasks), style="bold")
            text.append(f" {noun} {verb}")

        return text
