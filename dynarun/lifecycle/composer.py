"""Footer content composition.

Turns the registry and the current spinner frame into the list of footer
lines. Layout, top to bottom:

    <blank or divider>
    > RUN  Running target build for 3 projects
    <override flags>
    <blank>
       →    Executing 2/3 remaining tasks in parallel...
    <blank>
       ⠋    run app:build
       ⠋    run lib:build
    <padding rows up to the parallelism>
    <blank>
       ✔    1/1 succeeded [0 read from cache]
       ✖    0/1 failed
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.text import Text

from ..formatters import OutputFormatter, TaskFormatter
from ..utils.flags import format_flags
from .footer import Line
from .registry import TaskRegistry

ROW_INDENT = "   "
ROW_GAP = "    "
# Left padding of override rows, after the footer's own X padding
FLAGS_INDENT = "       "


class FooterComposer:
    """Builds footer lines for the current state of a run."""

    def __init__(
        self,
        output: OutputFormatter,
        task_formatter: TaskFormatter,
        description: Text,
        overrides: Optional[dict[str, Any]] = None,
        parallel: Optional[int] = None,
    ):
        """Initialize the composer.

        Args:
            output: The styled writer
            task_formatter: Formatter for task ids
            description: What the run covers ("target build for 3 projects")
            overrides: Extra invocation flags listed under the banner
            parallel: Configured parallelism, when a concrete integer
        """
        self._output = output
        self._tasks = task_formatter
        self._description = description
        self._overrides = dict(overrides or {})
        self._parallel = parallel if isinstance(parallel, int) and not isinstance(parallel, bool) else None

    @property
    def description(self) -> Text:
        return self._description

    def override_rows(self, color: str) -> list[Line]:
        """Rows listing the override flags, dimmed in ``color``."""
        if not self._overrides:
            return []
        left_padding = self._output.X_PADDING + FLAGS_INDENT
        style = f"dim {color}"
        rows: list[Line] = ["", Text(f"{left_padding}With additional flags:", style=style)]
        for flag in format_flags(self._overrides):
            rows.append(Text(f"{left_padding}  {flag}", style=style))
        return rows

    def counts_rows(self, registry: TaskRegistry) -> list[Line]:
        """Succeeded/failed tallies, once any task has finished."""
        sym = self._output.symbols
        rows: list[Line] = []

        if registry.total_succeeded > 0:
            row = Text(ROW_INDENT)
            row.append(sym.Tick, style="green")
            row.append(f"{ROW_GAP}{registry.total_succeeded}/{registry.total_completed} succeeded ")
            row.append(f"[{registry.total_cached} read from cache]", style="dim")
            rows.append(row)

        if registry.total_failed > 0:
            row = Text(ROW_INDENT)
            row.append(sym.Cross, style="red")
            row.append(f"{ROW_GAP}{registry.total_failed}/{registry.total_completed} failed")
            rows.append(row)

        return rows

    def running_rows(self, registry: TaskRegistry, frame_index: int) -> list[Line]:
        """Executing header, one spinner row per running task, and padding."""
        running = registry.running_rows
        if not running:
            return []

        remaining = registry.remaining
        noun = "task" if remaining == 1 else "tasks"
        suffix = " in parallel" if len(running) > 1 else ""

        header = Text(ROW_INDENT, style="dim")
        header.append(self._output.symbols.ArrowRight, style="cyan")
        header.append(f"{ROW_GAP}Executing {len(running)}/{remaining} remaining {noun}{suffix}...")

        rows: list[Line] = [header, ""]
        frame = self._output.symbols.frame(frame_index)
        for task_row in running:
            row = Text(ROW_INDENT)
            row.append(frame, style="dim cyan")
            row.append(ROW_GAP)
            row.append_text(self._tasks.format_command(task_row.task_id))
            rows.append(row)

        # Reserve a row per idle parallel slot while at least that many tasks remain
        if (
            registry.total_completed != registry.total_tasks
            and self._parallel is not None
            and len(running) < self._parallel
            and remaining >= self._parallel
        ):
            rows.extend("" for _ in range(len(running), self._parallel))

        return rows

    def task_rows(self, registry: TaskRegistry, frame_index: int) -> list[Line]:
        rows = self.running_rows(registry, frame_index)
        counts = self.counts_rows(registry)
        if counts:
            rows.append("")
            rows.extend(counts)
        return rows

    def compose(
        self,
        registry: TaskRegistry,
        frame_index: int,
        lead_rows: Sequence[Line] = ("",),
    ) -> list[Line]:
        """Build the footer.

        Args:
            registry: Current task state
            frame_index: Current spinner frame
            lead_rows: Rows above the banner (blank line or divider)

        Returns:
            The footer lines, or an empty list when there is nothing to report
        """
        rows = self.task_rows(registry, frame_index)
        if not rows:
            return []

        title = Text("Running ", style="cyan")
        title.append_text(self._description)
        return [
            *lead_rows,
            self._output.apply_prefix("cyan", title),
            *self.override_rows("cyan"),
            "",
            *rows,
        ]
