"""Completion report drawn when a run ends."""

from __future__ import annotations

from rich.text import Text

from ..config import RendererConfig
from ..formatters import OutputFormatter, TaskFormatter
from ..formatters.output import GRAY
from .composer import ROW_GAP, ROW_INDENT, FooterComposer
from .footer import Line
from .registry import TaskRegistry

FAILED_ITEM_INDENT = "        "


class SummaryRenderer:
    """Builds the success banner or the failure digest of a run."""

    def __init__(
        self,
        output: OutputFormatter,
        task_formatter: TaskFormatter,
        composer: FooterComposer,
        config: RendererConfig,
    ):
        self._output = output
        self._tasks = task_formatter
        self._composer = composer
        self._config = config

    def _banner(self, color: str, title: str, elapsed: str) -> Text:
        text = Text(title, style=color)
        text.append_text(self._composer.description)
        text.append(f" ({elapsed})", style="dim white")
        return self._output.apply_prefix(color, text)

    def no_projects_lines(self) -> list[Line]:
        """Neutral banner for a run without any eligible project."""
        text = Text("No projects with ")
        text.append_text(self._composer.description)
        text.append(" were run")
        return ["", self._output.apply_prefix(GRAY, text)]

    def success_lines(self, registry: TaskRegistry, elapsed: str) -> list[Line]:
        lines: list[Line] = [
            self._banner("green", "Successfully ran ", elapsed),
            *self._composer.override_rows("green"),
        ]
        if registry.total_cached > 0:
            lines.append("")
            lines.append(
                Text(
                    f"{ROW_INDENT}{self._config.cli_name} read the output from the cache instead of "
                    f"running the command for {registry.total_cached} out of {registry.total_tasks} tasks.",
                    style="dim",
                )
            )
        return lines

    def failure_lines(self, registry: TaskRegistry, elapsed: str) -> list[Line]:
        sym = self._output.symbols
        limit = self._config.max_failed_listed

        succeeded = Text(ROW_INDENT, style="dim")
        succeeded.append(sym.Tick, style="dim")
        succeeded.append(f"{ROW_GAP}{registry.total_succeeded}/{registry.total_completed} succeeded ")
        succeeded.append(f"[{registry.total_cached} read from cache]", style="dim")

        failed = Text(ROW_INDENT)
        failed.append(sym.Cross, style="red")
        failed.append(
            f"{ROW_GAP}{registry.total_failed}/{registry.total_completed} targets failed, including the following:"
        )

        lines: list[Line] = [
            self._banner("red", "Ran ", elapsed),
            *self._composer.override_rows("red"),
            "",
            succeeded,
            "",
            failed,
        ]

        for task_id in registry.failed_ids[:limit]:
            item = Text(FAILED_ITEM_INDENT)
            item.append("-", style="red")
            item.append(" ")
            item.append_text(self._tasks.format_command(task_id))
            lines.append(item)

        hidden = len(registry.failed_ids) - limit
        if hidden > 0:
            lines.append(Text(f"{FAILED_ITEM_INDENT}...and {hidden} more...", style="dim"))

        if len(registry.failed_ids) >= 2:
            lines.append("")
            lines.append(Text(f"{self._output.X_PADDING} {self._config.view_logs_hint}", style="dim"))

        return lines

    def lines(self, registry: TaskRegistry, elapsed: str) -> list[Line]:
        """Success banner when every task succeeded, otherwise the failure digest."""
        if registry.all_succeeded:
            return self.success_lines(registry, elapsed)
        return self.failure_lines(registry, elapsed)

    def divider_color(self, registry: TaskRegistry) -> str:
        return "green" if registry.all_succeeded else "red"
