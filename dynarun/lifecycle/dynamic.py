"""Dynamic run lifecycle: live terminal output for a run of many tasks.

Previous output is rewritten in place as new output arrives, so this
lifecycle is meant for a developer's interactive terminal. CI runs should
use a static, append-only reporter instead.

Every event handler (a lifecycle call from the executor or a clock tick)
goes through one non-reentrant lock and performs its whole

    erase footer -> write scrollback -> draw footer

sequence inside one console buffer, so the terminal never sees a
half-finished update.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional, Sequence, Union

from rich.console import Console

from ..config import RendererConfig
from ..errors import RunFinishedError
from ..formatters import OutputFormatter, TaskFormatter
from ..models import CacheStatus, RunArgs, Task, TaskResult, TaskStatus
from ..utils.duration import format_duration
from .clock import AnimationClock
from .composer import FooterComposer
from .footer import FooterRegion, Line
from .life_cycle import RunLifeCycle
from .registry import TaskRegistry
from .session import TerminalSession
from .summary import SummaryRenderer

logger = logging.getLogger(__name__)


class DynamicRunLifeCycle(RunLifeCycle):
    """Live footer with a spinner per running task and scrollback per finished task.

    Attributes:
        registry: Task rows and counters of the run
        footer: The pinned footer region
        clock: Spinner animation clock
        render_is_done: Set once rendering has fully settled (summary drawn,
            timer stopped, cursor restored)
    """

    def __init__(
        self,
        project_names: Sequence[str],
        tasks: Sequence[Task],
        args: Optional[RunArgs] = None,
        overrides: Optional[dict[str, Any]] = None,
        config: Optional[RendererConfig] = None,
        console: Optional[Console] = None,
        clock: Callable[[], int] = time.monotonic_ns,
    ):
        """Initialize the lifecycle and take over the terminal.

        Args:
            project_names: Projects the run was asked to cover
            tasks: Every task of the run, in declaration order
            args: Targets, configuration and parallelism of the run
            overrides: Extra invocation flags; ``verbose: True`` enables
                verbose output
            config: Renderer options (derived from the environment if None)
            console: Console to render to (stdout if None)
            clock: Monotonic nanosecond clock
        """
        args = args or RunArgs()
        self.config = config or RendererConfig.from_environment()
        self.overrides = dict(overrides or {})
        self.verbose = self.config.verbose or self.overrides.get("verbose") is True

        self._project_names = list(project_names)
        self._now = clock
        self._started_at = clock()

        self._output = OutputFormatter(
            no_color=self.config.no_color,
            console=console,
            cli_name=self.config.cli_name,
        )
        self._task_formatter = TaskFormatter(self._output, self.config.command_prefix)

        self.registry = TaskRegistry(clock=clock)
        self.registry.register_all(tasks)

        description = self._task_formatter.describe_run(self._project_names, args.targets, tasks)
        self._composer = FooterComposer(
            self._output,
            self._task_formatter,
            description,
            overrides=self.overrides,
            parallel=args.parallel,
        )
        self._summary = SummaryRenderer(self._output, self._task_formatter, self._composer, self.config)

        self.footer = FooterRegion(self._output)
        self.clock = AnimationClock(
            self._output.symbols.frame_count,
            on_tick=self._on_tick,
            interval=self.config.frame_interval,
        )
        self._session = TerminalSession(
            self._output,
            on_dispose=self.clock.stop,
            install_signal_handlers=self.config.install_signal_handlers,
        )

        self._lock = threading.Lock()
        self._finished = False
        self.render_is_done = threading.Event()

        self._session.open()

    @property
    def output(self) -> OutputFormatter:
        return self._output

    @property
    def finished(self) -> bool:
        return self._finished

    # =========================================================================
    # RunLifeCycle Interface Implementation
    # =========================================================================

    def start_command(self) -> None:
        """Draw the idle footer, or resolve at once when no project is run."""
        with self._lock:
            self._ensure_open()
            if not self._project_names:
                with self._output.batch():
                    self.footer.write_report(self._summary.no_projects_lines())
                self._resolve()
                return
            self.footer.redraw([])

    def start_tasks(self, tasks: Sequence[Task], group_id: Optional[Any] = None) -> None:
        """Mark tasks as running and start the spinner."""
        with self._lock:
            self._ensure_open()
            if group_id is not None:
                logger.debug("Starting %d task(s) of group %s", len(tasks), group_id)
            started = self.registry.mark_running(tasks)
            if started:
                self.clock.start()
                self._refresh()

    def print_task_terminal_output(
        self,
        task: Task,
        cache_status: Union[CacheStatus, str],
        output: str,
    ) -> None:
        """Buffer a task's terminal output until it finishes."""
        cache_status = CacheStatus(cache_status)
        with self._lock:
            self._ensure_open()
            logger.debug("Buffered output of %s (%s)", task.id, cache_status.value)
            self.registry.record_output(task.id, output)

    def end_tasks(self, results: Sequence[TaskResult], group_id: Optional[Any] = None) -> None:
        """Record each result and print its completion line, in order."""
        with self._lock:
            self._ensure_open()
            if group_id is not None:
                logger.debug("Ending %d task(s) of group %s", len(results), group_id)
            for result in results:
                task_id = result.task.id
                if result.terminal_output is not None and task_id not in self.registry.pending_outputs:
                    self.registry.record_output(task_id, result.terminal_output)
                self.registry.complete(task_id, result.status)
                self._print_task_result(task_id, result.status)

    def end_command(self) -> None:
        """Stop the spinner and replace the footer with the run summary."""
        # Stop before taking the lock: an in-flight tick may be waiting for it
        self.clock.stop()
        with self._lock:
            if self._finished:
                logger.debug("Run already resolved, ignoring end_command")
                return

            elapsed = format_duration(max(0, self._now() - self._started_at))
            color = self._summary.divider_color(self.registry)
            with self._output.batch():
                self.footer.write_report([
                    *self.footer.divider_rows(color),
                    *self._summary.lines(self.registry, elapsed),
                ])
            self._resolve()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _compose(self) -> list[Line]:
        lead_rows = self.footer.divider_rows("cyan") or [""]
        return self._composer.compose(self.registry, self.clock.frame_index, lead_rows)

    def _refresh(self) -> None:
        """Recompute the footer and redraw it. Caller holds the lock."""
        self.footer.redraw(self._compose())

    def _on_tick(self) -> None:
        with self._lock:
            if self._finished:
                return
            self._refresh()

    def _print_task_result(self, task_id: str, status: TaskStatus) -> None:
        lines: list[Line] = []
        # Vertical breathing room before the very first output
        if not self.footer.has_emitted_scrollback:
            lines.append("")

        duration = None
        if status is TaskStatus.SUCCESS:
            elapsed = self.registry.elapsed_ns(task_id)
            if elapsed is not None:
                duration = format_duration(elapsed)
        elif status is TaskStatus.FAILURE:
            lines.append("")

        lines.append(self._task_formatter.format_result(task_id, status, duration))

        terminal_output = self.registry.consume_output(task_id)
        if self.verbose or status is TaskStatus.FAILURE:
            lines.extend(self._task_formatter.format_output_block(terminal_output))

        with self._output.batch():
            self.footer.erase()
            self.footer.write_scrollback(lines)
            self.footer.render(self._compose())

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _ensure_open(self) -> None:
        if self._finished:
            raise RunFinishedError("The run has already finished rendering")

    def _resolve(self) -> None:
        self._finished = True
        self.clock.stop()
        self._session.dispose()
        self.render_is_done.set()

    def wait_until_rendered(self, timeout: Optional[float] = None) -> bool:
        """Block until rendering has settled. Returns False on timeout."""
        return self.render_is_done.wait(timeout)

    def close(self) -> None:
        """Abandon the run: stop the spinner and restore the terminal."""
        self.clock.stop()
        with self._lock:
            if not self._finished:
                self._resolve()

    def __enter__(self) -> "DynamicRunLifeCycle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_run_many_dynamic_output_renderer(
    project_names: Sequence[str],
    tasks: Sequence[Task],
    args: Optional[RunArgs] = None,
    overrides: Optional[dict[str, Any]] = None,
    config: Optional[RendererConfig] = None,
    console: Optional[Console] = None,
) -> tuple[DynamicRunLifeCycle, threading.Event]:
    """Create a dynamic lifecycle for a run of many tasks.

    Returns:
        The lifecycle to drive, and the event that is set once rendering is done
    """
    life_cycle = DynamicRunLifeCycle(
        project_names,
        tasks,
        args=args,
        overrides=overrides,
        config=config,
        console=console,
    )
    return life_cycle, life_cycle.render_is_done
