"""Command-line interface for dynarun."""

import concurrent.futures
import logging
import random
import sys
import threading
import time
from typing import Optional

from .cli_builder import build_arg_parser
from .config import RendererConfig
from .lifecycle import DynamicRunLifeCycle
from .models import CacheStatus, RunArgs, Task, TaskResult, TaskStatus, TaskTarget

logger = logging.getLogger(__name__)


def build_demo_tasks(project_count: int, targets: list[str]) -> list[Task]:
    """One task per project and target, plus a shared dependency."""
    tasks = [
        Task(id=f"app-{index}:{target}", target=TaskTarget(project=f"app-{index}", target=target))
        for index in range(1, project_count + 1)
        for target in targets
    ]
    tasks.append(Task(id="shared:build", target=TaskTarget(project="shared", target="build")))
    return tasks


class CLI:
    """Command-line interface for dynarun."""

    def __init__(self):
        self.parser = build_arg_parser()

    def run(self, argv: Optional[list[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code
        """
        args = self.parser.parse_args(argv)
        self._configure_logging(args.log_file)

        if args.command == "demo":
            return self._run_demo(args)
        return 2

    def _configure_logging(self, log_file: Optional[str]) -> None:
        # The footer owns the terminal: log to a file or not at all
        if not log_file:
            return
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    def _run_demo(self, args) -> int:
        targets = args.targets or ["build"]
        tasks = build_demo_tasks(args.projects, targets)
        project_names = [f"app-{index}" for index in range(1, args.projects + 1)]
        failing = set(args.fail)
        cached = set(args.cached)
        rng = random.Random(args.seed)
        durations = {task.id: rng.uniform(0.2, max(0.2, args.max_duration)) for task in tasks}

        options = {"verbose": args.verbose}
        if args.no_color:
            options["no_color"] = True
        config = RendererConfig.from_environment(**options)
        overrides = {"parallel": args.parallel}

        life_cycle = DynamicRunLifeCycle(
            project_names,
            tasks,
            args=RunArgs(targets=targets, parallel=args.parallel),
            overrides=overrides,
            config=config,
        )

        def execute(task: Task) -> TaskStatus:
            if task.id in cached:
                status = TaskStatus.LOCAL_CACHE
                life_cycle.print_task_terminal_output(task, CacheStatus.LOCAL_CACHE, f"> {task.id}\n\ncached output\n")
            else:
                life_cycle.start_tasks([task], group_id=threading.get_ident())
                time.sleep(durations[task.id])
                status = TaskStatus.FAILURE if task.id in failing else TaskStatus.SUCCESS
                output = f"> {task.id}\n\n" + ("Error: simulated failure\n" if status is TaskStatus.FAILURE else "done\n")
                life_cycle.print_task_terminal_output(task, CacheStatus.NOT_CACHED, output)
            life_cycle.end_tasks([TaskResult(task=task, status=status, code=1 if status is TaskStatus.FAILURE else 0)])
            return status

        with life_cycle:
            life_cycle.start_command()
            with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, args.parallel)) as executor:
                statuses = list(executor.map(execute, tasks))
            life_cycle.end_command()
            life_cycle.wait_until_rendered()

        logger.debug("Demo finished with statuses %s", [status.value for status in statuses])
        return 1 if TaskStatus.FAILURE in statuses else 0


def main() -> int:
    """Main entry point."""
    cli = CLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
