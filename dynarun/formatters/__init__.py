"""Formatters package for dynarun output formatting.

The main entry point is `OutputFormatter`, the styled writer that owns the
Rich console. `TaskFormatter` builds task lines on top of it.

Usage:
    output = OutputFormatter(no_color=False)
    tasks = TaskFormatter(output)
    output.write_line(tasks.format_result("app:build", TaskStatus.SUCCESS, "1s"))
"""

from .output import OutputFormatter
from .symbols import Symbol, Symbols, SymbolsFormatter
from .task import TaskFormatter

__all__ = [
    "OutputFormatter",
    "Symbol",
    "Symbols",
    "SymbolsFormatter",
    "TaskFormatter",
]
