"""Pytest configuration and shared fixtures."""

import io

import pytest
from rich.console import Console

from dynarun.config import RendererConfig
from dynarun.formatters import OutputFormatter, TaskFormatter


class FakeClock:
    """Monotonic nanosecond clock that only moves when told to."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int) -> None:
        self.now += nanos


@pytest.fixture
def stream() -> io.StringIO:
    """In-memory stream standing in for the terminal."""
    return io.StringIO()


@pytest.fixture
def console(stream: io.StringIO) -> Console:
    """An 80-column terminal console without colors.

    Cursor control sequences are still emitted, so tests can count them.
    """
    return Console(
        file=stream,
        force_terminal=True,
        width=80,
        color_system=None,
        legacy_windows=False,
        _environ={},
    )


@pytest.fixture
def output(console: Console) -> OutputFormatter:
    return OutputFormatter(console=console)


@pytest.fixture
def task_formatter(output: OutputFormatter) -> TaskFormatter:
    return TaskFormatter(output)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> RendererConfig:
    """Renderer config for tests: no signal handlers, no automatic ticks."""
    return RendererConfig(frame_interval=60.0, install_signal_handlers=False)
