"""Tests for glyphs, the styled writer and task formatting."""

from unittest.mock import patch

import pytest
from rich.text import Text

from dynarun.formatters import OutputFormatter, SymbolsFormatter, TaskFormatter
from dynarun.formatters.task import derive_targets, normalize_output_block
from dynarun.models import Task, TaskStatus, TaskTarget


def make_tasks(ids: list[str]) -> list[Task]:
    """Create tasks from "project:target" ids."""
    tasks = []
    for task_id in ids:
        project, target = task_id.split(":", 1)
        tasks.append(Task(id=task_id, target=TaskTarget(project=project, target=target)))
    return tasks


class TestSymbolsFormatter:
    """Tests for Unicode/ASCII glyph selection."""

    def test_unicode_glyphs(self):
        """Test glyphs on a UTF-8 stream."""
        with patch("dynarun.formatters.symbols.platform.system", return_value="Linux"):
            symbols = SymbolsFormatter(encoding="utf-8")
            assert symbols.Tick == "✔"
            assert symbols.Cross == "✖"
            assert symbols.Rule == "—"

    def test_ascii_fallback(self):
        """Test that forced ASCII and non-Unicode encodings fall back."""
        assert SymbolsFormatter(force_ascii=True).Tick == "√"
        with patch("dynarun.formatters.symbols.platform.system", return_value="Linux"):
            assert SymbolsFormatter(encoding="latin-1").ArrowRight == "->"

    def test_windows_uses_ascii(self):
        """Test that Windows consoles get ASCII glyphs."""
        with patch("dynarun.formatters.symbols.platform.system", return_value="Windows"):
            assert SymbolsFormatter(encoding="utf-8").Cross == "×"

    def test_spinner_frames_wrap(self):
        """Test that frame indexes wrap around."""
        symbols = SymbolsFormatter(force_ascii=True)
        assert symbols.frame_count == 10
        assert symbols.frame(0) == "-"
        assert symbols.frame(10) == symbols.frame(0)
        assert symbols.frame(13) == "/"


class TestOutputFormatter:
    """Tests for the styled writer."""

    def test_apply_prefix(self, output):
        """Test the inverse banner prefix."""
        assert output.apply_prefix("cyan", "Running").plain == ">  RUN   Running"

    def test_vertical_separator_spans_width(self, output):
        """Test that the rule fills the width inside the padding."""
        rule = output.vertical_separator("red")
        assert rule.plain == "—" * 78
        assert rule.style == "dim red"

    def test_width_is_read_live(self, output, console):
        """Test that a resize is picked up on the next call."""
        console.width = 40
        assert output.width == 40
        assert len(output.vertical_separator().plain) == 38

    def test_write_line_is_padded(self, output, stream):
        """Test that footer lines get the X padding."""
        output.write_line("hello")
        assert stream.getvalue() == " hello\n"

    def test_write_line_never_wraps(self, output, stream):
        """Test that long footer lines stay on one row."""
        output.write_line("x" * 200)
        assert stream.getvalue().count("\n") == 1

    def test_write_line_folds_newlines(self, output, stream):
        """Test that a footer line with a newline stays on one row."""
        output.write_line(Text("line1\nline2", style="dim"))
        assert stream.getvalue() == " line1 line2\n"

    def test_no_color_applies_to_given_console(self, console):
        """Test that no_color reaches a console passed in by the caller."""
        assert not console.no_color
        OutputFormatter(no_color=True, console=console)
        assert console.no_color

    def test_erase_lines(self, output, stream):
        """Test that each erased line moves up and clears it."""
        output.erase_lines(3)
        value = stream.getvalue()
        assert value.count("\x1b[1A") == 3
        assert value.count("\x1b[2K") == 3

    def test_erase_nothing(self, output, stream):
        """Test that erasing zero lines writes nothing."""
        output.erase_lines(0)
        assert stream.getvalue() == ""

    def test_batch_flushes_once(self, output, stream):
        """Test that writes inside a batch reach the stream together."""
        with output.batch():
            output.write_line("first")
            assert stream.getvalue() == ""
            output.write_line("second")
        assert stream.getvalue() == " first\n second\n"


class TestNormalizeOutputBlock:
    """Tests for tidying task terminal output."""

    def test_trims_leading_and_collapses_trailing(self):
        """Test that leading blanks go and trailing blanks collapse to one."""
        assert normalize_output_block("\n\n  hello\nworld\n\n\n") == ["hello", "world", ""]

    def test_single_trailing_newline_kept(self):
        """Test that one trailing blank line stays."""
        assert normalize_output_block("done\n") == ["done", ""]

    def test_missing_output(self):
        """Test that no output gives one empty line."""
        assert normalize_output_block(None) == [""]


class TestTaskFormatter:
    """Tests for completion lines and run descriptions."""

    def test_success_with_duration(self, task_formatter):
        """Test a plain success line."""
        line = task_formatter.format_result("app:build", TaskStatus.SUCCESS, "1s")
        assert line.plain == "   ✔  run app:build (1s)"

    def test_success_without_duration(self, task_formatter):
        """Test that the duration is optional."""
        assert task_formatter.format_result("app:build", TaskStatus.SUCCESS).plain == "   ✔  run app:build"

    def test_failure(self, task_formatter):
        """Test a failure line."""
        line = task_formatter.format_result("app:build", TaskStatus.FAILURE)
        assert line.plain == "   ✖  run app:build"

    @pytest.mark.parametrize(
        "status,annotation",
        [
            (TaskStatus.LOCAL_CACHE, "[local cache]"),
            (TaskStatus.REMOTE_CACHE, "[remote cache]"),
            (TaskStatus.LOCAL_CACHE_KEPT_EXISTING, "[existing outputs match the cache, left as is]"),
        ],
    )
    def test_cached(self, task_formatter, status, annotation):
        """Test cache annotations."""
        line = task_formatter.format_result("app:build", status)
        assert line.plain == f"   ✔  run app:build  {annotation}"

    def test_unfinished_status_rejected(self, task_formatter):
        """Test that a running task has no completion line."""
        with pytest.raises(ValueError, match="has not finished"):
            task_formatter.format_result("app:build", TaskStatus.RUNNING)

    def test_format_output_block(self, task_formatter):
        """Test that output lines are indented."""
        block = task_formatter.format_output_block("Error: boom\n")
        assert [line.plain for line in block] == ["      Error: boom", "      "]

    def test_custom_command_prefix(self, output):
        """Test that the command prefix is configurable."""
        formatter = TaskFormatter(output, command_prefix="nx run")
        assert formatter.format_command("app:build").plain == "nx run app:build"

    def test_describe_single_task(self, task_formatter):
        """Test the description of a one-task run."""
        tasks = make_tasks(["app:build"])
        assert task_formatter.describe_run(["app"], ["build"], tasks).plain == "target build for project app"
        assert task_formatter.describe_run([], [], tasks).plain == "target build for project app"

    def test_describe_many_projects(self, task_formatter):
        """Test the description of a run over several projects."""
        tasks = make_tasks(["app:build", "lib:build", "util:build"])
        text = task_formatter.describe_run(["app", "lib", "util"], [], tasks)
        assert text.plain == "target build for 3 projects"

    def test_describe_with_dependency(self, task_formatter):
        """Test that tasks outside the request are counted as dependencies."""
        tasks = make_tasks(["app:build", "app:test", "lib:build"])
        text = task_formatter.describe_run(["app"], ["build", "test"], tasks)
        assert text.plain == "targets build, test for project app and 1 task it depends on"

    def test_describe_dependencies_of_many_projects(self, task_formatter):
        """Test the plural dependency wording."""
        tasks = make_tasks(["app:build", "web:build", "lib:build", "util:build"])
        text = task_formatter.describe_run(["app", "web"], ["build"], tasks)
        assert text.plain == "target build for 2 projects and 2 tasks they depend on"

    def test_derive_targets(self):
        """Test that targets come from the tasks without duplicates."""
        tasks = make_tasks(["app:build", "app:test", "lib:build"])
        assert derive_targets(tasks) == ["build", "test"]


def test_text_lines_accept_rich_text(output, stream):
    """Test that Text and plain strings are written alike."""
    output.write_scrollback(Text("styled", style="green"))
    output.write_scrollback("plain")
    assert stream.getvalue() == " styled\n plain\n"
