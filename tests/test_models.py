"""Tests for task models and statuses."""

import pytest

from dynarun.models import Task, TaskResult, TaskStatus, TaskTarget


def make_task(task_id: str) -> Task:
    project, target = task_id.split(":", 1)
    return Task(id=task_id, target=TaskTarget(project=project, target=target))


class TestTaskStatus:
    """Tests for TaskStatus parsing and classification."""

    def test_parse_wire_values(self):
        """Test that wire values map to statuses."""
        assert TaskStatus.parse("local-cache") is TaskStatus.LOCAL_CACHE
        assert TaskStatus.parse("local-cache-kept-existing") is TaskStatus.LOCAL_CACHE_KEPT_EXISTING
        assert TaskStatus.parse(TaskStatus.FAILURE) is TaskStatus.FAILURE

    def test_parse_unknown(self):
        """Test that unknown values raise ValueError listing the known ones."""
        with pytest.raises(ValueError, match="remote-cache"):
            TaskStatus.parse("skipped")

    def test_terminal_statuses(self):
        """Test which statuses end a task."""
        assert not TaskStatus.PENDING.is_terminal
        assert not TaskStatus.RUNNING.is_terminal
        assert all(status.is_terminal for status in TaskStatus if status.is_cached)
        assert TaskStatus.FAILURE.is_terminal

    def test_cached_counts_as_success(self):
        """Test that cache hits are successes."""
        assert TaskStatus.REMOTE_CACHE.is_success
        assert TaskStatus.SUCCESS.is_success
        assert not TaskStatus.SUCCESS.is_cached
        assert not TaskStatus.FAILURE.is_success


class TestTask:
    """Tests for Task identity."""

    def test_str_is_id(self):
        """Test that a task prints as its id."""
        assert str(make_task("app:build")) == "app:build"

    def test_equality_ignores_overrides(self):
        """Test that overrides do not affect equality."""
        first = Task(id="app:build", target=TaskTarget("app", "build"), overrides={"a": 1})
        second = Task(id="app:build", target=TaskTarget("app", "build"))
        assert first == second


class TestTaskResult:
    """Tests for TaskResult validation."""

    def test_status_string_is_parsed(self):
        """Test that a wire status is converted to the enum."""
        result = TaskResult(task=make_task("app:build"), status="remote-cache")
        assert result.status is TaskStatus.REMOTE_CACHE

    def test_non_terminal_status_rejected(self):
        """Test that a result cannot carry a running status."""
        with pytest.raises(ValueError, match="non-terminal"):
            TaskResult(task=make_task("app:build"), status=TaskStatus.RUNNING)
