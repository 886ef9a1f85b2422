"""Formatting of override flags shown under the run banner."""

import json
from typing import Any

# Key under which bare positional values are stored
POSITIONAL_KEY = "_"


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_value(value: Any) -> str:
    """Format a flag value: lists as [a,b], mappings and None as JSON."""
    if isinstance(value, (list, tuple)):
        return f"[{','.join(_format_scalar(item) for item in value)}]"
    if value is None or isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return _format_scalar(value)


def format_flag(flag: str, value: Any) -> str:
    """Format a single override as it would be typed on the command line.

    Examples:
        format_flag("parallel", 3)         -> "--parallel=3"
        format_flag("projects", ["a", "b"]) -> "--projects=[a,b]"
        format_flag("_", ["x", "y"])        -> "x y"
    """
    if flag == POSITIONAL_KEY:
        if isinstance(value, (list, tuple)):
            return " ".join(_format_scalar(item) for item in value)
        return _format_scalar(value)
    return f"--{flag}={format_value(value)}"


def format_flags(overrides: dict[str, Any]) -> list[str]:
    """Format all overrides in insertion order."""
    return [format_flag(flag, value) for flag, value in overrides.items()]
