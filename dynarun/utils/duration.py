"""Human-readable formatting of elapsed time.

Elapsed time is given either as an integer number of nanoseconds or as a
``(seconds, nanoseconds)`` pair, such as the difference of two
``divmod(time.monotonic_ns(), 10**9)`` samples.

Examples:
    format_duration(250_000_000)                   -> "250ms"
    format_duration(1_300_000_000)                 -> "1s"
    format_duration(1_300_000_000, "ms")           -> "1s 300ms"
    format_duration((61, 500_000_000), "s")        -> "1m 2s"
    format_duration(1_250_000_000, 2)              -> "1.25s"
"""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence, Union

NANOS_PER_SECOND = 1_000_000_000

# Units from largest to smallest, with their size in nanoseconds
SCALE: tuple[tuple[str, int], ...] = (
    ("w", 604_800 * NANOS_PER_SECOND),
    ("d", 86_400 * NANOS_PER_SECOND),
    ("h", 3_600 * NANOS_PER_SECOND),
    ("m", 60 * NANOS_PER_SECOND),
    ("s", NANOS_PER_SECOND),
    ("ms", 1_000_000),
    ("μs", 1_000),
    ("ns", 1),
)

UNIT_PATTERNS: dict[str, re.Pattern[str]] = {
    "w": re.compile(r"^(w((ee)?k)?s?)$"),
    "d": re.compile(r"^(d(ay)?s?)$"),
    "h": re.compile(r"^(h((ou)?r)?s?)$"),
    "m": re.compile(r"^(min(ute)?s?|m)$"),
    "s": re.compile(r"^((sec(ond)?)s?|s)$"),
    "ms": re.compile(r"^(milli(second)?s?|ms)$"),
    "μs": re.compile(r"^(micro(second)?s?|μs)$"),
    "ns": re.compile(r"^(nano(second)?s?|ns?)$"),
}

Elapsed = Union[int, Sequence[int]]


def _as_whole_number(value: object, what: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected {what} as a whole number, got a boolean")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise TypeError(f"expected {what} as a non-negative whole number, got {value!r}")
    return value


def to_nanoseconds(time: Elapsed) -> int:
    """Normalise an elapsed time to integer nanoseconds.

    Raises:
        TypeError: If the value is not a non-negative number of nanoseconds
            or a (seconds, nanoseconds) pair
    """
    if isinstance(time, (list, tuple)):
        if len(time) != 2:
            raise TypeError(f"expected a (seconds, nanoseconds) pair, got {len(time)} values")
        seconds = _as_whole_number(time[0], "seconds")
        nanos = _as_whole_number(time[1], "nanoseconds")
        return seconds * NANOS_PER_SECOND + nanos
    if isinstance(time, (int, float)):
        return _as_whole_number(time, "nanoseconds")
    raise TypeError(f"expected an array or number in nanoseconds, got {type(time).__name__}")


def _round(value: float, digits: Optional[int]) -> float:
    magnitude = abs(value)
    if digits is not None:
        return round(magnitude, digits)
    return math.floor(magnitude + 0.5)


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _unit_for(name: str) -> Optional[str]:
    for unit, pattern in UNIT_PATTERNS.items():
        if pattern.match(name):
            return unit
    return None


def format_duration(
    time: Elapsed,
    smallest: Optional[Union[str, int]] = None,
    digits: Optional[int] = None,
) -> str:
    """Format elapsed time as a short human string.

    Without ``smallest`` only the largest non-zero unit is shown, rounded.
    With ``smallest`` the time is broken down into whole units from the
    largest down to ``smallest``, and the last one is rounded.

    Args:
        time: Nanoseconds, or a (seconds, nanoseconds) pair
        smallest: Smallest unit to show ("ms", "seconds", ...). A number is
            taken as ``digits``
        digits: Decimal places for the rounded unit

    Returns:
        The formatted duration, e.g. "250ms" or "1m 2s"

    Raises:
        TypeError: If ``time`` is malformed
        ValueError: If ``smallest`` names no known unit
    """
    remaining = to_nanoseconds(time)

    if smallest is not None and re.fullmatch(r"[0-9]+", str(smallest)):
        digits = int(smallest)
        smallest = None

    smallest_unit = None
    if smallest is not None:
        smallest_unit = _unit_for(str(smallest))
        if smallest_unit is None:
            raise ValueError(f"Unknown time unit '{smallest}'")

    if remaining == 0 and smallest_unit is None:
        return "0ns"

    parts: list[str] = []
    prev_step: Optional[int] = None

    for unit, step in SCALE:
        amount = remaining / step

        if unit == smallest_unit:
            amount = _round(amount, digits)
            # "1s 999.6ms" must not round up to "1s 1000ms"
            if prev_step is not None and amount == prev_step / step:
                amount -= 1
            parts.append(f"{_format_number(amount)}{unit}")
            return " ".join(parts)

        if amount < 1:
            continue

        if smallest_unit is None:
            return f"{_format_number(_round(amount, digits))}{unit}"

        prev_step = step
        whole = math.floor(amount)
        remaining -= whole * step
        parts.append(f"{whole}{unit}")

    return " ".join(parts)
