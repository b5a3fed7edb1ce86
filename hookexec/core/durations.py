"""Duration string parsing for client timeouts."""

from __future__ import annotations

import re

DEFAULT_TIMEOUT_SECONDS = 30.0

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_NUMBER_PATTERN = re.compile(r"^\d+(?:\.\d*)?$|^\.\d+$")
_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float | None:
    """Parse a duration string into seconds.

    Accepts Go-style durations ("10ms", "1.5s", "1m30s") and bare numbers,
    which are read as seconds.

    Args:
        value: Duration string

    Returns:
        Seconds as float, DEFAULT_TIMEOUT_SECONDS for an empty string, or
        None when the duration is zero (no timeout)

    Raises:
        ValueError: If the string is malformed or negative
    """
    text = value.strip()
    if not text:
        return DEFAULT_TIMEOUT_SECONDS

    if text.startswith("-"):
        raise ValueError(f"Negative duration: {value!r}")
    if text.startswith("+"):
        text = text[1:]

    if _NUMBER_PATTERN.match(text):
        seconds = float(text)
    else:
        seconds = 0.0
        position = 0
        for match in _COMPONENT_PATTERN.finditer(text):
            if match.start() != position:
                break
            number, unit = match.groups()
            seconds += float(number) * _UNIT_SECONDS[unit]
            position = match.end()
        if position == 0 or position != len(text):
            raise ValueError(f"Invalid duration: {value!r}")

    return seconds or None
