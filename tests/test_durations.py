"""Tests for duration parsing."""

from __future__ import annotations

import pytest

from hookexec.core.durations import DEFAULT_TIMEOUT_SECONDS, parse_duration


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("10ms", 0.01),
        ("1.5s", 1.5),
        ("1m30s", 90.0),
        ("2h", 7200.0),
        ("250us", 0.00025),
        ("3", 3.0),
        ("0.5", 0.5),
        ("+4s", 4.0),
    ],
)
def test_parses_durations(value: str, expected: float) -> None:
    assert parse_duration(value) == pytest.approx(expected)


def test_empty_uses_default() -> None:
    assert parse_duration("") == DEFAULT_TIMEOUT_SECONDS
    assert parse_duration("   ") == DEFAULT_TIMEOUT_SECONDS


@pytest.mark.parametrize("value", ["abc", "-1s", "5 s", "10x", "s", "1s2", "ms10"])
def test_rejects_malformed(value: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(value)
