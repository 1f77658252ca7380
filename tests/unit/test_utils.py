"""Tests for elapsed-time formatting."""

import pytest

from lessonscribe.core.utils import format_time


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0:00"),
        (5, "0:05"),
        (59, "0:59"),
        (60, "1:00"),
        (61, "1:01"),
        (605, "10:05"),
        (3600, "60:00"),
        (7325, "122:05"),
    ],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_matches_minutes_and_padded_seconds_for_all_small_durations():
    for d in range(0, 2 * 3600, 7):
        assert format_time(d) == f"{d // 60}:{d % 60:02d}"


def test_negative_rejected():
    with pytest.raises(ValueError, match="negative"):
        format_time(-1)
