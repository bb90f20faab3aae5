from datetime import datetime

import pytest

from src.core.schedule.formatting import (
    format_time_for_display,
    format_time_remaining,
    format_time_since_start,
)


class TestFormatTimeRemaining:
    """Tests for the tiered countdown label."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0s"),
            (45, "45s"),
            (59, "59s"),
            (60, "1:00"),
            (90, "1:30"),
            (3599, "59:59"),
            (3600, "1h 0m 0s"),
            (3661, "1h 1m 1s"),
            (5 * 3600 + 59 * 60 + 59, "5h 59m 59s"),
            (6 * 3600, "6h 0m"),
            (8 * 3600 + 30 * 60 + 15, "8h 30m"),
            (86399, "23h 59m"),
            (86400, "1d 0h 0m"),
            (25 * 3600, "1d 1h 0m"),
            (2 * 86400 + 5 * 3600 + 30 * 60 + 10, "2d 5h 30m"),
        ],
    )
    def test_tiers(self, seconds, expected):
        """Verify each magnitude tier renders its own format."""
        assert format_time_remaining(seconds) == expected

    def test_negative_is_clamped(self):
        """Verify negative input is treated as zero."""
        assert format_time_remaining(-5) == "0s"

    def test_fraction_is_floored(self):
        """Verify fractional seconds never round up."""
        assert format_time_remaining(59.9) == "59s"


class TestFormatTimeSinceStart:
    """Tests for the elapsed label of an ongoing crawl."""

    def test_minutes_only(self):
        assert format_time_since_start(5 * 60 + 59) == "5m in"

    def test_zero(self):
        assert format_time_since_start(0) == "0m in"

    def test_hours_and_minutes(self):
        assert format_time_since_start(3600 + 5 * 60) == "1h 5m in"


class TestFormatTimeForDisplay:
    def test_afternoon(self):
        assert format_time_for_display(datetime(2025, 6, 1, 18, 30)) == "Sun, Jun 1, 06:30 PM"

    def test_morning(self):
        assert format_time_for_display(datetime(2025, 10, 18, 9, 5)) == "Sat, Oct 18, 09:05 AM"
