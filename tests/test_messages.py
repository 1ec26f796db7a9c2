"""Tests for the deterministic daily message."""

import pytest

from habit_lightly.core.messages import (
    DARK_MESSAGES,
    LIGHT_MESSAGES,
    daily_message,
    pick_message,
    stable_hash,
)


class TestStableHash:
    """Tests for the 32-bit rolling hash."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("", 0),
            ("a", 97),
            ("hello", 99162322),
            ("polygenelubricants", -2147483648),
        ],
    )
    def test_known_values(self, value: str, expected: int) -> None:
        assert stable_hash(value) == expected

    def test_stays_in_int32_range(self) -> None:
        h = stable_hash("a much longer user identifier::2024-01-01" * 10)
        assert -(2 ** 31) <= h < 2 ** 31

    def test_non_ascii_input(self) -> None:
        assert stable_hash("привычка") == stable_hash("привычка")
        assert stable_hash("☀️") != stable_hash("")


class TestDailyMessage:
    """Tests for message selection."""

    def test_deterministic(self) -> None:
        first = daily_message("user-42", "2024-01-01")
        assert daily_message("user-42", "2024-01-01") == first
        assert first in LIGHT_MESSAGES

    def test_index_from_hash(self) -> None:
        expected = LIGHT_MESSAGES[abs(stable_hash("user-42::2024-01-02")) % len(LIGHT_MESSAGES)]
        assert daily_message("user-42", "2024-01-02") == expected

    def test_dark_list(self) -> None:
        assert daily_message("user-42", "2024-01-01", prefers_dark=True) in DARK_MESSAGES

    def test_changes_across_days(self) -> None:
        messages = {daily_message("user-42", f"2024-01-{day:02d}") for day in range(1, 29)}
        assert len(messages) > 1

    def test_empty_list_rejected(self) -> None:
        with pytest.raises(ValueError):
            pick_message("seed", [])
