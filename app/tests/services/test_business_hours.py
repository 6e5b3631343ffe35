import pytest
from datetime import datetime, time
from app.utils.business_hours import is_business_open, to_24_hour

WEEKDAY_HOURS = [
    "Monday: 9:00 AM - 5:00 PM",
    "Tuesday: 9:00 AM - 5:00 PM",
    "Wednesday: 9:00 AM - 5:00 PM",
    "Thursday: 9:00 AM - 5:00 PM",
    "Friday: 10:00 PM - 2:00 AM",
    "Saturday: 11:00 AM - 11:00 PM",
    "Sunday: Closed",
]

# 2024-01-01 was a Monday
MONDAY = datetime(2024, 1, 1)
FRIDAY = datetime(2024, 1, 5)
SATURDAY = datetime(2024, 1, 6)
SUNDAY = datetime(2024, 1, 7)


class TestTo24Hour:

    @pytest.mark.parametrize(
        "hours,minutes,period,expected",
        [
            (12, 0, "AM", time(0, 0)),
            (12, 30, "PM", time(12, 30)),
            (1, 0, "pm", time(13, 0)),
            (9, 15, "AM", time(9, 15)),
            (11, 59, "PM", time(23, 59)),
        ]
    )
    def test_to_24_hour(self, hours, minutes, period, expected):
        assert to_24_hour(hours, minutes, period) == expected


class TestIsBusinessOpen:

    @pytest.mark.parametrize(
        "now,expected",
        [
            (MONDAY.replace(hour=8, minute=59), False),
            (MONDAY.replace(hour=9, minute=0), True),
            (MONDAY.replace(hour=12, minute=30), True),
            (MONDAY.replace(hour=17, minute=0), True),
            (MONDAY.replace(hour=17, minute=1), False),
        ]
    )
    def test_same_day_range_bounds_are_inclusive(self, mock_current_time, now, expected):
        mock_current_time.return_value = now
        assert is_business_open(WEEKDAY_HOURS) is expected

    def test_overnight_range_open_late_evening(self, mock_current_time):
        mock_current_time.return_value = FRIDAY.replace(hour=23, minute=30)
        assert is_business_open(WEEKDAY_HOURS) is True

    def test_overnight_range_from_yesterday_covers_early_hours(self, mock_current_time):
        mock_current_time.return_value = SATURDAY.replace(hour=1, minute=0)
        assert is_business_open(WEEKDAY_HOURS) is True

    def test_overnight_range_closed_after_closing(self, mock_current_time):
        mock_current_time.return_value = SATURDAY.replace(hour=3, minute=0)
        assert is_business_open(WEEKDAY_HOURS) is False

    def test_overnight_range_does_not_cover_same_morning(self, mock_current_time):
        """Friday's 10 PM - 2 AM range says nothing about Friday 1 AM."""
        mock_current_time.return_value = FRIDAY.replace(hour=1, minute=0)
        assert is_business_open(["Friday: 10:00 PM - 2:00 AM"]) is False

    def test_closed_day(self, mock_current_time):
        mock_current_time.return_value = SUNDAY.replace(hour=12, minute=0)
        assert is_business_open(WEEKDAY_HOURS) is False

    @pytest.mark.parametrize("hours", [[], None])
    def test_no_hours_means_closed(self, mock_current_time, hours):
        mock_current_time.return_value = MONDAY.replace(hour=12, minute=0)
        assert is_business_open(hours) is False

    def test_missing_day_entry(self, mock_current_time):
        mock_current_time.return_value = MONDAY.replace(hour=12, minute=0)
        assert is_business_open(["Tuesday: 9:00 AM - 5:00 PM"]) is False

    @pytest.mark.parametrize(
        "entry",
        [
            "Monday: 9 - 5",
            "Monday: noonish",
            "Monday: 13:75 PM - 5:00 PM",
            "Monday:",
        ]
    )
    def test_malformed_entry_is_closed(self, mock_current_time, entry):
        mock_current_time.return_value = MONDAY.replace(hour=12, minute=0)
        assert is_business_open([entry]) is False

    def test_en_dash_separator(self, mock_current_time):
        mock_current_time.return_value = MONDAY.replace(hour=12, minute=0)
        assert is_business_open(["Monday: 9:00 AM – 5:00 PM"]) is True

    def test_midnight_and_noon(self, mock_current_time):
        mock_current_time.return_value = MONDAY.replace(hour=0, minute=30)
        assert is_business_open(["Monday: 12:00 AM - 12:00 PM"]) is True
