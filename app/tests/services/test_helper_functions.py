import pytest
from datetime import datetime, timezone
from app.utils.helper_functions import (
    average,
    format_date,
    format_price,
    format_rating,
    parse_datetime,
)


class TestHelperFunctions:

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-02-10T12:00:00Z", "02/10/2024"),
            ("2024-02-10T12:00:00+00:00", "02/10/2024"),
            ({"_seconds": 1704067200, "_nanoseconds": 0}, "01/01/2024"),
            (datetime(2023, 12, 25), "12/25/2023"),
            ("not a date", "Invalid date"),
            (None, "Invalid date"),
            ({"foo": "bar"}, "Invalid date"),
        ]
    )
    def test_format_date(self, value, expected):
        assert format_date(value) == expected

    def test_parse_document_timestamp_with_nanoseconds(self):
        parsed = parse_datetime({"_seconds": 1704067200, "_nanoseconds": 500000000})
        assert parsed == datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value,expected", [(12.5, "$12.50"), ("3", "$3.00"), (None, "$0.00")])
    def test_format_price(self, value, expected):
        assert format_price(value) == expected

    @pytest.mark.parametrize("value,expected", [(4.56, "4.6"), (3, "3.0"), ("bad", "0.0")])
    def test_format_rating(self, value, expected):
        assert format_rating(value) == expected

    def test_average(self):
        assert average([]) == 0.0
        assert average(x for x in [1, 2, 3, 4]) == 2.5
