"""Unit tests for holiday and schedule types."""

from datetime import date, datetime

import pytest

from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.models import DateRange, ExistingSchedule, HolidayRecord, Jurisdiction, YearWindow


class TestJurisdiction:
    def test_parse_is_case_insensitive(self):
        assert Jurisdiction.parse(" qld ") is Jurisdiction.QLD

    def test_parse_unknown_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Jurisdiction.parse("NZ")
        assert "NZ" in str(exc_info.value)

    def test_parse_many_splits_and_dedupes(self):
        assert Jurisdiction.parse_many(["nsw,vic", "NSW", " ", "tas"]) == (
            Jurisdiction.NSW,
            Jurisdiction.VIC,
            Jurisdiction.TAS,
        )


class TestYearWindow:
    @pytest.mark.parametrize(
        ("window", "year", "expected"),
        [
            (YearWindow.CURRENT_YEAR, 2025, True),
            (YearWindow.CURRENT_YEAR, 2026, False),
            (YearWindow.CURRENT_AND_NEXT_YEAR, 2026, True),
            (YearWindow.CURRENT_AND_NEXT_YEAR, 2024, False),
            (YearWindow.ANY, 1999, True),
        ],
    )
    def test_contains(self, window, year, expected):
        assert window.contains(date(year, 3, 1), date(2025, 6, 1)) is expected


class TestDateRange:
    def test_buffered_range_ends_next_day_at_2345(self):
        holiday = HolidayRecord.on(Jurisdiction.WA, "Western Australia Day", date(2025, 6, 2))

        assert DateRange.buffered(holiday) == DateRange(
            start=datetime(2025, 6, 2, 0, 0, 0),
            end=datetime(2025, 6, 3, 23, 45, 0),
        )

    def test_whole_day_range(self):
        assert DateRange.whole_day(date(2025, 6, 2)).end == datetime(2025, 6, 2, 23, 59, 59)

    def test_api_format(self):
        r = DateRange.whole_day(date(2025, 6, 2))

        assert r.to_api() == {"Start": "2025-06-02T00:00:00", "End": "2025-06-02T23:59:59"}
        assert str(r) == "[2025-06-02T00:00:00, 2025-06-02T23:59:59]"

    def test_parse_drops_fraction_and_zone(self):
        r = DateRange.parse("2025-06-02T00:00:00.0000000Z", "2025-06-03T23:45:00")

        assert r == DateRange(start=datetime(2025, 6, 2), end=datetime(2025, 6, 3, 23, 45))


class TestExistingSchedule:
    def test_fixed_kind_is_case_insensitive(self):
        assert ExistingSchedule(id="1", name="x", kind="fixed").is_fixed
        assert not ExistingSchedule(id="1", name="x", kind="WeeklyRecurrence").is_fixed
