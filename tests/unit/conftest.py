"""Shared fixtures for unit tests."""

from datetime import date
from unittest.mock import Mock

import pytest

from voice_admin.holidays.models import DateRange, ExistingSchedule, HolidayRecord, Jurisdiction
from voice_admin.platform.clients.calling import CallingPlatformClient
from voice_admin.platform.clients.directory import DirectoryClient
from voice_admin.platform.clients.open_data import OpenDataClient
from voice_admin.platform.session import AdminSession


@pytest.fixture
def today() -> date:
    return date(2025, 6, 1)


@pytest.fixture
def boxing_day() -> HolidayRecord:
    return HolidayRecord.on(Jurisdiction.NSW, "Boxing Day", date(2025, 12, 26))


@pytest.fixture
def make_schedule():
    """Build an ExistingSchedule with whole-day ranges on the given days."""

    def _make(schedule_id: str, name: str, *days: date, kind: str = "Fixed") -> ExistingSchedule:
        return ExistingSchedule(
            id=schedule_id,
            name=name,
            kind=kind,
            date_ranges=tuple(DateRange.whole_day(d) for d in days),
        )

    return _make


@pytest.fixture
def mock_session() -> Mock:
    """An AdminSession whose clients are mocks."""
    session = Mock(spec=AdminSession)
    session.directory = Mock(spec=DirectoryClient)
    session.calling = Mock(spec=CallingPlatformClient)
    session.open_data = Mock(spec=OpenDataClient)
    return session
