"""Holiday and schedule types shared by the fetcher, reconciler and writer."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import StrEnum

from voice_admin.exceptions import ConfigurationError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Live-feed ranges end at 23:45 on the day after the holiday
BUFFERED_END_OF_DAY = time(23, 45, 0)
# Static JSON ranges cover the holiday itself only
WHOLE_DAY_END = time(23, 59, 59)

FIXED_SCHEDULE_KIND = "Fixed"


class Jurisdiction(StrEnum):
    """Australian state or territory code used by the holiday feed."""

    SA = "SA"
    QLD = "QLD"
    ACT = "ACT"
    NSW = "NSW"
    WA = "WA"
    NT = "NT"
    VIC = "VIC"
    TAS = "TAS"

    @classmethod
    def parse(cls, value: str) -> "Jurisdiction":
        """Parse a code case-insensitively.

        Raises:
            ConfigurationError: If the code is not a known jurisdiction.
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigurationError(f'unknown jurisdiction "{value}" (expected one of {valid})') from None

    @classmethod
    def parse_many(cls, values: Iterable[str]) -> tuple["Jurisdiction", ...]:
        """Parse codes, dropping duplicates while keeping first-seen order."""
        parsed: dict[Jurisdiction, None] = {}
        for value in values:
            for part in value.split(","):
                if part.strip():
                    parsed[cls.parse(part)] = None
        return tuple(parsed)


class YearWindow(StrEnum):
    """Which holiday years a fetch keeps."""

    CURRENT_YEAR = "current"
    CURRENT_AND_NEXT_YEAR = "current-and-next"
    ANY = "any"

    def years(self, today: date) -> range | None:
        """Return the accepted years, or None when unrestricted."""
        if self is YearWindow.CURRENT_YEAR:
            return range(today.year, today.year + 1)
        if self is YearWindow.CURRENT_AND_NEXT_YEAR:
            return range(today.year, today.year + 2)
        return None

    def contains(self, day: date, today: date) -> bool:
        years = self.years(today)
        return years is None or day.year in years


@dataclass(frozen=True)
class HolidayRecord:
    """One public holiday in one jurisdiction.

    ``end_date`` is the day after ``start_date``; the scheduling platform
    treats it as the exclusive upper bound.
    """

    jurisdiction: Jurisdiction
    name: str
    start_date: date
    end_date: date

    @classmethod
    def on(cls, jurisdiction: Jurisdiction, name: str, day: date) -> "HolidayRecord":
        return cls(jurisdiction=jurisdiction, name=name, start_date=day, end_date=day + timedelta(days=1))

    @property
    def combined_name(self) -> str:
        return f"{self.jurisdiction} {self.name}"


@dataclass(frozen=True, order=True)
class DateRange:
    """An absolute range of local wall-clock time on a fixed schedule."""

    start: datetime
    end: datetime

    @classmethod
    def buffered(cls, holiday: HolidayRecord) -> "DateRange":
        """Live-feed convention: holiday start 00:00 to end date 23:45."""
        return cls(
            start=datetime.combine(holiday.start_date, time.min),
            end=datetime.combine(holiday.end_date, BUFFERED_END_OF_DAY),
        )

    @classmethod
    def whole_day(cls, day: date) -> "DateRange":
        """Static JSON convention: 00:00:00 to 23:59:59 on the same day."""
        return cls(start=datetime.combine(day, time.min), end=datetime.combine(day, WHOLE_DAY_END))

    @classmethod
    def parse(cls, start: str, end: str) -> "DateRange":
        return cls(start=_parse_timestamp(start), end=_parse_timestamp(end))

    @property
    def day(self) -> date:
        return self.start.date()

    def to_api(self) -> dict[str, str]:
        return {"Start": self.start.strftime(TIMESTAMP_FORMAT), "End": self.end.strftime(TIMESTAMP_FORMAT)}

    def __str__(self) -> str:
        return f"[{self.start.strftime(TIMESTAMP_FORMAT)}, {self.end.strftime(TIMESTAMP_FORMAT)}]"


def _parse_timestamp(value: str) -> datetime:
    # The platform returns local timestamps, sometimes with fractional seconds
    parsed = datetime.fromisoformat(value.strip().rstrip("Z"))
    return parsed.replace(tzinfo=None, microsecond=0)


@dataclass(frozen=True)
class ExistingSchedule:
    """A schedule already configured on the calling platform.

    The name is opaque free text; reconciliation matches on it by string
    equality only.
    """

    id: str
    name: str
    kind: str = FIXED_SCHEDULE_KIND
    date_ranges: tuple[DateRange, ...] = ()

    @property
    def is_fixed(self) -> bool:
        return self.kind.lower() == FIXED_SCHEDULE_KIND.lower()


@dataclass(frozen=True)
class UpdateExact:
    """Replace the ranges of the schedule named exactly after the holiday."""

    holiday: HolidayRecord
    schedule: ExistingSchedule
    added: tuple[DateRange, ...]
    new_ranges: tuple[DateRange, ...]


@dataclass(frozen=True)
class UpdateGroup:
    """Replace the ranges of a grouped "<J> Public Holiday" schedule."""

    holiday: HolidayRecord
    schedule: ExistingSchedule
    added: tuple[DateRange, ...]
    new_ranges: tuple[DateRange, ...]


@dataclass(frozen=True)
class Create:
    name: str
    ranges: tuple[DateRange, ...]
    holidays: tuple[HolidayRecord, ...] = ()


@dataclass(frozen=True)
class Skip:
    reason: str
    holiday: HolidayRecord | None = None
    name: str | None = None


Update = UpdateExact | UpdateGroup
Decision = UpdateExact | UpdateGroup | Create | Skip


@dataclass
class WriteReport:
    """Outcome counts of one writer pass."""

    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    skipped: int = 0
    conflicts: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    fetch_failures: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed and not self.fetch_failures
