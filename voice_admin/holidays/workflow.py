"""Holiday schedule procedures.

Each procedure takes an explicit ``AdminSession`` and an options value that
was validated once at the boundary (CLI flags or the interactive prompts).
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.fetcher import DEFAULT_SKIP_NAMES, HolidayFetcher
from voice_admin.holidays.models import Jurisdiction, WriteReport, YearWindow
from voice_admin.holidays.reconciler import plan_creation, reconcile, reconcile_static
from voice_admin.holidays.static_source import load_static_holidays
from voice_admin.holidays.writer import ScheduleWriter
from voice_admin.platform.observability import get_logger
from voice_admin.platform.session import AdminSession

logger = get_logger(__name__)


def _require_jurisdictions(jurisdictions: tuple[Jurisdiction, ...]) -> None:
    if not jurisdictions:
        raise ConfigurationError("at least one jurisdiction must be selected")


@dataclass(frozen=True)
class HolidaySyncOptions:
    """Options for updating existing schedules from the live feed."""

    jurisdictions: tuple[Jurisdiction, ...]
    window: YearWindow = YearWindow.CURRENT_AND_NEXT_YEAR
    dry_run: bool = False
    skip_names: tuple[str, ...] = DEFAULT_SKIP_NAMES

    def __post_init__(self):
        _require_jurisdictions(self.jurisdictions)


@dataclass(frozen=True)
class HolidayCreateOptions:
    """Options for creating new schedules from the live feed."""

    jurisdictions: tuple[Jurisdiction, ...]
    window: YearWindow = YearWindow.ANY
    grouped: bool = True
    dry_run: bool = False
    skip_names: tuple[str, ...] = DEFAULT_SKIP_NAMES

    def __post_init__(self):
        _require_jurisdictions(self.jurisdictions)


@dataclass(frozen=True)
class StaticSyncOptions:
    """Options for updating schedules from per-state JSON files."""

    directory: Path
    jurisdictions: tuple[Jurisdiction, ...]
    dry_run: bool = False

    def __post_init__(self):
        _require_jurisdictions(self.jurisdictions)


def sync_holidays(session: AdminSession, options: HolidaySyncOptions, today: date | None = None) -> WriteReport:
    """Update existing schedules with holidays from the live feed."""
    fetcher = HolidayFetcher(session.open_data, skip_names=options.skip_names)
    fetched = fetcher.fetch(options.jurisdictions, window=options.window, today=today)

    schedules = session.calling.list_schedules()
    logger.info("Loaded schedules", schedules=len(schedules), holidays=len(fetched.records))

    decisions = reconcile(schedules, fetched.records, today=today)
    report = ScheduleWriter(session.calling, dry_run=options.dry_run).apply(decisions)
    report.fetch_failures.extend(j.value for j in fetched.failures)
    return report


def create_holiday_schedules(
    session: AdminSession,
    options: HolidayCreateOptions,
    today: date | None = None,
) -> WriteReport:
    """Create new schedules for holidays from the live feed."""
    fetcher = HolidayFetcher(session.open_data, skip_names=options.skip_names)
    fetched = fetcher.fetch(options.jurisdictions, window=options.window, today=today)

    schedules = session.calling.list_schedules()
    decisions = plan_creation(schedules, fetched.records, grouped=options.grouped)
    report = ScheduleWriter(session.calling, dry_run=options.dry_run).apply(decisions)
    report.fetch_failures.extend(j.value for j in fetched.failures)
    return report


def sync_static_holidays(
    session: AdminSession,
    options: StaticSyncOptions,
    today: date | None = None,
) -> WriteReport:
    """Update existing schedules from static per-state JSON files."""
    holidays = load_static_holidays(options.directory, options.jurisdictions)

    schedules = session.calling.list_schedules()
    logger.info("Loaded schedules", schedules=len(schedules), holidays=len(holidays))

    decisions = reconcile_static(schedules, holidays, today=today)
    return ScheduleWriter(session.calling, dry_run=options.dry_run).apply(decisions)
