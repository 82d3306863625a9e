"""Holiday fetcher.

Turns the open-data feed's rows into ``HolidayRecord`` values, one
sequential request per jurisdiction. A failed jurisdiction is logged and
recorded but never stops the others.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Protocol

from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.models import HolidayRecord, Jurisdiction, YearWindow
from voice_admin.platform.clients.exceptions import AdminClientError
from voice_admin.platform.observability import get_logger

logger = get_logger(__name__)

DEFAULT_SKIP_NAMES: tuple[str, ...] = ("Bank Holiday",)

_DATE_FORMAT = "%Y%m%d"


class HolidaySource(Protocol):
    def query_holidays(self, jurisdiction: str) -> list[dict[str, Any]]: ...


@dataclass
class FetchResult:
    """Records fetched in one run plus the jurisdictions that failed.

    Attributes:
        records: Holiday records in jurisdiction then feed order.
        failures: Error message per jurisdiction whose query failed.
    """

    records: list[HolidayRecord] = field(default_factory=list)
    failures: dict[Jurisdiction, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failures


class HolidayFetcher:
    """Fetch and normalise public holidays for a set of jurisdictions."""

    def __init__(self, source: HolidaySource, skip_names: Iterable[str] = DEFAULT_SKIP_NAMES):
        """Initialize the fetcher.

        Args:
            source: Client answering per-jurisdiction holiday queries.
            skip_names: Published holiday names to drop (exact match).
        """
        self._source = source
        self._skip_names = frozenset(skip_names)

    def fetch(
        self,
        jurisdictions: Iterable[Jurisdiction],
        window: YearWindow = YearWindow.ANY,
        today: date | None = None,
    ) -> FetchResult:
        """Fetch holidays for every jurisdiction.

        Args:
            jurisdictions: Jurisdictions to query, in order.
            window: Year window applied to each holiday's date.
            today: Reference date for the window (defaults to today).

        Returns:
            FetchResult with the records and any per-jurisdiction failures.

        Raises:
            ConfigurationError: If no jurisdiction is given.
        """
        selected = list(dict.fromkeys(jurisdictions))
        if not selected:
            raise ConfigurationError("at least one jurisdiction must be selected")

        today = today or date.today()
        result = FetchResult()
        for jurisdiction in selected:
            try:
                rows = self._source.query_holidays(jurisdiction.value)
            except AdminClientError as e:
                logger.error("Holiday query failed", jurisdiction=jurisdiction.value, error=str(e))
                result.failures[jurisdiction] = str(e)
                continue

            records = self.normalize(jurisdiction, rows, window=window, today=today)
            logger.info("Fetched holidays", jurisdiction=jurisdiction.value, rows=len(rows), kept=len(records))
            result.records.extend(records)
        return result

    def normalize(
        self,
        jurisdiction: Jurisdiction,
        rows: Iterable[dict[str, Any]],
        *,
        window: YearWindow,
        today: date,
    ) -> list[HolidayRecord]:
        """Filter raw feed rows and convert the survivors to records."""
        records = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping malformed row", jurisdiction=jurisdiction.value, row=row)
                continue
            if str(row.get("Jurisdiction", "")).strip().upper() != jurisdiction.value:
                continue

            name = str(row.get("Holiday Name", "")).strip()
            if not name or name in self._skip_names:
                continue

            day = _parse_row_date(row)
            if day is None:
                logger.warning("Skipping row with unreadable date", jurisdiction=jurisdiction.value, row=row)
                continue

            if not window.contains(day, today):
                continue

            records.append(HolidayRecord.on(jurisdiction, name, day))
        return records


def _parse_row_date(row: dict[str, Any]) -> date | None:
    raw = row.get("Date", row.get("date"))
    if raw is None:
        return None
    try:
        return datetime.strptime(str(raw).strip(), _DATE_FORMAT).date()
    except ValueError:
        return None
