"""Static per-state holiday files.

Each jurisdiction has one JSON file named after its code (``nsw.json``,
``VIC.json``, ...) holding either a list of holidays or an object with a
``holidays`` list. Every holiday has a ``date`` (``YYYY-MM-DD`` or
``YYYYMMDD``) and a ``name``::

    [
        {"date": "2025-12-25", "name": "Christmas Day"},
        {"date": "2025-12-26", "name": "Boxing Day"}
    ]
"""

import json
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any

from voice_admin.exceptions import ConfigurationError
from voice_admin.holidays.models import HolidayRecord, Jurisdiction
from voice_admin.platform.observability import get_logger

logger = get_logger(__name__)

_DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")


def find_state_file(directory: Path, jurisdiction: Jurisdiction) -> Path | None:
    for candidate in (jurisdiction.value, jurisdiction.value.lower()):
        path = directory / f"{candidate}.json"
        if path.is_file():
            return path
    return None


def load_state_file(path: Path, jurisdiction: Jurisdiction) -> list[HolidayRecord]:
    """Read one state file into holiday records.

    Raises:
        ConfigurationError: If the file is not valid JSON or has the wrong shape.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot read holiday file {path}: {e}") from e

    entries = payload.get("holidays") if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise ConfigurationError(f"holiday file {path} must hold a list of holidays")

    records = []
    for entry in entries:
        record = _to_record(entry, jurisdiction)
        if record is None:
            logger.warning("Skipping malformed holiday entry", file=str(path), entry=entry)
            continue
        records.append(record)
    return records


def load_static_holidays(directory: Path, jurisdictions: Iterable[Jurisdiction]) -> list[HolidayRecord]:
    """Load holidays for each jurisdiction from its state file.

    A jurisdiction without a file is logged and contributes no records.

    Raises:
        ConfigurationError: If the directory does not exist or no
            jurisdiction is given.
    """
    selected = list(dict.fromkeys(jurisdictions))
    if not selected:
        raise ConfigurationError("at least one jurisdiction must be selected")
    if not directory.is_dir():
        raise ConfigurationError(f"holiday directory {directory} does not exist")

    records: list[HolidayRecord] = []
    for jurisdiction in selected:
        path = find_state_file(directory, jurisdiction)
        if path is None:
            logger.warning("No holiday file for jurisdiction", jurisdiction=jurisdiction.value, directory=str(directory))
            continue
        loaded = load_state_file(path, jurisdiction)
        logger.info("Loaded holiday file", jurisdiction=jurisdiction.value, file=str(path), holidays=len(loaded))
        records.extend(loaded)
    return records


def _to_record(entry: Any, jurisdiction: Jurisdiction) -> HolidayRecord | None:
    if not isinstance(entry, dict):
        return None
    name = str(entry.get("name", "")).strip()
    day = _parse_date(entry.get("date"))
    if not name or day is None:
        return None
    return HolidayRecord.on(jurisdiction, name, day)


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(str(value).strip(), fmt).date()
        except ValueError:
            continue
    return None
