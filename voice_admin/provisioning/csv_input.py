"""CSV input for bulk operations.

Rows need a ``UPN`` column (and ``DisplayName`` for resource accounts).
A file missing a required column is a configuration error; a row with an
empty value or a UPN without ``@`` is skipped with a warning.
"""

import csv
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from voice_admin.exceptions import ConfigurationError
from voice_admin.platform.observability import get_logger

logger = get_logger(__name__)

UPN_COLUMN = "UPN"
DISPLAY_NAME_COLUMN = "DisplayName"

# Values past the last header column, e.g. from a trailing comma
_EXTRA_FIELDS_KEY = "__extra__"


@dataclass(frozen=True)
class AccountRow:
    user_principal_name: str
    display_name: str
    line: int


def _read_rows(path: Path, required: Sequence[str]) -> Iterator[tuple[int, dict[str, str]]]:
    try:
        handle = path.open(newline="", encoding="utf-8-sig")
    except OSError as e:
        raise ConfigurationError(f"cannot open {path}: {e}") from e

    with handle:
        reader = csv.DictReader(handle, restkey=_EXTRA_FIELDS_KEY)
        header = [name.strip() for name in reader.fieldnames or []]
        missing = [column for column in required if column not in header]
        if missing:
            raise ConfigurationError(f"{path} is missing required column(s): {', '.join(missing)}")

        # Line 1 is the header
        for line, raw in enumerate(reader, start=2):
            extra = raw.pop(_EXTRA_FIELDS_KEY, None)
            if extra and any(v.strip() for v in extra):
                logger.warning("Ignoring values past the last column", file=str(path), line=line, extra=extra)
            yield line, {(k or "").strip(): (v or "").strip() for k, v in raw.items()}


def _valid_upn(upn: str, line: int, path: Path) -> bool:
    if not upn:
        logger.warning("Skipping row without UPN", file=str(path), line=line)
        return False
    if "@" not in upn:
        logger.warning("Skipping row with invalid UPN", file=str(path), line=line, upn=upn)
        return False
    return True


def read_account_rows(path: Path) -> list[AccountRow]:
    """Read resource-account rows from a CSV file."""
    rows = []
    for line, raw in _read_rows(path, (UPN_COLUMN, DISPLAY_NAME_COLUMN)):
        upn = raw.get(UPN_COLUMN, "")
        display_name = raw.get(DISPLAY_NAME_COLUMN, "")
        if not _valid_upn(upn, line, path):
            continue
        if not display_name:
            logger.warning("Skipping row without DisplayName", file=str(path), line=line, upn=upn)
            continue
        rows.append(AccountRow(user_principal_name=upn, display_name=display_name, line=line))
    return rows


def read_contact_upns(path: Path) -> list[str]:
    """Read the principal names to import as contacts from a CSV file."""
    upns: dict[str, None] = {}
    for line, raw in _read_rows(path, (UPN_COLUMN,)):
        upn = raw.get(UPN_COLUMN, "")
        if _valid_upn(upn, line, path):
            upns[upn] = None
    return list(upns)
