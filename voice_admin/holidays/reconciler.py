"""Schedule reconciler.

Decides, for each fetched holiday, whether an existing fixed schedule is
updated, a new one is created or nothing happens. Matching is by schedule
name only:

- ``"<J> <Holiday Name>"`` is a per-holiday schedule (exact match first).
- ``"<J> Public Holiday"`` (singular) is the grouped schedule the update
  paths fall back to. Create mode names its grouped schedules
  ``"<J> Public Holidays"`` (plural). Both conventions are in use on
  existing tenants and are kept as they are.

Nothing here talks to the network or mutates its inputs.
"""

from collections.abc import Iterable, Sequence
from datetime import date

from voice_admin.holidays.models import (
    Create,
    DateRange,
    Decision,
    ExistingSchedule,
    HolidayRecord,
    Jurisdiction,
    Skip,
    UpdateExact,
    UpdateGroup,
    YearWindow,
)

GROUP_SUFFIX = "Public Holiday"
CREATE_GROUP_SUFFIX = "Public Holidays"

SKIP_OUT_OF_WINDOW = "out of window"
SKIP_NO_MATCH = "no match"
SKIP_ALREADY_EXISTS = "already exists"
SKIP_NO_FUTURE_RANGES = "no future ranges"


def group_name(jurisdiction: Jurisdiction) -> str:
    return f"{jurisdiction} {GROUP_SUFFIX}"


def create_group_name(jurisdiction: Jurisdiction) -> str:
    return f"{jurisdiction} {CREATE_GROUP_SUFFIX}"


def fixed_schedules(schedules: Iterable[ExistingSchedule]) -> list[ExistingSchedule]:
    return [s for s in schedules if s.is_fixed]


def dedupe_by_day(ranges: Iterable[DateRange]) -> list[DateRange]:
    """Keep the first range seen for each calendar day of the start instant."""
    by_day: dict[date, DateRange] = {}
    for r in ranges:
        by_day.setdefault(r.day, r)
    return list(by_day.values())


def merge_ranges(
    existing: Iterable[DateRange],
    incoming: Iterable[DateRange],
    today: date,
) -> list[DateRange]:
    """Union, one range per start day (first seen wins), future days only.

    Returns:
        Ranges starting on or after ``today``, ordered by start.
    """
    merged = dedupe_by_day([*existing, *incoming])
    return sorted(r for r in merged if r.day >= today)


def find_matches(
    holiday: HolidayRecord,
    schedules: Sequence[ExistingSchedule],
) -> tuple[type[UpdateExact] | type[UpdateGroup] | None, list[ExistingSchedule]]:
    """Find the schedules a holiday updates.

    Returns:
        ``(UpdateExact, [schedule])`` for an exact-name match,
        ``(UpdateGroup, schedules)`` for every group-name match in
        presentation order, or ``(None, [])``.
    """
    combined = holiday.combined_name
    for schedule in schedules:
        if schedule.name == combined:
            return UpdateExact, [schedule]

    grouped = group_name(holiday.jurisdiction)
    groups = [s for s in schedules if s.name == grouped]
    if groups:
        return UpdateGroup, groups
    return None, []


def reconcile(
    schedules: Iterable[ExistingSchedule],
    holidays: Iterable[HolidayRecord],
    today: date | None = None,
) -> list[Decision]:
    """Reconcile live-feed holidays against existing schedules (update mode).

    Holidays outside the current-and-next-year window are skipped without
    matching. Each in-window holiday yields an ``UpdateExact``, one
    ``UpdateGroup`` per group schedule, or ``Skip("no match")``. No schedule
    is ever created here.

    Args:
        schedules: Snapshot of the tenant's schedules; non-fixed ones are ignored.
        holidays: Holidays in the order decisions should be emitted.
        today: Reference date for the window (defaults to today).
    """
    today = today or date.today()
    candidates = fixed_schedules(schedules)
    decisions: list[Decision] = []

    for holiday in holidays:
        if not YearWindow.CURRENT_AND_NEXT_YEAR.contains(holiday.start_date, today):
            decisions.append(Skip(SKIP_OUT_OF_WINDOW, holiday=holiday))
            continue

        kind, matches = find_matches(holiday, candidates)
        if kind is None:
            decisions.append(Skip(SKIP_NO_MATCH, holiday=holiday))
            continue

        added = (DateRange.buffered(holiday),)
        for schedule in matches:
            new_ranges = tuple(dedupe_by_day([*schedule.date_ranges, *added]))
            decisions.append(kind(holiday=holiday, schedule=schedule, added=added, new_ranges=new_ranges))

    return decisions


def reconcile_static(
    schedules: Iterable[ExistingSchedule],
    holidays: Iterable[HolidayRecord],
    today: date | None = None,
) -> list[Decision]:
    """Reconcile holidays from static per-state files (JSON path).

    Holidays are matched with the same exact/group rules, but ranges cover
    the whole day (``00:00:00`` to ``23:59:59``) and each matched schedule
    gets a single decision whose ranges are merged with its existing ones,
    de-duplicated per day and limited to today onwards. A schedule left with
    no future range is skipped and never written.
    """
    today = today or date.today()
    candidates = fixed_schedules(schedules)
    decisions: list[Decision] = []

    # schedule id -> (decision type, schedule, first holiday, incoming ranges)
    pending: dict[str, tuple[type, ExistingSchedule, HolidayRecord, list[DateRange]]] = {}
    for holiday in holidays:
        kind, matches = find_matches(holiday, candidates)
        if kind is None:
            decisions.append(Skip(SKIP_NO_MATCH, holiday=holiday))
            continue
        for schedule in matches:
            entry = pending.setdefault(schedule.id, (kind, schedule, holiday, []))
            entry[3].append(DateRange.whole_day(holiday.start_date))

    for kind, schedule, holiday, incoming in pending.values():
        new_ranges = merge_ranges(schedule.date_ranges, incoming, today)
        if not new_ranges:
            decisions.append(Skip(SKIP_NO_FUTURE_RANGES, holiday=holiday, name=schedule.name))
            continue
        decisions.append(
            kind(
                holiday=holiday,
                schedule=schedule,
                added=tuple(r for r in incoming if r.day >= today),
                new_ranges=tuple(new_ranges),
            )
        )
    return decisions


def plan_creation(
    schedules: Iterable[ExistingSchedule],
    holidays: Iterable[HolidayRecord],
    grouped: bool = True,
) -> list[Decision]:
    """Plan new schedules for fetched holidays (create mode).

    Grouped mode plans one ``"<J> Public Holidays"`` schedule per
    jurisdiction; otherwise one ``"<J> <Holiday Name>"`` schedule per
    distinct holiday name, with a range per occurrence. Names that already
    exist are skipped, never overwritten.
    """
    existing_names = {s.name for s in schedules}

    planned: dict[str, list[HolidayRecord]] = {}
    for holiday in holidays:
        name = create_group_name(holiday.jurisdiction) if grouped else holiday.combined_name
        planned.setdefault(name, []).append(holiday)

    decisions: list[Decision] = []
    for name, members in planned.items():
        if name in existing_names:
            decisions.append(Skip(SKIP_ALREADY_EXISTS, holiday=members[0], name=name))
            continue
        ranges = tuple(sorted(dedupe_by_day(DateRange.buffered(h) for h in members)))
        decisions.append(Create(name=name, ranges=ranges, holidays=tuple(members)))
    return decisions
