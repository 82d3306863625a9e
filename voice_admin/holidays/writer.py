"""Schedule writer.

Applies reconciliation decisions to the calling platform. Every decision
is logged as a readable line, including in dry-run mode where no mutating
call is made.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol

from voice_admin.holidays.models import (
    Create,
    DateRange,
    Decision,
    ExistingSchedule,
    Skip,
    UpdateExact,
    WriteReport,
)
from voice_admin.holidays.reconciler import dedupe_by_day
from voice_admin.platform.clients.exceptions import AdminClientError, AdminConflictError
from voice_admin.platform.observability import get_logger

logger = get_logger(__name__)


class ScheduleStore(Protocol):
    def create_fixed_schedule(self, name: str, ranges: Sequence[DateRange]) -> ExistingSchedule: ...

    def update_schedule_ranges(self, schedule: ExistingSchedule, ranges: Sequence[DateRange]) -> None: ...


def _fmt(ranges: Iterable[DateRange]) -> list[str]:
    return [str(r) for r in ranges]


class ScheduleWriter:
    """Apply decisions, coalescing updates so each schedule is written once."""

    def __init__(self, store: ScheduleStore, dry_run: bool = False):
        self._store = store
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def apply(self, decisions: Iterable[Decision]) -> WriteReport:
        """Apply decisions in order.

        Creates are issued as they are met. Updates are folded per schedule
        ID: the first decision's ``new_ranges`` plus every later decision's
        ``added`` ranges, one range per day. They are written after all
        decisions have been logged.
        """
        report = WriteReport(dry_run=self._dry_run)
        updates: dict[str, tuple[ExistingSchedule, list[DateRange]]] = {}

        for decision in decisions:
            if isinstance(decision, Skip):
                self._log_skip(decision)
                report.skipped += 1
            elif isinstance(decision, Create):
                self._create(decision, report)
            else:
                schedule = decision.schedule
                logger.info(
                    "Holiday matched schedule",
                    match="exact" if isinstance(decision, UpdateExact) else "group",
                    holiday=decision.holiday.combined_name,
                    schedule=schedule.name,
                    added=_fmt(decision.added),
                )
                if schedule.id in updates:
                    _, ranges = updates[schedule.id]
                    updates[schedule.id] = (schedule, dedupe_by_day([*ranges, *decision.added]))
                else:
                    updates[schedule.id] = (schedule, list(decision.new_ranges))

        for schedule, ranges in updates.values():
            self._update(schedule, ranges, report)

        logger.info(
            "Write pass finished",
            dry_run=self._dry_run,
            created=len(report.created),
            updated=len(report.updated),
            unchanged=len(report.unchanged),
            skipped=report.skipped,
            conflicts=len(report.conflicts),
            failed=len(report.failed),
        )
        return report

    def _log_skip(self, decision: Skip) -> None:
        logger.info(
            "Skipping holiday",
            reason=decision.reason,
            holiday=decision.holiday.combined_name if decision.holiday else None,
            date=decision.holiday.start_date.isoformat() if decision.holiday else None,
            schedule=decision.name,
        )

    def _create(self, decision: Create, report: WriteReport) -> None:
        if self._dry_run:
            logger.info("Dry run: would create schedule", schedule=decision.name, ranges=_fmt(decision.ranges))
            report.created.append(decision.name)
            return

        try:
            created = self._store.create_fixed_schedule(decision.name, decision.ranges)
        except AdminConflictError as e:
            logger.warning("Schedule already exists, not overwriting", schedule=decision.name, error=str(e))
            report.conflicts.append(decision.name)
            return
        except AdminClientError as e:
            logger.error("Schedule creation failed", schedule=decision.name, error=str(e))
            report.failed.append(decision.name)
            return

        logger.info("Created schedule", schedule=decision.name, id=created.id, ranges=len(decision.ranges))
        report.created.append(decision.name)

    def _update(self, schedule: ExistingSchedule, ranges: list[DateRange], report: WriteReport) -> None:
        if tuple(ranges) == schedule.date_ranges:
            logger.info("Schedule already up to date", schedule=schedule.name, id=schedule.id)
            report.unchanged.append(schedule.name)
            return

        if self._dry_run:
            logger.info(
                "Dry run: would update schedule",
                schedule=schedule.name,
                id=schedule.id,
                old=_fmt(schedule.date_ranges),
                new=_fmt(ranges),
            )
            report.updated.append(schedule.name)
            return

        try:
            self._store.update_schedule_ranges(schedule, ranges)
        except AdminClientError as e:
            logger.error("Schedule update failed", schedule=schedule.name, id=schedule.id, error=str(e))
            report.failed.append(schedule.name)
            return

        logger.info(
            "Updated schedule",
            schedule=schedule.name,
            id=schedule.id,
            old=_fmt(schedule.date_ranges),
            new=_fmt(ranges),
        )
        report.updated.append(schedule.name)
