"""Labor compliance checking for shift sets.

This module is the single source of truth for labor-standard checks. It is
pure: it never persists anything, so it can be run on generated schedules
and on "what-if" shift sets before a manual edit is committed.
"""

import logging
from collections import defaultdict
from datetime import date, time, timedelta
from typing import Iterable

from salonshift.domain.calendar import first_day, full_weeks, last_day, month_key
from salonshift.domain.models import (
    LaborStandards,
    LaborViolation,
    Severity,
    Shift,
    ViolationType,
    minutes_of_day,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
CRITICAL_EXCESS_HOURS = 2


def overlaps_night_window(
    start: time,
    end: time,
    night_start: time,
    night_end: time,
) -> bool:
    """Check if the half-open interval [start, end) touches the night window.

    The night window [night_start, night_end) wraps past midnight when
    night_start is later than night_end (e.g. 22:00-05:00).
    """
    shift_start = minutes_of_day(start)
    shift_end = minutes_of_day(end)
    window_start = minutes_of_day(night_start)
    window_end = minutes_of_day(night_end)

    if shift_end <= shift_start or window_start == window_end:
        return False

    if window_start < window_end:
        windows = [(window_start, window_end)]
    else:
        windows = [(window_start, MINUTES_PER_DAY), (0, window_end)]

    return any(
        max(shift_start, lo) < min(shift_end, hi) for lo, hi in windows
    )


def _format_hours(hours: float) -> str:
    return f"{hours:g}h"


class LaborComplianceChecker:
    """Evaluates shifts against a labor-standards policy.

    Checks consecutive work days, daily hours, night work and monthly hours.
    The weekly rest-day check is on by default; the weekly hours check is
    opt-in.

    Example:
        >>> checker = LaborComplianceChecker()
        >>> violations = checker.check(shifts, LaborStandards())
        >>> for violation in violations:
        ...     print(violation)
    """

    def __init__(
        self,
        enforce_rest_days: bool = True,
        enforce_weekly_hours: bool = False,
    ):
        self.enforce_rest_days = enforce_rest_days
        self.enforce_weekly_hours = enforce_weekly_hours

    def check(
        self,
        shifts: Iterable[Shift],
        standards: LaborStandards,
    ) -> list[LaborViolation]:
        """Check a set of shifts.

        Only approved shifts are evaluated. Violations are returned as one
        flat list, grouped by staff member in order of first appearance, then
        in date order.

        Args:
            shifts: Shifts to evaluate.
            standards: Labor limits to evaluate against.

        Returns:
            List of LaborViolation (empty when compliant).
        """
        by_staff: dict[str, list[Shift]] = {}
        for shift in shifts:
            if not shift.is_approved:
                continue
            by_staff.setdefault(shift.staff_id, []).append(shift)

        violations: list[LaborViolation] = []
        for staff_shifts in by_staff.values():
            staff_shifts.sort(key=lambda s: s.shift_date)
            violations.extend(self._check_staff(staff_shifts, standards))

        logger.debug(
            f"Compliance check over {len(by_staff)} staff found "
            f"{len(violations)} violations"
        )
        return violations

    def _check_staff(
        self,
        shifts: list[Shift],
        standards: LaborStandards,
    ) -> list[LaborViolation]:
        """Check one staff member's shifts, sorted by date."""
        violations = []
        staff_id = shifts[0].staff_id
        staff_name = shifts[0].staff_name

        consecutive = 0
        previous_date = None
        for shift in shifts:
            if (
                previous_date is not None
                and shift.shift_date - previous_date == timedelta(days=1)
            ):
                consecutive += 1
            else:
                consecutive = 1

            if consecutive > standards.max_consecutive_work_days:
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.CONSECUTIVE_DAYS,
                        severity=Severity.ERROR,
                        staff_id=staff_id,
                        staff_name=staff_name,
                        violation_date=shift.shift_date,
                        details=(
                            f"Consecutive work day {consecutive} "
                            f"(limit {standards.max_consecutive_work_days})"
                        ),
                        suggestion="Schedule a day off to break the run",
                    )
                )

            work_hours = shift.work_hours
            if work_hours > standards.max_work_hours_per_day:
                excess = work_hours - standards.max_work_hours_per_day
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.DAILY_HOURS,
                        severity=(
                            Severity.CRITICAL
                            if excess > CRITICAL_EXCESS_HOURS
                            else Severity.WARNING
                        ),
                        staff_id=staff_id,
                        staff_name=staff_name,
                        violation_date=shift.shift_date,
                        details=(
                            f"Daily work time {_format_hours(work_hours)} "
                            f"(limit {_format_hours(standards.max_work_hours_per_day)})"
                        ),
                        suggestion="Shorten the shift or move hours to another day",
                    )
                )

            if overlaps_night_window(
                shift.start_time,
                shift.end_time,
                standards.night_work_start,
                standards.night_work_end,
            ):
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.NIGHT_WORK,
                        severity=Severity.WARNING,
                        staff_id=staff_id,
                        staff_name=staff_name,
                        violation_date=shift.shift_date,
                        details=(
                            f"Shift overlaps night hours "
                            f"({standards.night_work_start.strftime('%H:%M')}-"
                            f"{standards.night_work_end.strftime('%H:%M')})"
                        ),
                        suggestion="Night work requires special arrangements",
                    )
                )

            previous_date = shift.shift_date

        if self.enforce_rest_days or self.enforce_weekly_hours:
            violations.extend(self._check_weeks(shifts, standards))
            # Week results are dated on their Monday; keep day order
            violations.sort(key=lambda v: v.violation_date)

        monthly_hours: dict[str, float] = defaultdict(float)
        for shift in shifts:
            monthly_hours[shift.month] += shift.work_hours

        for month, hours in monthly_hours.items():
            if hours > standards.max_work_hours_per_month:
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.MONTHLY_HOURS,
                        severity=Severity.ERROR,
                        staff_id=staff_id,
                        staff_name=staff_name,
                        details=(
                            f"Monthly work time {_format_hours(round(hours, 2))} in {month} "
                            f"(limit {_format_hours(standards.max_work_hours_per_month)})"
                        ),
                        suggestion="Rebalance hours across the month",
                    )
                )

        return violations

    def _check_weeks(
        self,
        shifts: list[Shift],
        standards: LaborStandards,
    ) -> list[LaborViolation]:
        """Check rest days and weekly hours over full Monday-Sunday weeks.

        Only weeks lying entirely inside the months covered by the shifts are
        evaluated, so a partial week at a month boundary is never flagged.
        """
        violations = []
        staff_id = shifts[0].staff_id
        staff_name = shifts[0].staff_name

        window_start = first_day(month_key(shifts[0].shift_date))
        window_end = last_day(month_key(shifts[-1].shift_date))

        hours_by_date: dict[date, float] = defaultdict(float)
        for shift in shifts:
            hours_by_date[shift.shift_date] += shift.work_hours

        for monday in full_weeks(window_start, window_end):
            week = [monday + timedelta(days=i) for i in range(7)]
            worked = [d for d in week if d in hours_by_date]

            rest_days = 7 - len(worked)
            if (
                self.enforce_rest_days
                and rest_days < standards.minimum_rest_days_per_week
            ):
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.INSUFFICIENT_REST,
                        severity=Severity.WARNING,
                        staff_id=staff_id,
                        staff_name=staff_name,
                        violation_date=monday,
                        details=(
                            f"{rest_days} rest days in week of {monday.isoformat()} "
                            f"(minimum {standards.minimum_rest_days_per_week})"
                        ),
                        suggestion="Give at least the minimum weekly rest days",
                    )
                )

            week_hours = sum(hours_by_date[d] for d in worked)
            if (
                self.enforce_weekly_hours
                and week_hours > standards.max_work_hours_per_week
            ):
                violations.append(
                    LaborViolation(
                        violation_type=ViolationType.WEEKLY_HOURS,
                        severity=Severity.ERROR,
                        staff_id=staff_id,
                        staff_name=staff_name,
                        violation_date=monday,
                        details=(
                            f"Weekly work time {_format_hours(round(week_hours, 2))} "
                            f"in week of {monday.isoformat()} "
                            f"(limit {_format_hours(standards.max_work_hours_per_week)})"
                        ),
                        suggestion="Move hours to a lighter week",
                    )
                )

        return violations


def check_compliance(
    shifts: Iterable[Shift],
    standards: LaborStandards,
    enforce_rest_days: bool = True,
    enforce_weekly_hours: bool = False,
) -> list[LaborViolation]:
    """Check shifts against labor standards with a one-off checker."""
    checker = LaborComplianceChecker(
        enforce_rest_days=enforce_rest_days,
        enforce_weekly_hours=enforce_weekly_hours,
    )
    return checker.check(shifts, standards)
