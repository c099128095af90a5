"""Availability resolution for a single calendar day.

Decides which roster members may be scheduled on a date, given approved
day-off requests, per-staff fixed days off, the consecutive-day cap and the
monthly work-day cap. Roster order is preserved in every result.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from salonshift.domain.calendar import month_key
from salonshift.domain.models import Shift, ShiftConditions, ShiftRequest, StaffMember


class ExclusionReason(Enum):
    """Why a staff member cannot be scheduled on a date."""

    REQUESTED_OFF = "requested_off"
    FIXED_OFF = "fixed_off"
    CONSECUTIVE_LIMIT = "consecutive_limit"
    MONTHLY_LIMIT = "monthly_limit"


def worked_on(shifts: Iterable[Shift], staff_id: str, d: date) -> bool:
    """Check if a staff member has a shift on a date."""
    return any(s.staff_id == staff_id and s.shift_date == d for s in shifts)


def consecutive_days_before(shifts: Iterable[Shift], staff_id: str, d: date) -> int:
    """Length of the staff member's unbroken run of worked days ending at d - 1."""
    worked = {s.shift_date for s in shifts if s.staff_id == staff_id}
    run = 0
    cursor = d - timedelta(days=1)
    while cursor in worked:
        run += 1
        cursor -= timedelta(days=1)
    return run


def month_to_date_count(shifts: Iterable[Shift], staff_id: str, d: date) -> int:
    """Number of shifts the staff member already has in d's month."""
    month = month_key(d)
    return sum(1 for s in shifts if s.staff_id == staff_id and s.month == month)


class AvailabilityResolver:
    """Resolves which staff are eligible to work on a given day.

    Approved requests are indexed by staff ID once, so a resolver can be
    reused across every day of a month. Several approved requests for the
    same staff member are merged.

    Example:
        >>> resolver = AvailabilityResolver(conditions, requests)
        >>> eligible = resolver.available_staff(roster, date(2025, 2, 3), shifts)
    """

    def __init__(
        self,
        conditions: ShiftConditions,
        requests: Iterable[ShiftRequest] = (),
    ):
        self.conditions = conditions
        self._requested_off: dict[str, set[date]] = {}
        for request in requests:
            self._requested_off.setdefault(request.staff_id, set()).update(
                request.requested_dates
            )

    def requested_off(self, staff_id: str) -> set[date]:
        """All dates the staff member asked to have off."""
        return self._requested_off.get(staff_id, set())

    def exclusion_reason(
        self,
        staff: StaffMember,
        d: date,
        shifts_so_far: list[Shift],
    ) -> Optional[ExclusionReason]:
        """Get the first rule that blocks a staff member on a date.

        Returns:
            The blocking ExclusionReason, or None when the staff member is
            available.
        """
        if d in self.requested_off(staff.id):
            return ExclusionReason.REQUESTED_OFF

        condition = self.conditions.get_staff_condition(staff.id)
        if condition and d in condition.fixed_off_days:
            return ExclusionReason.FIXED_OFF

        cap = self.conditions.consecutive_day_cap(staff.id)
        if consecutive_days_before(shifts_so_far, staff.id, d) >= cap:
            return ExclusionReason.CONSECUTIVE_LIMIT

        if condition and condition.max_work_days_per_month is not None:
            if (
                month_to_date_count(shifts_so_far, staff.id, d)
                >= condition.max_work_days_per_month
            ):
                return ExclusionReason.MONTHLY_LIMIT

        return None

    def is_blocked(
        self,
        staff: StaffMember,
        d: date,
        shifts_so_far: list[Shift],
    ) -> bool:
        return self.exclusion_reason(staff, d, shifts_so_far) is not None

    def available_staff(
        self,
        roster: Iterable[StaffMember],
        d: date,
        shifts_so_far: list[Shift],
    ) -> list[StaffMember]:
        """Filter the roster down to the staff who may work on a date."""
        return [
            staff for staff in roster if not self.is_blocked(staff, d, shifts_so_far)
        ]


def available_staff(
    roster: Iterable[StaffMember],
    d: date,
    requests: Iterable[ShiftRequest],
    conditions: ShiftConditions,
    shifts_so_far: list[Shift],
) -> list[StaffMember]:
    """Staff from the roster who may be scheduled on a date.

    Args:
        roster: Active staff, in the order results should keep.
        d: Date being scheduled.
        requests: Approved shift requests for the month.
        conditions: The month's active conditions.
        shifts_so_far: Shifts already assigned earlier in the run.

    Returns:
        Eligible staff in roster order.
    """
    resolver = AvailabilityResolver(conditions, requests)
    return resolver.available_staff(roster, d, shifts_so_far)
