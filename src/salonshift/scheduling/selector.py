"""Priority-based staff selection for a single day."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from salonshift.domain.calendar import is_weekend
from salonshift.domain.models import Position, Shift, ShiftConditions, StaffMember
from salonshift.domain.policies import PriorityWeights
from salonshift.scheduling.availability import month_to_date_count, worked_on


@dataclass
class RankedCandidate:
    """A staff member with their selection priority for one date."""

    staff: StaffMember
    priority: int
    days_worked: int = 0
    is_fixed_work_day: bool = False
    worked_yesterday: bool = False


class StaffSelector:
    """Chooses which available staff work on a date.

    Candidates are ranked by an additive priority (see PriorityWeights) and
    the top ``required_count`` are taken. Ties keep the input order.
    """

    def __init__(self, weights: Optional[PriorityWeights] = None):
        self.weights = weights or PriorityWeights()

    def priority(
        self,
        staff: StaffMember,
        d: date,
        shifts_so_far: list[Shift],
        conditions: ShiftConditions,
    ) -> RankedCandidate:
        """Score one candidate for a date."""
        weights = self.weights
        score = 0

        condition = conditions.get_staff_condition(staff.id)
        fixed = bool(condition and d in condition.fixed_work_days)
        if fixed:
            score += weights.fixed_work_day_bonus

        # Fewer days worked means higher priority; goes negative past baseline
        days_worked = month_to_date_count(shifts_so_far, staff.id, d)
        score += (
            weights.load_balance_baseline_days - days_worked
        ) * weights.load_balance_weight

        score += staff.effective_skill_level * weights.skill_weight

        if is_weekend(d) and staff.position == Position.STYLIST:
            score += weights.weekend_stylist_bonus

        yesterday = worked_on(shifts_so_far, staff.id, d - timedelta(days=1))
        if yesterday:
            score -= weights.worked_yesterday_penalty

        return RankedCandidate(
            staff=staff,
            priority=score,
            days_worked=days_worked,
            is_fixed_work_day=fixed,
            worked_yesterday=yesterday,
        )

    def rank(
        self,
        available: Iterable[StaffMember],
        d: date,
        shifts_so_far: list[Shift],
        conditions: ShiftConditions,
    ) -> list[RankedCandidate]:
        """Rank candidates by descending priority (stable)."""
        ranked = [self.priority(s, d, shifts_so_far, conditions) for s in available]
        ranked.sort(key=lambda c: c.priority, reverse=True)
        return ranked

    def select(
        self,
        available: Iterable[StaffMember],
        required_count: int,
        d: date,
        shifts_so_far: list[Shift],
        conditions: ShiftConditions,
    ) -> list[StaffMember]:
        """Pick up to ``required_count`` staff, highest priority first."""
        ranked = self.rank(available, d, shifts_so_far, conditions)
        return [c.staff for c in ranked[: max(required_count, 0)]]


def select_staff(
    available: Iterable[StaffMember],
    required_count: int,
    d: date,
    shifts_so_far: list[Shift],
    conditions: ShiftConditions,
) -> list[StaffMember]:
    """Select staff for a date with the default priority weights."""
    return StaffSelector().select(available, required_count, d, shifts_so_far, conditions)
