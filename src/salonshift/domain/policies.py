"""Policy definitions for scheduling rules.

This module contains configurable policies that define business rules for
staffing levels, staff prioritization and schedule scoring. Policies are kept
separate from the scheduling engine to allow independent testing and easy
modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from salonshift.domain.models import (
    LaborViolation,
    Severity,
    Shift,
    ShiftConditions,
    ShiftRequest,
    StaffingMode,
)

# Staff selector weights
FIXED_WORK_DAY_BONUS = 1000
LOAD_BALANCE_BASELINE_DAYS = 20
LOAD_BALANCE_WEIGHT = 10
SKILL_WEIGHT = 5
WEEKEND_STYLIST_BONUS = 15
WORKED_YESTERDAY_PENALTY = 5

# Schedule scoring
BASE_SCORE = 100
SHORTFALL_PENALTY = 10
FULFILLMENT_BONUS = 20
SEVERITY_PENALTIES = {
    Severity.CRITICAL: 20,
    Severity.ERROR: 10,
    Severity.WARNING: 5,
}


class StaffingPolicy(ABC):
    """Abstract base class for daily staffing-level policies."""

    @abstractmethod
    def target_headcount(self) -> int:
        """Headcount the policy asks for, regardless of availability."""
        pass

    @abstractmethod
    def required_headcount(self, available_count: int) -> int:
        """Headcount to schedule on a day with ``available_count`` eligible staff."""
        pass

    def is_short(self, available_count: int) -> bool:
        """Check if availability falls below the policy's target."""
        return available_count < self.target_headcount()


@dataclass
class MinimumRequiredPolicy(StaffingPolicy):
    """At least ``minimum_staff_count`` staff must work each open day.

    Never demands more staff than are actually available that day.
    """

    minimum_staff_count: int = 2

    def target_headcount(self) -> int:
        return self.minimum_staff_count

    def required_headcount(self, available_count: int) -> int:
        return min(self.minimum_staff_count, available_count)


@dataclass
class MaximumAbsentPolicy(StaffingPolicy):
    """At most ``maximum_absent_count`` active staff may be off each open day.

    At least one person is always required.
    """

    total_active_staff: int
    maximum_absent_count: int = 1

    def target_headcount(self) -> int:
        return max(self.total_active_staff - self.maximum_absent_count, 1)

    def required_headcount(self, available_count: int) -> int:
        return self.target_headcount()


def staffing_policy_for(
    conditions: ShiftConditions,
    total_active_staff: int,
) -> StaffingPolicy:
    """Build the staffing policy described by a month's conditions."""
    if conditions.staffing_mode == StaffingMode.MAXIMUM_ABSENT:
        return MaximumAbsentPolicy(
            total_active_staff=total_active_staff,
            maximum_absent_count=conditions.maximum_absent_count,
        )
    return MinimumRequiredPolicy(minimum_staff_count=conditions.minimum_staff_count)


def required_headcount(
    conditions: ShiftConditions,
    available_count: int,
    total_active_staff: int,
) -> int:
    """Concrete headcount target for a day under a month's conditions."""
    policy = staffing_policy_for(conditions, total_active_staff)
    return policy.required_headcount(available_count)


@dataclass(frozen=True)
class PriorityWeights:
    """Weights of the additive staff-priority score.

    Priority for a candidate on a date is the sum of:
    - ``fixed_work_day_bonus`` if the date is one of their fixed work days
    - ``(load_balance_baseline_days - days_worked_this_month) * load_balance_weight``
      (may go negative past the baseline)
    - ``skill_level * skill_weight`` (unset skill counts as 1)
    - ``weekend_stylist_bonus`` for stylists on Saturday and Sunday
    - ``-worked_yesterday_penalty`` if they worked the previous day
    """

    fixed_work_day_bonus: int = FIXED_WORK_DAY_BONUS
    load_balance_baseline_days: int = LOAD_BALANCE_BASELINE_DAYS
    load_balance_weight: int = LOAD_BALANCE_WEIGHT
    skill_weight: int = SKILL_WEIGHT
    weekend_stylist_bonus: int = WEEKEND_STYLIST_BONUS
    worked_yesterday_penalty: int = WORKED_YESTERDAY_PENALTY


@dataclass
class ScoringPolicy:
    """Schedule quality scoring.

    score = base - shortfall_days * shortfall_penalty
                 - sum(severity penalty per violation)
                 + fulfillment_rate * fulfillment_bonus

    rounded and clamped to [min_score, max_score].
    """

    base_score: int = BASE_SCORE
    shortfall_penalty: int = SHORTFALL_PENALTY
    fulfillment_bonus: int = FULFILLMENT_BONUS
    severity_penalties: dict[Severity, int] = field(
        default_factory=lambda: dict(SEVERITY_PENALTIES)
    )
    min_score: int = 0
    max_score: int = 100

    def violation_penalty(self, violations: Iterable[LaborViolation]) -> int:
        """Total penalty for a set of violations."""
        return sum(self.severity_penalties.get(v.severity, 0) for v in violations)

    def final_score(
        self,
        shortfall_days: int,
        violations: Iterable[LaborViolation],
        fulfillment_rate: float,
    ) -> int:
        """Compute the clamped integer quality score."""
        score = self.base_score - shortfall_days * self.shortfall_penalty
        score -= self.violation_penalty(violations)
        score += fulfillment_rate * self.fulfillment_bonus
        return max(self.min_score, min(self.max_score, int(round(score))))


def fulfillment_rate(requests: Iterable[ShiftRequest], shifts: Iterable[Shift]) -> float:
    """Fraction of requested day-off/paid-leave dates left unscheduled.

    Returns 1.0 when there were no requested dates at all.
    """
    scheduled = {(s.staff_id, s.shift_date) for s in shifts}
    total = 0
    honored = 0
    for request in requests:
        for requested in request.requested_dates:
            total += 1
            if (request.staff_id, requested) not in scheduled:
                honored += 1
    return honored / total if total else 1.0
