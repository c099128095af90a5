"""Monthly schedule generation and approval.

The ScheduleGenerator orchestrates a generation run for one month:
1. Load the month's active conditions, staff, approved requests and templates
2. Assign staff day by day (or plan the whole month with CP-SAT)
3. Stamp a shift for every assignment
4. Check the generated shifts for labor violations
5. Score the result and append it to the repository, awaiting approval
"""

import logging
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from salonshift.domain.calendar import month_dates, parse_month
from salonshift.domain.models import (
    GeneratedSchedule,
    LaborStandards,
    LaborViolation,
    Shift,
    ShiftConditions,
    ShiftTemplate,
    StaffMember,
    new_id,
    utcnow,
)
from salonshift.domain.policies import (
    ScoringPolicy,
    StaffingPolicy,
    fulfillment_rate,
    staffing_policy_for,
)
from salonshift.scheduling.availability import AvailabilityResolver
from salonshift.scheduling.cpsat_planner import CPSATPlanner, SolverConfig
from salonshift.scheduling.instantiator import ShiftInstantiator
from salonshift.scheduling.selector import StaffSelector
from salonshift.storage.locks import MonthLocks
from salonshift.storage.repository import ScheduleRepository
from salonshift.validation.compliance import LaborComplianceChecker

logger = logging.getLogger(__name__)


class SolverType(Enum):
    """Planner used to assign staff to days."""

    HEURISTIC = "heuristic"  # Day-by-day greedy selection
    CPSAT = "cpsat"  # Whole-month OR-Tools CP-SAT model
    HYBRID = "hybrid"  # CP-SAT, falling back to the heuristic


class ScheduleGenerator:
    """Generates, scores and approves monthly staff schedules.

    Example:
        >>> generator = ScheduleGenerator(InMemoryRepository())
        >>> schedule = generator.generate_schedule("2025-02")
        >>> generator.approve_schedule(schedule.id, "admin")
        True
    """

    def __init__(
        self,
        repository: ScheduleRepository,
        solver_type: SolverType = SolverType.HEURISTIC,
        selector: Optional[StaffSelector] = None,
        instantiator: Optional[ShiftInstantiator] = None,
        checker: Optional[LaborComplianceChecker] = None,
        scoring: Optional[ScoringPolicy] = None,
        solver_config: Optional[SolverConfig] = None,
        locks: Optional[MonthLocks] = None,
    ):
        self.repository = repository
        self.solver_type = solver_type
        self.selector = selector or StaffSelector()
        self.instantiator = instantiator or ShiftInstantiator()
        self.checker = checker or LaborComplianceChecker()
        self.scoring = scoring or ScoringPolicy()
        self.solver_config = solver_config or SolverConfig()
        self.locks = locks or repository.locks

    def generate_schedule(self, month: str) -> Optional[GeneratedSchedule]:
        """Generate a candidate schedule for a month.

        Args:
            month: Month key ("YYYY-MM").

        Returns:
            The new GeneratedSchedule, or None when the month has no active
            conditions.
        """
        parse_month(month)

        with self.locks.hold(month):
            conditions = self.repository.get_active_conditions(month)
            if conditions is None:
                logger.warning(f"No active shift conditions for {month}")
                return None

            roster = self.repository.list_active_staff()
            requests = self.repository.list_approved_shift_requests(month)
            templates = self.repository.list_active_templates()

            resolver = AvailabilityResolver(conditions, requests)
            policy = staffing_policy_for(conditions, len(roster))

            solver_name = SolverType.HEURISTIC.value
            plan = None
            if self.solver_type in (SolverType.CPSAT, SolverType.HYBRID):
                planner = CPSATPlanner(self.solver_config, self.selector.weights)
                result = planner.plan(month, roster, requests, conditions)
                if result.is_feasible:
                    plan = result.assignments
                    solver_name = SolverType.CPSAT.value
                elif self.solver_type == SolverType.CPSAT:
                    logger.error(
                        f"CP-SAT found no plan for {month} ({result.status}); "
                        f"no staff assigned"
                    )
                    plan = {}
                    solver_name = SolverType.CPSAT.value
                else:
                    logger.warning(
                        f"CP-SAT found no plan for {month} ({result.status}); "
                        f"falling back to heuristic"
                    )

            shifts, shortfall_dates = self._assign_month(
                month, roster, conditions, templates, resolver, policy, plan
            )

            violations = self.checker.check(shifts, conditions.labor_standards)
            rate = fulfillment_rate(requests, shifts)
            score = self.scoring.final_score(len(shortfall_dates), violations, rate)

            schedule = GeneratedSchedule(
                id=new_id(),
                month=month,
                shifts=shifts,
                conditions_id=conditions.id,
                generated_at=utcnow(),
                violations=violations,
                score=score,
                fulfillment_rate=rate,
                shortfall_dates=shortfall_dates,
                solver=solver_name,
            )
            self.repository.append_generated_schedule(schedule)

        logger.info(
            f"Generated {month} with {solver_name}: {len(shifts)} shifts, "
            f"{len(violations)} violations, {len(shortfall_dates)} shortfall days, "
            f"score {score}"
        )
        return schedule

    def _assign_month(
        self,
        month: str,
        roster: list[StaffMember],
        conditions: ShiftConditions,
        templates: list[ShiftTemplate],
        resolver: AvailabilityResolver,
        policy: StaffingPolicy,
        plan: Optional[dict[date, list[StaffMember]]] = None,
    ) -> tuple[list[Shift], list[date]]:
        """Walk the month's open days, assigning staff and stamping shifts.

        Without a plan, staff are picked greedily each day; earlier days'
        shifts feed the availability and priority of later days. With a plan,
        the planned staff are stamped as-is.
        """
        shifts: list[Shift] = []
        shortfall_dates: list[date] = []

        for d in month_dates(month):
            if conditions.is_closed(d):
                continue

            available = resolver.available_staff(roster, d, shifts)
            required = policy.required_headcount(len(available))

            if plan is None:
                selected = self.selector.select(
                    available, required, d, shifts, conditions
                )
            else:
                selected = plan.get(d, [])

            day_shifts = []
            for staff in selected:
                shift = self.instantiator.build_shift(staff, d, conditions, templates)
                if shift is not None:
                    day_shifts.append(shift)
            shifts.extend(day_shifts)

            if policy.is_short(len(available)) or len(day_shifts) < required:
                shortfall_dates.append(d)
                logger.warning(
                    f"Shortfall on {d.isoformat()}: {len(available)} available, "
                    f"{len(day_shifts)} scheduled, target {policy.target_headcount()}"
                )
            else:
                logger.debug(
                    f"{d.isoformat()}: scheduled {len(day_shifts)} of "
                    f"{len(available)} available"
                )

        return shifts, shortfall_dates

    def approve_schedule(self, schedule_id: str, approver_id: str) -> bool:
        """Commit a generated schedule as the month's live shifts.

        Every live shift of the schedule's month is replaced; other months
        are untouched. A schedule can only be approved once.

        Returns:
            True if approved, False if the schedule is unknown or already
            approved.
        """
        schedule = self.repository.get_generated_schedule(schedule_id)
        if schedule is None:
            logger.warning(f"Cannot approve unknown schedule {schedule_id}")
            return False

        with self.locks.hold(schedule.month):
            if schedule.is_approved:
                logger.warning(f"Schedule {schedule_id} is already approved")
                return False

            self.repository.replace_shifts_for_month(schedule.month, schedule.shifts)
            schedule.is_approved = True
            schedule.approved_at = utcnow()
            schedule.approved_by = approver_id
            self.repository.save_generated_schedule(schedule)

        logger.info(
            f"Schedule {schedule_id} for {schedule.month} approved by {approver_id}"
        )
        return True

    def check_compliance(
        self,
        shifts: Iterable[Shift],
        standards: LaborStandards,
    ) -> list[LaborViolation]:
        """Check shifts with the generator's compliance checker."""
        return self.checker.check(shifts, standards)
