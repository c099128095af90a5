"""OR-Tools CP-SAT planner for whole-month staff assignment.

The greedy generator decides one day at a time. This planner instead
formulates the month as a single constraint model, so a staff member's
fixed work days, monthly floor and fair share of days can be traded off
across the whole month.

Hard rules match the greedy pipeline: requested and fixed days off, closed
days, the consecutive-day cap, the monthly work-day cap and the daily
required headcount as an upper bound. Staffing the full headcount, the
monthly floor and fixed work days are soft goals.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ortools.sat.python import cp_model

from salonshift.domain.calendar import is_weekend, month_dates
from salonshift.domain.models import Position, ShiftConditions, ShiftRequest, StaffMember
from salonshift.domain.policies import PriorityWeights, staffing_policy_for
from salonshift.scheduling.availability import AvailabilityResolver

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the CP-SAT planner.

    Attributes:
        time_limit_seconds: Maximum solver runtime.
        num_workers: Number of parallel workers (0 = auto).
        understaffing_penalty: Cost per missing person per day.
        min_days_penalty: Cost per day below a staff member's monthly floor.
        balance_weight: Cost per day of spread between the busiest and the
            least busy staff member.
    """

    time_limit_seconds: float = 10.0
    num_workers: int = 0
    understaffing_penalty: int = 5000
    min_days_penalty: int = 100
    balance_weight: int = 20


@dataclass
class PlanResult:
    """Result from the CP-SAT planner.

    Attributes:
        assignments: Staff to schedule per open day, in roster order.
        status: Solver status (OPTIMAL, FEASIBLE, etc.).
        objective_value: Final objective value.
        solve_time_seconds: Time taken to solve.
    """

    assignments: dict[date, list[StaffMember]] = field(default_factory=dict)
    status: str = "UNKNOWN"
    objective_value: int = 0
    solve_time_seconds: float = 0.0

    @property
    def is_optimal(self) -> bool:
        return self.status == "OPTIMAL"

    @property
    def is_feasible(self) -> bool:
        return self.status in ("OPTIMAL", "FEASIBLE")


class CPSATPlanner:
    """Plans a month of staff assignments with OR-Tools CP-SAT."""

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        weights: Optional[PriorityWeights] = None,
    ):
        self.config = config or SolverConfig()
        self.weights = weights or PriorityWeights()

    def _priority(
        self,
        staff: StaffMember,
        d: date,
        conditions: ShiftConditions,
    ) -> int:
        """Static part of the selector priority (no run-dependent terms)."""
        score = staff.effective_skill_level * self.weights.skill_weight
        if is_weekend(d) and staff.position == Position.STYLIST:
            score += self.weights.weekend_stylist_bonus
        condition = conditions.get_staff_condition(staff.id)
        if condition and d in condition.fixed_work_days:
            score += self.weights.fixed_work_day_bonus
        return score

    def plan(
        self,
        month: str,
        roster: list[StaffMember],
        requests: Iterable[ShiftRequest],
        conditions: ShiftConditions,
    ) -> PlanResult:
        """Solve the month's assignment problem.

        Args:
            month: Month key to plan.
            roster: Active staff, in display order.
            requests: Approved shift requests for the month.
            conditions: The month's active conditions.

        Returns:
            PlanResult with per-day assignments when a feasible plan exists.
        """
        model = cp_model.CpModel()
        dates = month_dates(month)
        open_days = [d for d in dates if not conditions.is_closed(d)]
        resolver = AvailabilityResolver(conditions, requests)
        policy = staffing_policy_for(conditions, len(roster))

        # Decision variables: x[(staff, day)] = 1 if the staff member works that day
        x: dict[tuple[str, date], cp_model.IntVar] = {}
        for staff in roster:
            condition = conditions.get_staff_condition(staff.id)
            fixed_off = condition.fixed_off_days if condition else set()
            blocked = resolver.requested_off(staff.id) | fixed_off
            for d in open_days:
                if d not in blocked:
                    x[(staff.id, d)] = model.NewBoolVar(f"x_{staff.id}_{d.isoformat()}")

        objective_terms = []

        # Daily headcount: never above the requirement, penalized below it
        for d in open_days:
            day_vars = [x[(s.id, d)] for s in roster if (s.id, d) in x]
            required = policy.required_headcount(len(day_vars))
            if not day_vars:
                continue
            model.Add(sum(day_vars) <= required)
            under = model.NewIntVar(0, required, f"under_{d.isoformat()}")
            model.Add(sum(day_vars) + under >= required)
            objective_terms.append(-under * self.config.understaffing_penalty)

        days_worked = []
        for staff in roster:
            staff_vars = [x[(staff.id, d)] for d in dates if (staff.id, d) in x]
            condition = conditions.get_staff_condition(staff.id)

            # Consecutive cap over every window of cap + 1 calendar days
            cap = conditions.consecutive_day_cap(staff.id)
            for i in range(len(dates) - cap):
                window = [
                    x[(staff.id, d)] for d in dates[i : i + cap + 1] if (staff.id, d) in x
                ]
                if len(window) > cap:
                    model.Add(sum(window) <= cap)

            total = model.NewIntVar(0, len(dates), f"days_{staff.id}")
            model.Add(total == sum(staff_vars))
            days_worked.append(total)

            if condition and condition.max_work_days_per_month is not None:
                model.Add(total <= condition.max_work_days_per_month)

            if condition and condition.min_work_days_per_month:
                floor = condition.min_work_days_per_month
                short = model.NewIntVar(0, floor, f"short_{staff.id}")
                model.Add(total + short >= floor)
                objective_terms.append(-short * self.config.min_days_penalty)

            for d in dates:
                if (staff.id, d) in x:
                    objective_terms.append(
                        x[(staff.id, d)] * self._priority(staff, d, conditions)
                    )

        # Fairness: keep the spread of days worked small
        if days_worked and self.config.balance_weight > 0:
            most = model.NewIntVar(0, len(dates), "most_days")
            least = model.NewIntVar(0, len(dates), "least_days")
            model.AddMaxEquality(most, days_worked)
            model.AddMinEquality(least, days_worked)
            objective_terms.append(-(most - least) * self.config.balance_weight)

        if objective_terms:
            model.Maximize(sum(objective_terms))

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.config.time_limit_seconds
        if self.config.num_workers > 0:
            solver.parameters.num_workers = self.config.num_workers

        status = solver.Solve(model)

        status_map = {
            cp_model.OPTIMAL: "OPTIMAL",
            cp_model.FEASIBLE: "FEASIBLE",
            cp_model.INFEASIBLE: "INFEASIBLE",
            cp_model.MODEL_INVALID: "MODEL_INVALID",
            cp_model.UNKNOWN: "UNKNOWN",
        }
        status_str = status_map.get(status, "UNKNOWN")
        logger.info(
            f"CP-SAT plan for {month}: {status_str} in {solver.WallTime():.2f}s"
        )

        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            return PlanResult(status=status_str, solve_time_seconds=solver.WallTime())

        assignments: dict[date, list[StaffMember]] = {}
        for d in open_days:
            assignments[d] = [
                staff
                for staff in roster
                if (staff.id, d) in x and solver.Value(x[(staff.id, d)]) == 1
            ]

        return PlanResult(
            assignments=assignments,
            status=status_str,
            objective_value=int(solver.ObjectiveValue()),
            solve_time_seconds=solver.WallTime(),
        )
