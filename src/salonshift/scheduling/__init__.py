"""Scheduling engine components."""

from salonshift.scheduling.availability import (
    AvailabilityResolver,
    ExclusionReason,
    available_staff,
)
from salonshift.scheduling.cpsat_planner import CPSATPlanner, PlanResult, SolverConfig
from salonshift.scheduling.generator import ScheduleGenerator, SolverType
from salonshift.scheduling.instantiator import ShiftInstantiator, build_shift
from salonshift.scheduling.selector import RankedCandidate, StaffSelector, select_staff
from salonshift.scheduling.shift_manager import ShiftManager, shift_stats

__all__ = [
    # Availability
    "AvailabilityResolver",
    "ExclusionReason",
    "available_staff",
    # Selection
    "RankedCandidate",
    "StaffSelector",
    "select_staff",
    # Instantiation
    "ShiftInstantiator",
    "build_shift",
    # CP-SAT
    "CPSATPlanner",
    "PlanResult",
    "SolverConfig",
    # Orchestration
    "ScheduleGenerator",
    "SolverType",
    # Manual edits
    "ShiftManager",
    "shift_stats",
]
