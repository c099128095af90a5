"""Domain models and business rules for scheduling."""

from salonshift.domain.calendar import (
    deadline_date,
    is_after_deadline,
    month_dates,
    month_key,
    weekday_index,
)
from salonshift.domain.models import (
    GeneratedSchedule,
    LaborStandards,
    LaborViolation,
    Position,
    RequestStatus,
    Severity,
    Shift,
    ShiftConditions,
    ShiftRequest,
    ShiftStatus,
    ShiftTemplate,
    StaffCondition,
    StaffingMode,
    StaffMember,
    ViolationType,
)
from salonshift.domain.policies import (
    MaximumAbsentPolicy,
    MinimumRequiredPolicy,
    PriorityWeights,
    ScoringPolicy,
    StaffingPolicy,
    fulfillment_rate,
    required_headcount,
    staffing_policy_for,
)

__all__ = [
    # Calendar
    "deadline_date",
    "is_after_deadline",
    "month_dates",
    "month_key",
    "weekday_index",
    # Models
    "GeneratedSchedule",
    "LaborStandards",
    "LaborViolation",
    "Position",
    "RequestStatus",
    "Severity",
    "Shift",
    "ShiftConditions",
    "ShiftRequest",
    "ShiftStatus",
    "ShiftTemplate",
    "StaffCondition",
    "StaffingMode",
    "StaffMember",
    "ViolationType",
    # Policies
    "MaximumAbsentPolicy",
    "MinimumRequiredPolicy",
    "PriorityWeights",
    "ScoringPolicy",
    "StaffingPolicy",
    "fulfillment_rate",
    "required_headcount",
    "staffing_policy_for",
]
