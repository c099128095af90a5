"""Domain models for the salon scheduling system.

This module contains all core data structures used throughout the scheduling
system: staff, shift templates, requests, monthly conditions, shifts, labor
violations and generated schedules.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional

from salonshift.domain.calendar import month_key, weekday_index

DEFAULT_BREAK_MINUTES = 60


def new_id() -> str:
    """Generate a unique record identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def minutes_of_day(t: time) -> int:
    """Minutes from midnight for a time of day."""
    return t.hour * 60 + t.minute


class Position(Enum):
    """Staff positions in the salon."""

    STYLIST = "stylist"
    ASSISTANT = "assistant"
    RECEPTIONIST = "receptionist"
    MANAGER = "manager"


class ShiftStatus(Enum):
    """Workflow status of a shift."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestStatus(Enum):
    """Workflow status of a staff member's day-off request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class StaffingMode(Enum):
    """How the daily staffing target is expressed."""

    MINIMUM_REQUIRED = "minimum_required"  # At least N staff at work
    MAXIMUM_ABSENT = "maximum_absent"  # At most N staff away


class ViolationType(Enum):
    """Kinds of labor-standard violations."""

    CONSECUTIVE_DAYS = "consecutive_work_days"
    DAILY_HOURS = "daily_hours"
    WEEKLY_HOURS = "weekly_hours"
    MONTHLY_HOURS = "monthly_hours"
    INSUFFICIENT_REST = "insufficient_rest"
    NIGHT_WORK = "night_work"


class Severity(Enum):
    """Severity of a labor violation."""

    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class StaffMember:
    """A member of the salon roster.

    Attributes:
        id: Unique identifier for the staff member.
        name: Display name.
        position: Position held in the salon.
        is_active: Inactive staff are never scheduled.
        skill_level: Optional skill rating from 1 (junior) to 5 (senior).
    """

    id: str
    name: str
    position: Position = Position.ASSISTANT
    is_active: bool = True
    skill_level: Optional[int] = None
    email: str = ""
    phone: str = ""
    hire_date: Optional[date] = None

    def __post_init__(self):
        if self.skill_level is not None and not 1 <= self.skill_level <= 5:
            raise ValueError(
                f"skill_level must be between 1 and 5, got {self.skill_level}"
            )

    @property
    def effective_skill_level(self) -> int:
        """Skill level used for ranking (unset counts as 1)."""
        return self.skill_level or 1


@dataclass
class ShiftTemplate:
    """A reusable named work-time pattern.

    Attributes:
        id: Unique identifier.
        name: Display name (e.g. "Early", "Full Day").
        start_time: Shift start time.
        end_time: Shift end time (same day).
        break_duration_minutes: Unpaid break length.
        color: Calendar display color.
        is_active: Inactive templates are never used for new shifts.
    """

    id: str
    name: str
    start_time: time
    end_time: time
    break_duration_minutes: int = DEFAULT_BREAK_MINUTES
    color: str = "#3B82F6"
    is_active: bool = True
    description: str = ""

    def __post_init__(self):
        if self.end_time <= self.start_time:
            raise ValueError(f"Template {self.name!r} must end after it starts")

    @property
    def work_minutes(self) -> int:
        """Paid work time of a shift stamped from this template."""
        span = minutes_of_day(self.end_time) - minutes_of_day(self.start_time)
        return span - self.break_duration_minutes


@dataclass
class Shift:
    """One scheduled work interval for one staff member on one date.

    Attributes:
        id: Unique identifier.
        staff_id: ID of the staff member.
        staff_name: Staff display name at creation time.
        shift_date: Date of the shift.
        start_time: Start time.
        end_time: End time (same day; shifts never cross midnight).
        break_duration_minutes: Break length, None when not recorded.
        template_id: Template the shift was stamped from, if any.
        status: Workflow status. Only approved shifts are checked for compliance.
    """

    id: str
    staff_id: str
    staff_name: str
    shift_date: date
    start_time: time
    end_time: time
    break_duration_minutes: Optional[int] = None
    template_id: Optional[str] = None
    template_name: Optional[str] = None
    position: Optional[Position] = None
    status: ShiftStatus = ShiftStatus.PENDING
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.start_time, time) or not isinstance(self.end_time, time):
            raise TypeError("Shift start_time and end_time must be datetime.time values")
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Shift must end after it starts, got "
                f"{self.start_time.isoformat()}-{self.end_time.isoformat()}"
            )

    @property
    def month(self) -> str:
        """Month key of the shift date."""
        return month_key(self.shift_date)

    @property
    def is_approved(self) -> bool:
        return self.status == ShiftStatus.APPROVED

    @property
    def span_minutes(self) -> int:
        """Minutes between start and end, breaks included."""
        return minutes_of_day(self.end_time) - minutes_of_day(self.start_time)

    @property
    def effective_break_minutes(self) -> int:
        """Break length, defaulting to 60 minutes when not recorded."""
        if self.break_duration_minutes is None:
            return DEFAULT_BREAK_MINUTES
        return self.break_duration_minutes

    @property
    def work_minutes(self) -> int:
        """Paid work time (span minus break)."""
        return self.span_minutes - self.effective_break_minutes

    @property
    def work_hours(self) -> float:
        return self.work_minutes / 60.0


@dataclass
class LaborStandards:
    """Labor-standard limits evaluated by the compliance checker.

    Defaults follow common Japanese labor-standard settings:
    - 6 consecutive work days at most
    - 8 hours per day, 40 per week, 160 per month
    - 1 rest day per week
    - Night work between 22:00 and 05:00
    """

    max_consecutive_work_days: int = 6
    max_work_hours_per_day: float = 8
    max_work_hours_per_week: float = 40
    max_work_hours_per_month: float = 160
    minimum_rest_days_per_week: int = 1
    night_work_start: time = time(22, 0)
    night_work_end: time = time(5, 0)
    overtime_threshold_hours: float = 8


@dataclass
class StaffCondition:
    """Per-staff overrides within a month's shift conditions.

    Attributes:
        staff_id: ID of the staff member the overrides apply to.
        max_work_days_per_month: Hard cap on shifts this month, if set.
        min_work_days_per_month: Soft floor on shifts this month, if set.
        fixed_work_days: Dates the staff member must be scheduled if available.
        fixed_off_days: Dates the staff member must never be scheduled.
        preferred_template_ids: Templates to use, in preference order.
        max_consecutive_work_days: Personal consecutive-day cap, if stricter.
    """

    staff_id: str
    staff_name: str = ""
    max_work_days_per_month: Optional[int] = None
    min_work_days_per_month: Optional[int] = None
    fixed_work_days: set[date] = field(default_factory=set)
    fixed_off_days: set[date] = field(default_factory=set)
    preferred_template_ids: list[str] = field(default_factory=list)
    max_consecutive_work_days: Optional[int] = None
    notes: str = ""


@dataclass
class ShiftConditions:
    """The administrator's scheduling policy for one month.

    Attributes:
        id: Unique identifier.
        month: Month key ("YYYY-MM") the conditions apply to.
        regular_holidays: Closed weekdays (0 = Sunday ... 6 = Saturday).
        special_holidays: Explicit closed dates.
        staffing_mode: Whether the target is a minimum headcount or a maximum absence.
        minimum_staff_count: Headcount for MINIMUM_REQUIRED mode.
        maximum_absent_count: Allowed absences for MAXIMUM_ABSENT mode.
        staff_conditions: Per-staff overrides keyed by staff ID.
        labor_standards: Limits for the compliance checker.
        deadline_days_before: Request cutoff, in days before the month's last day.
        is_active: Only one record per month is active at a time.
    """

    id: str
    month: str
    regular_holidays: set[int] = field(default_factory=set)
    special_holidays: set[date] = field(default_factory=set)
    staffing_mode: StaffingMode = StaffingMode.MINIMUM_REQUIRED
    minimum_staff_count: int = 2
    maximum_absent_count: int = 1
    staff_conditions: dict[str, StaffCondition] = field(default_factory=dict)
    labor_standards: LaborStandards = field(default_factory=LaborStandards)
    deadline_days_before: int = 10
    is_active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self):
        invalid = [d for d in self.regular_holidays if not 0 <= d <= 6]
        if invalid:
            raise ValueError(f"Regular holidays must be weekday indices 0-6, got {invalid}")

    def get_staff_condition(self, staff_id: str) -> Optional[StaffCondition]:
        """Get the per-staff overrides for a staff member, if any."""
        return self.staff_conditions.get(staff_id)

    def is_closed(self, d: date) -> bool:
        """Check if the salon is closed on a date."""
        return weekday_index(d) in self.regular_holidays or d in self.special_holidays

    def consecutive_day_cap(self, staff_id: str) -> int:
        """Consecutive work-day cap for a staff member.

        The labor-standard cap, tightened by the staff member's personal cap
        when one is configured.
        """
        cap = self.labor_standards.max_consecutive_work_days
        condition = self.get_staff_condition(staff_id)
        if condition and condition.max_consecutive_work_days is not None:
            cap = min(cap, condition.max_consecutive_work_days)
        return cap


@dataclass
class ShiftRequest:
    """A staff member's day-off and paid-leave wishes for one month.

    Attributes:
        id: Unique identifier.
        staff_id: ID of the requesting staff member.
        month: Month key the request applies to.
        day_off_requests: Dates requested as days off.
        paid_leave_requests: Dates requested as paid leave.
        status: Only approved requests are honored by generation.
    """

    id: str
    staff_id: str
    staff_name: str
    month: str
    day_off_requests: list[date] = field(default_factory=list)
    paid_leave_requests: list[date] = field(default_factory=list)
    status: RequestStatus = RequestStatus.PENDING
    notes: str = ""
    submitted_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        overlap = set(self.day_off_requests) & set(self.paid_leave_requests)
        if overlap:
            raise ValueError(
                f"Dates cannot be both day-off and paid-leave requests: "
                f"{sorted(d.isoformat() for d in overlap)}"
            )

    @property
    def requested_dates(self) -> list[date]:
        """All requested dates, day-off requests first."""
        return list(self.day_off_requests) + list(self.paid_leave_requests)

    def requests_off(self, d: date) -> bool:
        """Check if the request asks for a date off."""
        return d in self.day_off_requests or d in self.paid_leave_requests


@dataclass
class LaborViolation:
    """A detected breach of a configured labor-standard rule.

    Attributes:
        violation_type: Which rule was breached.
        severity: How serious the breach is.
        staff_id: ID of the affected staff member.
        violation_date: Offending date, None for month-level findings.
        details: Human-readable description.
        suggestion: Optional remediation hint.
    """

    violation_type: ViolationType
    severity: Severity
    staff_id: str
    staff_name: str = ""
    violation_date: Optional[date] = None
    details: str = ""
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"[{self.severity.value}:{self.violation_type.value}]"]
        parts.append(f"{self.staff_name or self.staff_id}:")
        parts.append(self.details)
        if self.violation_date is not None:
            parts.append(f"({self.violation_date.isoformat()})")
        return " ".join(parts)


@dataclass
class GeneratedSchedule:
    """Output of one generation run: a candidate month awaiting approval.

    Attributes:
        id: Unique identifier.
        month: Month key the schedule covers.
        shifts: Generated shifts in date order.
        conditions_id: ID of the ShiftConditions used.
        generated_at: When the run finished.
        is_approved: Set once, when an administrator commits the schedule.
        approved_at: Approval time.
        approved_by: ID of the approving administrator.
        violations: Labor violations found in the generated shifts.
        score: Quality score from 0 to 100.
        fulfillment_rate: Share of requested days off that were honored.
        shortfall_dates: Open days that could not be staffed to target.
        solver: Name of the planner that produced the shifts.
    """

    id: str
    month: str
    shifts: list[Shift] = field(default_factory=list)
    conditions_id: str = ""
    generated_at: Optional[datetime] = None
    is_approved: bool = False
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    violations: list[LaborViolation] = field(default_factory=list)
    score: int = 0
    fulfillment_rate: float = 1.0
    shortfall_dates: list[date] = field(default_factory=list)
    solver: str = "heuristic"

    def get_staff_shifts(self, staff_id: str) -> list[Shift]:
        """Get all shifts for a staff member, in date order."""
        return sorted(
            (s for s in self.shifts if s.staff_id == staff_id),
            key=lambda s: s.shift_date,
        )

    def get_shifts_on(self, d: date) -> list[Shift]:
        """Get all shifts on a date."""
        return [s for s in self.shifts if s.shift_date == d]

    def get_headcount_by_day(self) -> dict[date, int]:
        """Number of shifts per scheduled date."""
        counts: dict[date, int] = {}
        for shift in self.shifts:
            counts[shift.shift_date] = counts.get(shift.shift_date, 0) + 1
        return dict(sorted(counts.items()))

    def violation_counts(self) -> dict[Severity, int]:
        """Number of violations per severity."""
        counts = {severity: 0 for severity in Severity}
        for violation in self.violations:
            counts[violation.severity] += 1
        return counts

    def get_summary(self) -> dict:
        """Get summary statistics for the generated schedule."""
        days_by_staff: dict[str, int] = {}
        hours_by_staff: dict[str, float] = {}
        for shift in self.shifts:
            days_by_staff[shift.staff_id] = days_by_staff.get(shift.staff_id, 0) + 1
            hours_by_staff[shift.staff_id] = (
                hours_by_staff.get(shift.staff_id, 0.0) + shift.work_hours
            )

        return {
            "month": self.month,
            "total_shifts": len(self.shifts),
            "total_work_hours": sum(hours_by_staff.values()),
            "days_by_staff": days_by_staff,
            "hours_by_staff": hours_by_staff,
            "headcount_by_day": self.get_headcount_by_day(),
            "violations": {s.value: n for s, n in self.violation_counts().items()},
            "shortfall_days": len(self.shortfall_dates),
            "fulfillment_rate": self.fulfillment_rate,
            "score": self.score,
        }
