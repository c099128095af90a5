"""Conversion of domain records to and from JSON-compatible dicts.

Dates and times are stored as ISO-8601 strings, enums by value and sets as
sorted lists.
"""

from datetime import date, datetime, time
from typing import Any, Optional

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


def _date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _hhmm(value: time) -> str:
    """HH:MM, or full ISO form when the time carries seconds."""
    if value.second or value.microsecond:
        return value.isoformat()
    return value.strftime("%H:%M")


def _time(value: str) -> time:
    return time.fromisoformat(value)


def _dates(values) -> list[str]:
    return [d.isoformat() for d in sorted(values)]


def staff_to_dict(staff: StaffMember) -> dict[str, Any]:
    return {
        "id": staff.id,
        "name": staff.name,
        "position": staff.position.value,
        "is_active": staff.is_active,
        "skill_level": staff.skill_level,
        "email": staff.email,
        "phone": staff.phone,
        "hire_date": _iso(staff.hire_date),
    }


def staff_from_dict(data: dict[str, Any]) -> StaffMember:
    return StaffMember(
        id=data["id"],
        name=data["name"],
        position=Position(data.get("position", Position.ASSISTANT.value)),
        is_active=data.get("is_active", True),
        skill_level=data.get("skill_level"),
        email=data.get("email", ""),
        phone=data.get("phone", ""),
        hire_date=_date(data.get("hire_date")),
    )


def template_to_dict(template: ShiftTemplate) -> dict[str, Any]:
    return {
        "id": template.id,
        "name": template.name,
        "start_time": _hhmm(template.start_time),
        "end_time": _hhmm(template.end_time),
        "break_duration_minutes": template.break_duration_minutes,
        "color": template.color,
        "is_active": template.is_active,
        "description": template.description,
    }


def template_from_dict(data: dict[str, Any]) -> ShiftTemplate:
    return ShiftTemplate(
        id=data["id"],
        name=data["name"],
        start_time=_time(data["start_time"]),
        end_time=_time(data["end_time"]),
        break_duration_minutes=data.get("break_duration_minutes", 60),
        color=data.get("color", "#3B82F6"),
        is_active=data.get("is_active", True),
        description=data.get("description", ""),
    )


def standards_to_dict(standards: LaborStandards) -> dict[str, Any]:
    return {
        "max_consecutive_work_days": standards.max_consecutive_work_days,
        "max_work_hours_per_day": standards.max_work_hours_per_day,
        "max_work_hours_per_week": standards.max_work_hours_per_week,
        "max_work_hours_per_month": standards.max_work_hours_per_month,
        "minimum_rest_days_per_week": standards.minimum_rest_days_per_week,
        "night_work_start": _hhmm(standards.night_work_start),
        "night_work_end": _hhmm(standards.night_work_end),
        "overtime_threshold_hours": standards.overtime_threshold_hours,
    }


def standards_from_dict(data: dict[str, Any]) -> LaborStandards:
    defaults = LaborStandards()
    return LaborStandards(
        max_consecutive_work_days=data.get(
            "max_consecutive_work_days", defaults.max_consecutive_work_days
        ),
        max_work_hours_per_day=data.get(
            "max_work_hours_per_day", defaults.max_work_hours_per_day
        ),
        max_work_hours_per_week=data.get(
            "max_work_hours_per_week", defaults.max_work_hours_per_week
        ),
        max_work_hours_per_month=data.get(
            "max_work_hours_per_month", defaults.max_work_hours_per_month
        ),
        minimum_rest_days_per_week=data.get(
            "minimum_rest_days_per_week", defaults.minimum_rest_days_per_week
        ),
        night_work_start=_time(data.get("night_work_start", "22:00")),
        night_work_end=_time(data.get("night_work_end", "05:00")),
        overtime_threshold_hours=data.get(
            "overtime_threshold_hours", defaults.overtime_threshold_hours
        ),
    )


def staff_condition_to_dict(condition: StaffCondition) -> dict[str, Any]:
    return {
        "staff_id": condition.staff_id,
        "staff_name": condition.staff_name,
        "max_work_days_per_month": condition.max_work_days_per_month,
        "min_work_days_per_month": condition.min_work_days_per_month,
        "fixed_work_days": _dates(condition.fixed_work_days),
        "fixed_off_days": _dates(condition.fixed_off_days),
        "preferred_template_ids": list(condition.preferred_template_ids),
        "max_consecutive_work_days": condition.max_consecutive_work_days,
        "notes": condition.notes,
    }


def staff_condition_from_dict(data: dict[str, Any]) -> StaffCondition:
    return StaffCondition(
        staff_id=data["staff_id"],
        staff_name=data.get("staff_name", ""),
        max_work_days_per_month=data.get("max_work_days_per_month"),
        min_work_days_per_month=data.get("min_work_days_per_month"),
        fixed_work_days={date.fromisoformat(d) for d in data.get("fixed_work_days", [])},
        fixed_off_days={date.fromisoformat(d) for d in data.get("fixed_off_days", [])},
        preferred_template_ids=list(data.get("preferred_template_ids", [])),
        max_consecutive_work_days=data.get("max_consecutive_work_days"),
        notes=data.get("notes", ""),
    )


def conditions_to_dict(conditions: ShiftConditions) -> dict[str, Any]:
    return {
        "id": conditions.id,
        "month": conditions.month,
        "regular_holidays": sorted(conditions.regular_holidays),
        "special_holidays": _dates(conditions.special_holidays),
        "staffing_mode": conditions.staffing_mode.value,
        "minimum_staff_count": conditions.minimum_staff_count,
        "maximum_absent_count": conditions.maximum_absent_count,
        "staff_conditions": [
            staff_condition_to_dict(c) for c in conditions.staff_conditions.values()
        ],
        "labor_standards": standards_to_dict(conditions.labor_standards),
        "deadline_days_before": conditions.deadline_days_before,
        "is_active": conditions.is_active,
        "created_at": _iso(conditions.created_at),
    }


def conditions_from_dict(data: dict[str, Any]) -> ShiftConditions:
    staff_conditions = [
        staff_condition_from_dict(c) for c in data.get("staff_conditions", [])
    ]
    return ShiftConditions(
        id=data["id"],
        month=data["month"],
        regular_holidays=set(data.get("regular_holidays", [])),
        special_holidays={
            date.fromisoformat(d) for d in data.get("special_holidays", [])
        },
        staffing_mode=StaffingMode(
            data.get("staffing_mode", StaffingMode.MINIMUM_REQUIRED.value)
        ),
        minimum_staff_count=data.get("minimum_staff_count", 2),
        maximum_absent_count=data.get("maximum_absent_count", 1),
        staff_conditions={c.staff_id: c for c in staff_conditions},
        labor_standards=standards_from_dict(data.get("labor_standards", {})),
        deadline_days_before=data.get("deadline_days_before", 10),
        is_active=data.get("is_active", True),
        created_at=_datetime(data.get("created_at")),
    )


def request_to_dict(request: ShiftRequest) -> dict[str, Any]:
    return {
        "id": request.id,
        "staff_id": request.staff_id,
        "staff_name": request.staff_name,
        "month": request.month,
        "day_off_requests": _dates(request.day_off_requests),
        "paid_leave_requests": _dates(request.paid_leave_requests),
        "status": request.status.value,
        "notes": request.notes,
        "submitted_at": _iso(request.submitted_at),
        "updated_at": _iso(request.updated_at),
    }


def request_from_dict(data: dict[str, Any]) -> ShiftRequest:
    return ShiftRequest(
        id=data["id"],
        staff_id=data["staff_id"],
        staff_name=data.get("staff_name", ""),
        month=data["month"],
        day_off_requests=[date.fromisoformat(d) for d in data.get("day_off_requests", [])],
        paid_leave_requests=[
            date.fromisoformat(d) for d in data.get("paid_leave_requests", [])
        ],
        status=RequestStatus(data.get("status", RequestStatus.PENDING.value)),
        notes=data.get("notes", ""),
        submitted_at=_datetime(data.get("submitted_at")),
        updated_at=_datetime(data.get("updated_at")),
    )


def shift_to_dict(shift: Shift) -> dict[str, Any]:
    return {
        "id": shift.id,
        "staff_id": shift.staff_id,
        "staff_name": shift.staff_name,
        "date": shift.shift_date.isoformat(),
        "start_time": _hhmm(shift.start_time),
        "end_time": _hhmm(shift.end_time),
        "break_duration_minutes": shift.break_duration_minutes,
        "template_id": shift.template_id,
        "template_name": shift.template_name,
        "position": shift.position.value if shift.position else None,
        "status": shift.status.value,
        "notes": shift.notes,
        "created_at": _iso(shift.created_at),
        "updated_at": _iso(shift.updated_at),
    }


def shift_from_dict(data: dict[str, Any]) -> Shift:
    position = data.get("position")
    return Shift(
        id=data["id"],
        staff_id=data["staff_id"],
        staff_name=data.get("staff_name", ""),
        shift_date=date.fromisoformat(data["date"]),
        start_time=_time(data["start_time"]),
        end_time=_time(data["end_time"]),
        break_duration_minutes=data.get("break_duration_minutes"),
        template_id=data.get("template_id"),
        template_name=data.get("template_name"),
        position=Position(position) if position else None,
        status=ShiftStatus(data.get("status", ShiftStatus.PENDING.value)),
        notes=data.get("notes", ""),
        created_at=_datetime(data.get("created_at")),
        updated_at=_datetime(data.get("updated_at")),
    )


def violation_to_dict(violation: LaborViolation) -> dict[str, Any]:
    return {
        "violation_type": violation.violation_type.value,
        "severity": violation.severity.value,
        "staff_id": violation.staff_id,
        "staff_name": violation.staff_name,
        "date": _iso(violation.violation_date),
        "details": violation.details,
        "suggestion": violation.suggestion,
    }


def violation_from_dict(data: dict[str, Any]) -> LaborViolation:
    return LaborViolation(
        violation_type=ViolationType(data["violation_type"]),
        severity=Severity(data["severity"]),
        staff_id=data["staff_id"],
        staff_name=data.get("staff_name", ""),
        violation_date=_date(data.get("date")),
        details=data.get("details", ""),
        suggestion=data.get("suggestion"),
    )


def schedule_to_dict(schedule: GeneratedSchedule) -> dict[str, Any]:
    return {
        "id": schedule.id,
        "month": schedule.month,
        "shifts": [shift_to_dict(s) for s in schedule.shifts],
        "conditions_id": schedule.conditions_id,
        "generated_at": _iso(schedule.generated_at),
        "is_approved": schedule.is_approved,
        "approved_at": _iso(schedule.approved_at),
        "approved_by": schedule.approved_by,
        "violations": [violation_to_dict(v) for v in schedule.violations],
        "score": schedule.score,
        "fulfillment_rate": schedule.fulfillment_rate,
        "shortfall_dates": _dates(schedule.shortfall_dates),
        "solver": schedule.solver,
    }


def schedule_from_dict(data: dict[str, Any]) -> GeneratedSchedule:
    return GeneratedSchedule(
        id=data["id"],
        month=data["month"],
        shifts=[shift_from_dict(s) for s in data.get("shifts", [])],
        conditions_id=data.get("conditions_id", ""),
        generated_at=_datetime(data.get("generated_at")),
        is_approved=data.get("is_approved", False),
        approved_at=_datetime(data.get("approved_at")),
        approved_by=data.get("approved_by"),
        violations=[violation_from_dict(v) for v in data.get("violations", [])],
        score=data.get("score", 0),
        fulfillment_rate=data.get("fulfillment_rate", 1.0),
        shortfall_dates=[date.fromisoformat(d) for d in data.get("shortfall_dates", [])],
        solver=data.get("solver", "heuristic"),
    )
