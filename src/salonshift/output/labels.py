"""Display labels for domain enums.

Domain enums carry stable English identifiers; what users see is looked up
here, per locale.
"""

from enum import Enum

from salonshift.domain.models import (
    Position,
    RequestStatus,
    Severity,
    ShiftStatus,
    StaffingMode,
    ViolationType,
)

DEFAULT_LOCALE = "en"

LABELS: dict[str, dict[Enum, str]] = {
    "en": {
        Position.STYLIST: "Stylist",
        Position.ASSISTANT: "Assistant",
        Position.RECEPTIONIST: "Receptionist",
        Position.MANAGER: "Manager",
        ShiftStatus.PENDING: "Pending",
        ShiftStatus.APPROVED: "Approved",
        ShiftStatus.REJECTED: "Rejected",
        RequestStatus.PENDING: "Pending",
        RequestStatus.APPROVED: "Approved",
        RequestStatus.REJECTED: "Rejected",
        StaffingMode.MINIMUM_REQUIRED: "Minimum staff",
        StaffingMode.MAXIMUM_ABSENT: "Maximum absences",
        ViolationType.CONSECUTIVE_DAYS: "Consecutive work days",
        ViolationType.DAILY_HOURS: "Daily hours",
        ViolationType.WEEKLY_HOURS: "Weekly hours",
        ViolationType.MONTHLY_HOURS: "Monthly hours",
        ViolationType.INSUFFICIENT_REST: "Insufficient rest",
        ViolationType.NIGHT_WORK: "Night work",
        Severity.WARNING: "Warning",
        Severity.ERROR: "Error",
        Severity.CRITICAL: "Critical",
    },
    "ja": {
        Position.STYLIST: "スタイリスト",
        Position.ASSISTANT: "アシスタント",
        Position.RECEPTIONIST: "受付",
        Position.MANAGER: "店長",
        ShiftStatus.PENDING: "申請中",
        ShiftStatus.APPROVED: "承認済み",
        ShiftStatus.REJECTED: "却下",
        RequestStatus.PENDING: "申請中",
        RequestStatus.APPROVED: "承認済み",
        RequestStatus.REJECTED: "却下",
        StaffingMode.MINIMUM_REQUIRED: "最低出勤人数",
        StaffingMode.MAXIMUM_ABSENT: "最大休み人数",
        ViolationType.CONSECUTIVE_DAYS: "連続勤務日数超過",
        ViolationType.DAILY_HOURS: "1日労働時間超過",
        ViolationType.WEEKLY_HOURS: "週労働時間超過",
        ViolationType.MONTHLY_HOURS: "月労働時間超過",
        ViolationType.INSUFFICIENT_REST: "休日不足",
        ViolationType.NIGHT_WORK: "深夜労働",
        Severity.WARNING: "警告",
        Severity.ERROR: "エラー",
        Severity.CRITICAL: "重大",
    },
}

WEEKDAY_NAMES = {
    "en": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    "ja": ["日", "月", "火", "水", "木", "金", "土"],
}


def label(value: Enum, locale: str = DEFAULT_LOCALE) -> str:
    """Display text for an enum member, falling back to English."""
    table = LABELS.get(locale, LABELS[DEFAULT_LOCALE])
    if value in table:
        return table[value]
    return LABELS[DEFAULT_LOCALE].get(value, str(value.value))


def weekday_name(index: int, locale: str = DEFAULT_LOCALE) -> str:
    """Short weekday name for an index with 0 = Sunday."""
    return WEEKDAY_NAMES.get(locale, WEEKDAY_NAMES[DEFAULT_LOCALE])[index]
