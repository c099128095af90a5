"""Tests for calendar helpers and domain models."""

from datetime import date, time

import pytest

from salonshift.domain.calendar import (
    deadline_date,
    full_weeks,
    is_after_deadline,
    is_weekend,
    last_day,
    month_dates,
    month_key,
    parse_month,
    weekday_index,
)
from salonshift.domain.models import (
    GeneratedSchedule,
    LaborViolation,
    Severity,
    Shift,
    ShiftConditions,
    ShiftRequest,
    ShiftStatus,
    ShiftTemplate,
    StaffCondition,
    StaffMember,
    ViolationType,
)


class TestCalendar:
    """Tests for month and weekday helpers."""

    def test_parse_month(self):
        """Month keys parse into (year, month)."""
        assert parse_month("2025-02") == (2025, 2)

    @pytest.mark.parametrize("bad", ["2025-13", "2025/02", "feb", "2025-00"])
    def test_parse_month_rejects_bad_keys(self, bad):
        """Malformed month keys raise ValueError."""
        with pytest.raises(ValueError):
            parse_month(bad)

    def test_month_dates_february(self):
        """February 2025 has 28 dates in order."""
        dates = month_dates("2025-02")
        assert len(dates) == 28
        assert dates[0] == date(2025, 2, 1)
        assert dates[-1] == date(2025, 2, 28)

    def test_leap_year(self):
        """Leap-year February ends on the 29th."""
        assert last_day("2024-02") == date(2024, 2, 29)

    def test_month_key(self):
        """Dates format to zero-padded month keys."""
        assert month_key(date(2025, 3, 9)) == "2025-03"

    def test_weekday_index_sunday_is_zero(self):
        """Weekday indices count from Sunday."""
        assert weekday_index(date(2025, 2, 2)) == 0  # Sunday
        assert weekday_index(date(2025, 2, 3)) == 1  # Monday
        assert weekday_index(date(2025, 2, 8)) == 6  # Saturday

    def test_is_weekend(self):
        """Saturday and Sunday are weekend days."""
        assert is_weekend(date(2025, 2, 1))
        assert is_weekend(date(2025, 2, 2))
        assert not is_weekend(date(2025, 2, 3))

    def test_full_weeks_in_february(self):
        """Only whole Monday-Sunday weeks inside the range are listed."""
        mondays = full_weeks(date(2025, 2, 1), date(2025, 2, 28))
        assert mondays == [
            date(2025, 2, 3),
            date(2025, 2, 10),
            date(2025, 2, 17),
        ]

    def test_deadline_date(self):
        """Deadline is the month's last day minus the offset."""
        assert deadline_date("2025-02", 10) == date(2025, 2, 18)

    def test_is_after_deadline(self):
        """Requests are late only after the deadline day."""
        assert not is_after_deadline("2025-02", 10, today=date(2025, 2, 18))
        assert is_after_deadline("2025-02", 10, today=date(2025, 2, 19))


class TestShift:
    """Tests for Shift time arithmetic."""

    def _shift(self, start, end, break_minutes=None):
        return Shift(
            id="s1",
            staff_id="1",
            staff_name="Tanaka",
            shift_date=date(2025, 2, 3),
            start_time=start,
            end_time=end,
            break_duration_minutes=break_minutes,
        )

    def test_work_hours(self):
        """Work hours subtract the break from the span."""
        shift = self._shift(time(9, 0), time(18, 0), 60)
        assert shift.work_hours == 8.0

    def test_unset_break_defaults_to_sixty(self):
        """A break that was never recorded counts as 60 minutes."""
        shift = self._shift(time(9, 0), time(18, 0))
        assert shift.effective_break_minutes == 60
        assert shift.work_hours == 8.0

    def test_zero_break_is_honored(self):
        """An explicit zero-minute break is not replaced by the default."""
        shift = self._shift(time(14, 0), time(18, 0), 0)
        assert shift.work_hours == 4.0

    def test_month_and_status(self):
        """Shifts know their month and default to pending."""
        shift = self._shift(time(9, 0), time(17, 0))
        assert shift.month == "2025-02"
        assert shift.status == ShiftStatus.PENDING
        assert not shift.is_approved

    @pytest.mark.parametrize(
        "start,end", [(time(22, 0), time(2, 0)), (time(9, 0), time(9, 0))]
    )
    def test_end_must_follow_start(self, start, end):
        """Shifts that do not end after they start are rejected."""
        with pytest.raises(ValueError):
            self._shift(start, end)

    def test_times_must_be_times(self):
        """Start and end must be time values."""
        with pytest.raises(TypeError):
            self._shift("09:00", "17:00")


class TestRecords:
    """Tests for record validation and helpers."""

    def test_skill_level_range(self):
        """Skill level must be between 1 and 5."""
        with pytest.raises(ValueError):
            StaffMember(id="1", name="X", skill_level=6)
        assert StaffMember(id="1", name="X").effective_skill_level == 1

    def test_template_work_minutes(self):
        """Template work minutes exclude the break."""
        template = ShiftTemplate(
            id="t", name="Full-time", start_time=time(10, 0), end_time=time(19, 0),
            break_duration_minutes=90,
        )
        assert template.work_minutes == 450
        with pytest.raises(ValueError):
            ShiftTemplate(id="t", name="Night", start_time=time(22, 0), end_time=time(6, 0))

    def test_request_lists_must_be_disjoint(self):
        """A date cannot be both a day off and paid leave."""
        with pytest.raises(ValueError):
            ShiftRequest(
                id="r",
                staff_id="1",
                staff_name="X",
                month="2025-02",
                day_off_requests=[date(2025, 2, 10)],
                paid_leave_requests=[date(2025, 2, 10)],
            )

    def test_request_requests_off(self):
        """Both request lists mark dates off."""
        request = ShiftRequest(
            id="r",
            staff_id="1",
            staff_name="X",
            month="2025-02",
            day_off_requests=[date(2025, 2, 10)],
            paid_leave_requests=[date(2025, 2, 14)],
        )
        assert request.requests_off(date(2025, 2, 10))
        assert request.requests_off(date(2025, 2, 14))
        assert not request.requests_off(date(2025, 2, 11))

    def test_regular_holidays_validated(self):
        """Regular holidays must be weekday indices."""
        with pytest.raises(ValueError):
            ShiftConditions(id="c", month="2025-02", regular_holidays={7})

    def test_is_closed(self):
        """Regular and special holidays close the salon."""
        conditions = ShiftConditions(
            id="c",
            month="2025-02",
            regular_holidays={0},
            special_holidays={date(2025, 2, 11)},
        )
        assert conditions.is_closed(date(2025, 2, 2))  # Sunday
        assert conditions.is_closed(date(2025, 2, 11))
        assert not conditions.is_closed(date(2025, 2, 3))

    def test_consecutive_day_cap_uses_stricter_value(self):
        """A personal cap only applies when stricter than the labor standard."""
        conditions = ShiftConditions(
            id="c",
            month="2025-02",
            staff_conditions={
                "1": StaffCondition(staff_id="1", max_consecutive_work_days=3),
                "2": StaffCondition(staff_id="2", max_consecutive_work_days=10),
            },
        )
        assert conditions.consecutive_day_cap("1") == 3
        assert conditions.consecutive_day_cap("2") == 6
        assert conditions.consecutive_day_cap("3") == 6

    def test_violation_str(self):
        """Violations render severity, type, staff and date."""
        violation = LaborViolation(
            violation_type=ViolationType.NIGHT_WORK,
            severity=Severity.WARNING,
            staff_id="1",
            staff_name="Tanaka",
            violation_date=date(2025, 2, 3),
            details="late",
        )
        text = str(violation)
        assert "warning:night_work" in text
        assert "Tanaka" in text
        assert "2025-02-03" in text


class TestGeneratedSchedule:
    """Tests for GeneratedSchedule summaries."""

    def test_summary_counts(self):
        """Summary aggregates days, hours and violations."""
        shifts = [
            Shift(
                id=f"s{i}",
                staff_id="1",
                staff_name="Tanaka",
                shift_date=date(2025, 2, 3 + i),
                start_time=time(9, 0),
                end_time=time(17, 0),
                break_duration_minutes=60,
            )
            for i in range(3)
        ]
        schedule = GeneratedSchedule(
            id="g",
            month="2025-02",
            shifts=shifts,
            violations=[
                LaborViolation(ViolationType.DAILY_HOURS, Severity.ERROR, "1"),
            ],
        )
        summary = schedule.get_summary()
        assert summary["total_shifts"] == 3
        assert summary["days_by_staff"] == {"1": 3}
        assert summary["total_work_hours"] == 21.0
        assert summary["violations"]["error"] == 1
        assert schedule.get_headcount_by_day()[date(2025, 2, 4)] == 1
        assert [s.id for s in schedule.get_staff_shifts("1")] == ["s0", "s1", "s2"]
