"""Text reports for generated schedules.

The report shows:
- Run summary (score, fulfillment rate, shortfall days)
- A staff-by-day roster grid for the month
- Daily headcount
- Labor violations grouped by severity
"""

from pathlib import Path
from typing import Union

from salonshift.domain.calendar import month_dates, weekday_index
from salonshift.domain.models import GeneratedSchedule, Severity, StaffMember
from salonshift.output.labels import DEFAULT_LOCALE, label, weekday_name


class ReportGenerator:
    """Generates a plain-text report for one generated schedule."""

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale

    def generate(
        self,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
        output_path: Union[str, Path],
    ) -> str:
        """Generate the report and save it to a file.

        Args:
            schedule: The schedule to report on.
            roster: Staff to show as grid rows, in display order.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(schedule, roster)
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def generate_to_string(
        self,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
    ) -> str:
        return self._generate_content(schedule, roster)

    def _generate_content(
        self,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
    ) -> str:
        lines = []

        lines.append("=" * 80)
        lines.append(f"SHIFT SCHEDULE - {schedule.month}")
        lines.append("=" * 80)
        lines.append("")

        summary = schedule.get_summary()
        status = "approved" if schedule.is_approved else "awaiting approval"
        lines.append(f"Schedule ID: {schedule.id} ({status})")
        if schedule.is_approved:
            lines.append(f"Approved by: {schedule.approved_by}")
        lines.append(f"Planner: {schedule.solver}")
        lines.append(f"Score: {schedule.score}/100")
        lines.append(f"Request fulfillment: {schedule.fulfillment_rate * 100:.1f}%")
        lines.append(f"Total shifts: {summary['total_shifts']}")
        lines.append(f"Total work hours: {summary['total_work_hours']:.1f}")
        lines.append(f"Shortfall days: {summary['shortfall_days']}")
        lines.append("")

        # Roster grid: one row per staff member, one column per day
        dates = month_dates(schedule.month)
        worked = {(s.staff_id, s.shift_date): s for s in schedule.shifts}

        lines.append("-" * 80)
        lines.append("ROSTER")
        lines.append("-" * 80)
        lines.append(f"{'':<16}" + "".join(f"{d.day:>3}" for d in dates))
        lines.append(
            f"{'':<16}"
            + "".join(f"{weekday_name(weekday_index(d), 'en')[:2]:>3}" for d in dates)
        )
        for staff in roster:
            cells = []
            for d in dates:
                shift = worked.get((staff.id, d))
                if shift is None:
                    cells.append("  .")
                else:
                    mark = (shift.template_name or "X")[:1].upper()
                    cells.append(f"  {mark}")
            days = summary["days_by_staff"].get(staff.id, 0)
            hours = summary["hours_by_staff"].get(staff.id, 0.0)
            lines.append(
                f"{staff.name[:15]:<16}" + "".join(cells) + f"  {days:>2}d {hours:>5.1f}h"
            )
        lines.append("")

        lines.append("-" * 80)
        lines.append("DAILY HEADCOUNT")
        lines.append("-" * 80)
        headcount = schedule.get_headcount_by_day()
        shortfall = set(schedule.shortfall_dates)
        for d in dates:
            count = headcount.get(d, 0)
            if count == 0 and d not in shortfall:
                continue
            flag = "  SHORT" if d in shortfall else ""
            day_name = weekday_name(weekday_index(d), self.locale)
            lines.append(f"{d.isoformat()} {day_name}: {'#' * count} ({count}){flag}")
        lines.append("")

        lines.append("-" * 80)
        lines.append("LABOR VIOLATIONS")
        lines.append("-" * 80)
        if not schedule.violations:
            lines.append("None")
        for severity in (Severity.CRITICAL, Severity.ERROR, Severity.WARNING):
            group = [v for v in schedule.violations if v.severity == severity]
            if not group:
                continue
            lines.append(f"\n{label(severity, self.locale)} ({len(group)}):")
            for violation in group:
                when = (
                    violation.violation_date.isoformat()
                    if violation.violation_date
                    else schedule.month
                )
                lines.append(
                    f"  {when} {violation.staff_name or violation.staff_id}: "
                    f"{label(violation.violation_type, self.locale)} - {violation.details}"
                )
                if violation.suggestion:
                    lines.append(f"      -> {violation.suggestion}")

        lines.append("")
        lines.append("=" * 80)
        lines.append("END OF REPORT")
        lines.append("=" * 80)

        return "\n".join(lines)
