"""PDF generation for monthly schedules.

This module creates printable PDF rosters showing:
- A staff-by-day grid colored by shift template
- Daily headcount with shortfall days marked
- A summary page with score and labor violations
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from salonshift.domain.calendar import is_weekend, month_dates, weekday_index
from salonshift.domain.models import GeneratedSchedule, Severity, ShiftTemplate, StaffMember
from salonshift.output.labels import DEFAULT_LOCALE, label, weekday_name

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "weekend": (0.93, 0.95, 1.0),  # Pale blue
    "shortfall": (1.0, 0.85, 0.85),  # Light red
    "grid": (0.75, 0.75, 0.75),
    "default_shift": (0.4, 0.6, 0.9),
    Severity.CRITICAL: (0.8, 0.1, 0.1),
    Severity.ERROR: (0.9, 0.45, 0.1),
    Severity.WARNING: (0.85, 0.7, 0.1),
}

JAPANESE_FONT = "HeiseiKakuGo-W5"


def _hex_to_rgb(value: str) -> tuple[float, float, float]:
    value = value.lstrip("#")
    if len(value) != 6:
        return COLORS["default_shift"]
    try:
        return tuple(int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return COLORS["default_shift"]


class PDFGenerator:
    """Generates printable monthly roster PDFs.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(schedule, roster, "roster.pdf")
    """

    def __init__(
        self,
        page_width: float = 842,  # A4 landscape width
        page_height: float = 595,  # A4 landscape height
        margin: float = 30,
        locale: str = DEFAULT_LOCALE,
        templates: Optional[list[ShiftTemplate]] = None,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.locale = locale
        self.templates = {t.id: t for t in templates or []}
        self.font = "Helvetica"
        self.bold_font = "Helvetica-Bold"

    def _canvas(self, target):
        try:
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        if self.locale == "ja":
            from reportlab.pdfbase import pdfmetrics
            from reportlab.pdfbase.cidfonts import UnicodeCIDFont

            pdfmetrics.registerFont(UnicodeCIDFont(JAPANESE_FONT))
            self.font = self.bold_font = JAPANESE_FONT

        return canvas.Canvas(target, pagesize=(self.page_width, self.page_height))

    def generate(
        self,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
        output_path: Union[str, Path],
        include_summary: bool = True,
    ) -> None:
        """Generate the roster PDF and save to file.

        Args:
            schedule: The schedule to render.
            roster: Staff to show as grid rows, in display order.
            output_path: Path to save the PDF.
            include_summary: Whether to add the summary and violations page.
        """
        c = self._canvas(str(output_path))
        self._draw_roster_pages(c, schedule, roster)
        if include_summary:
            self._draw_summary_page(c, schedule)
        c.save()

    def generate_to_buffer(
        self,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate the roster PDF into a bytes buffer."""
        buffer = BytesIO()
        c = self._canvas(buffer)
        self._draw_roster_pages(c, schedule, roster)
        if include_summary:
            self._draw_summary_page(c, schedule)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_roster_pages(
        self,
        c,
        schedule: GeneratedSchedule,
        roster: list[StaffMember],
    ) -> None:
        """Draw the staff-by-day grid, paginating over staff rows."""
        dates = month_dates(schedule.month)
        shifts = {(s.staff_id, s.shift_date): s for s in schedule.shifts}
        colors = self._template_colors(schedule)
        shortfall = set(schedule.shortfall_dates)
        headcount = schedule.get_headcount_by_day()

        row_height = 22
        header_height = 70
        footer_height = 50
        name_width = 110
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(int(usable_height / row_height) - 1, 1)

        grid_left = self.margin + name_width
        cell_width = (self.page_width - self.margin - grid_left) / len(dates)

        pages = [roster[i : i + rows_per_page] for i in range(0, len(roster), rows_per_page)]
        pages = pages or [[]]
        for page_num, page_staff in enumerate(pages, 1):
            c.setFont(self.bold_font, 16)
            c.drawString(
                self.margin,
                self.page_height - self.margin - 20,
                f"Shift Roster - {schedule.month}",
            )
            c.setFont(self.font, 10)
            c.drawString(
                self.margin,
                self.page_height - self.margin - 36,
                f"Score {schedule.score}/100 | Shifts {len(schedule.shifts)} | "
                f"Shortfall days {len(shortfall)}",
            )

            # Day header
            y = self.page_height - self.margin - header_height
            c.setFont(self.font, 7)
            for i, d in enumerate(dates):
                x = grid_left + i * cell_width
                if d in shortfall:
                    c.setFillColorRGB(*COLORS["shortfall"])
                    c.rect(x, y, cell_width, row_height, fill=1, stroke=0)
                elif is_weekend(d):
                    c.setFillColorRGB(*COLORS["weekend"])
                    c.rect(x, y, cell_width, row_height, fill=1, stroke=0)
                c.setFillColorRGB(0, 0, 0)
                c.drawCentredString(x + cell_width / 2, y + 12, str(d.day))
                c.drawCentredString(
                    x + cell_width / 2, y + 3, weekday_name(weekday_index(d), self.locale)
                )

            for staff in page_staff:
                y -= row_height
                c.setFillColorRGB(0, 0, 0)
                c.setFont(self.font, 9)
                c.drawString(self.margin, y + 8, staff.name[:18])

                for i, d in enumerate(dates):
                    x = grid_left + i * cell_width
                    shift = shifts.get((staff.id, d))
                    if shift is not None:
                        c.setFillColorRGB(*colors.get(shift.template_id, COLORS["default_shift"]))
                        c.rect(x + 1, y + 1, cell_width - 2, row_height - 2, fill=1, stroke=0)
                        c.setFillColorRGB(1, 1, 1)
                        c.setFont(self.bold_font, 7)
                        c.drawCentredString(
                            x + cell_width / 2,
                            y + 8,
                            (shift.template_name or "")[:1].upper(),
                        )
                    c.setStrokeColorRGB(*COLORS["grid"])
                    c.setLineWidth(0.3)
                    c.rect(x, y, cell_width, row_height, fill=0, stroke=1)

            # Headcount row
            y -= row_height
            c.setFillColorRGB(0, 0, 0)
            c.setFont(self.bold_font, 8)
            c.drawString(self.margin, y + 8, "Headcount")
            c.setFont(self.font, 8)
            for i, d in enumerate(dates):
                x = grid_left + i * cell_width
                count = headcount.get(d, 0)
                if count:
                    c.drawCentredString(x + cell_width / 2, y + 8, str(count))

            self._draw_legend(c, schedule, self.margin, self.margin + 20)

            c.setFont(self.font, 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_num} of {len(pages)}",
            )
            c.showPage()

    def _template_colors(self, schedule: GeneratedSchedule) -> dict:
        """Display color per template used in the schedule.

        Templates passed to the generator contribute their own color; others
        get one from a fixed palette.
        """
        palette = [
            (0.35, 0.55, 0.85),
            (0.3, 0.65, 0.4),
            (0.85, 0.55, 0.2),
            (0.6, 0.4, 0.7),
            (0.5, 0.5, 0.5),
        ]
        colors = {}
        for shift in schedule.shifts:
            if shift.template_id in colors:
                continue
            template = self.templates.get(shift.template_id)
            if template is not None:
                colors[shift.template_id] = _hex_to_rgb(template.color)
            else:
                colors[shift.template_id] = palette[len(colors) % len(palette)]
        return colors

    def _draw_legend(self, c, schedule: GeneratedSchedule, x: float, y: float) -> None:
        """Draw legend mapping colors to template names."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont(self.bold_font, 8)
        c.drawString(x, y, "Legend:")

        names = {}
        for shift in schedule.shifts:
            names.setdefault(shift.template_id, shift.template_name or "-")
        colors = self._template_colors(schedule)

        c.setFont(self.font, 7)
        current_x = x + 45
        for template_id, name in names.items():
            c.setFillColorRGB(*colors[template_id])
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, name[:14])
            current_x += 90

        c.setFillColorRGB(*COLORS["shortfall"])
        c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
        c.setFillColorRGB(0, 0, 0)
        c.drawString(current_x + 15, y, "Shortfall")

    def _draw_summary_page(self, c, schedule: GeneratedSchedule) -> None:
        """Draw summary statistics and the labor violation list."""
        c.setFont(self.bold_font, 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Schedule Summary - {schedule.month}",
        )

        y = self.page_height - self.margin - 55
        c.setFont(self.font, 10)
        summary = schedule.get_summary()
        stats = [
            f"Score: {schedule.score}/100",
            f"Request fulfillment: {schedule.fulfillment_rate * 100:.1f}%",
            f"Total shifts: {summary['total_shifts']}",
            f"Total work hours: {summary['total_work_hours']:.1f}",
            f"Shortfall days: {summary['shortfall_days']}",
            f"Planner: {schedule.solver}",
        ]
        for stat in stats:
            c.drawString(self.margin + 20, y, stat)
            y -= 15

        y -= 15
        c.setFont(self.bold_font, 12)
        c.drawString(self.margin, y, f"Labor Violations ({len(schedule.violations)})")
        y -= 18

        c.setFont(self.font, 9)
        for violation in schedule.violations:
            if y < self.margin + 20:
                c.showPage()
                y = self.page_height - self.margin - 20
                c.setFont(self.font, 9)

            c.setFillColorRGB(*COLORS[violation.severity])
            c.rect(self.margin + 20, y - 2, 8, 8, fill=1, stroke=0)
            c.setFillColorRGB(0, 0, 0)
            when = (
                violation.violation_date.isoformat()
                if violation.violation_date
                else schedule.month
            )
            c.drawString(
                self.margin + 35,
                y,
                f"{when}  {violation.staff_name or violation.staff_id}  "
                f"[{label(violation.severity, self.locale)}] "
                f"{label(violation.violation_type, self.locale)}: {violation.details}",
            )
            y -= 14

        c.showPage()
