"""Tests for text reports, labels and PDF output."""

from datetime import date, time

import pytest

from salonshift.domain.models import (
    GeneratedSchedule,
    LaborViolation,
    Position,
    Severity,
    Shift,
    ShiftStatus,
    ShiftTemplate,
    StaffMember,
    ViolationType,
)
from salonshift.output.labels import label, weekday_name
from salonshift.output.pdf_generator import PDFGenerator, _hex_to_rgb
from salonshift.output.report_generator import ReportGenerator


@pytest.fixture
def roster():
    return [
        StaffMember(id="1", name="Misaki Tanaka", position=Position.STYLIST),
        StaffMember(id="2", name="Taro Suzuki"),
    ]


@pytest.fixture
def schedule():
    shifts = [
        Shift(
            id=f"s{i}",
            staff_id="1",
            staff_name="Misaki Tanaka",
            shift_date=date(2025, 2, 3 + i),
            start_time=time(9, 0),
            end_time=time(17, 0),
            break_duration_minutes=60,
            template_id="template-1",
            template_name="Early",
            status=ShiftStatus.APPROVED,
        )
        for i in range(3)
    ]
    return GeneratedSchedule(
        id="g1",
        month="2025-02",
        shifts=shifts,
        violations=[
            LaborViolation(
                violation_type=ViolationType.NIGHT_WORK,
                severity=Severity.WARNING,
                staff_id="1",
                staff_name="Misaki Tanaka",
                violation_date=date(2025, 2, 3),
                details="Shift overlaps night hours",
                suggestion="Night work requires special arrangements",
            ),
            LaborViolation(
                violation_type=ViolationType.MONTHLY_HOURS,
                severity=Severity.ERROR,
                staff_id="2",
                staff_name="Taro Suzuki",
                details="Monthly work time 170h",
            ),
        ],
        score=72,
        fulfillment_rate=0.5,
        shortfall_dates=[date(2025, 2, 6)],
    )


class TestLabels:
    """Tests for display labels."""

    def test_english_and_japanese(self):
        """Enums have labels in both locales."""
        assert label(Position.STYLIST) == "Stylist"
        assert label(Position.STYLIST, "ja") == "スタイリスト"
        assert label(ViolationType.NIGHT_WORK, "ja") == "深夜労働"

    def test_unknown_locale_falls_back(self):
        """Unknown locales use English labels."""
        assert label(Severity.CRITICAL, "fr") == "Critical"

    def test_every_enum_labelled(self):
        """Every member of every labelled enum has a label in each locale."""
        for enum_type in (Position, ShiftStatus, Severity, ViolationType):
            for member in enum_type:
                assert label(member, "en") != str(member.value)
                assert label(member, "ja")

    def test_weekday_names(self):
        """Weekday names count from Sunday."""
        assert weekday_name(0) == "Sun"
        assert weekday_name(1, "ja") == "月"


class TestReportGenerator:
    """Tests for the text report."""

    def test_report_sections(self, schedule, roster):
        """The report has a summary, the roster grid and violations."""
        report = ReportGenerator().generate_to_string(schedule, roster)

        assert "SHIFT SCHEDULE - 2025-02" in report
        assert "Score: 72/100" in report
        assert "Request fulfillment: 50.0%" in report
        assert "Shortfall days: 1" in report
        assert "Misaki Tanaka" in report
        assert "Taro Suzuki" in report
        assert "2025-02-06 Thu:  (0)  SHORT" in report
        assert "Warning (1):" in report
        assert "Error (1):" in report
        assert "-> Night work requires special arrangements" in report

    def test_roster_row_counts(self, schedule, roster):
        """Roster rows end with days and hours worked."""
        report = ReportGenerator().generate_to_string(schedule, roster)
        row = next(line for line in report.splitlines() if line.startswith("Misaki"))
        assert row.count("E") == 3
        assert row.rstrip().endswith("3d  21.0h")

    def test_japanese_labels(self, schedule, roster):
        """Japanese locale uses Japanese labels."""
        report = ReportGenerator(locale="ja").generate_to_string(schedule, roster)
        assert "警告 (1):" in report
        assert "深夜労働" in report

    def test_no_violations(self, schedule, roster):
        """Clean schedules say so."""
        schedule.violations = []
        report = ReportGenerator().generate_to_string(schedule, roster)
        assert "LABOR VIOLATIONS" in report
        assert "\nNone\n" in report

    def test_write_file(self, schedule, roster, tmp_path):
        """generate writes the same text it returns."""
        path = tmp_path / "report.txt"
        content = ReportGenerator().generate(schedule, roster, path)
        assert path.read_text(encoding="utf-8") == content


class TestPDFGenerator:
    """Tests for PDF output."""

    def test_hex_to_rgb(self):
        """Hex colors convert to 0-1 RGB, with a fallback for bad input."""
        assert _hex_to_rgb("#FF0000") == (1.0, 0.0, 0.0)
        assert _hex_to_rgb("nope") == _hex_to_rgb("#zzzzzz")

    def test_template_colors(self, schedule):
        """Known templates contribute their own color."""
        templates = [
            ShiftTemplate(
                id="template-1",
                name="Early",
                start_time=time(9, 0),
                end_time=time(17, 0),
                color="#000000",
            )
        ]
        generator = PDFGenerator(templates=templates)
        assert generator._template_colors(schedule) == {"template-1": (0.0, 0.0, 0.0)}

    def test_generate_to_buffer(self, schedule, roster):
        """The buffer holds a PDF document."""
        pytest.importorskip("reportlab")
        buffer = PDFGenerator().generate_to_buffer(schedule, roster)
        assert buffer.read(4) == b"%PDF"

    def test_generate_file(self, schedule, roster, tmp_path):
        """PDFs can be written to disk, with or without the summary page."""
        pytest.importorskip("reportlab")
        path = tmp_path / "roster.pdf"
        PDFGenerator().generate(schedule, roster, path, include_summary=False)
        assert path.read_bytes().startswith(b"%PDF")

    def test_japanese_pdf(self, schedule, roster):
        """Japanese output registers a CJK font."""
        pytest.importorskip("reportlab")
        generator = PDFGenerator(locale="ja")
        buffer = generator.generate_to_buffer(schedule, roster)
        assert buffer.read(4) == b"%PDF"
        assert generator.font == "HeiseiKakuGo-W5"
