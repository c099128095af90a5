"""Command-line interface for the salon shift scheduling engine."""

import argparse
import logging
import sys
from datetime import time
from pathlib import Path
from typing import Optional

from salonshift.domain.calendar import deadline_date, first_day, month_dates
from salonshift.domain.models import (
    LaborStandards,
    Position,
    RequestStatus,
    Severity,
    ShiftConditions,
    ShiftRequest,
    ShiftTemplate,
    StaffCondition,
    StaffingMode,
    StaffMember,
)
from salonshift.output.pdf_generator import PDFGenerator
from salonshift.output.report_generator import ReportGenerator
from salonshift.scheduling.cpsat_planner import SolverConfig
from salonshift.scheduling.generator import ScheduleGenerator, SolverType
from salonshift.storage.errors import SalonShiftError
from salonshift.storage.json_repository import JsonFileRepository
from salonshift.storage.repository import InMemoryRepository, ScheduleRepository
from salonshift.validation.compliance import check_compliance

DEFAULT_MONTH = "2025-02"


def create_sample_templates() -> list[ShiftTemplate]:
    """Create the salon's standard shift templates."""
    return [
        ShiftTemplate(
            id="template-1",
            name="Early",
            start_time=time(9, 0),
            end_time=time(17, 0),
            break_duration_minutes=60,
            color="#3B82F6",
            description="Opening preparation through late afternoon",
        ),
        ShiftTemplate(
            id="template-2",
            name="Late",
            start_time=time(12, 0),
            end_time=time(20, 0),
            break_duration_minutes=60,
            color="#EF4444",
            description="Midday through closing",
        ),
        ShiftTemplate(
            id="template-3",
            name="Full-time",
            start_time=time(10, 0),
            end_time=time(19, 0),
            break_duration_minutes=90,
            color="#10B981",
            description="Full working day",
        ),
        ShiftTemplate(
            id="template-4",
            name="Short",
            start_time=time(14, 0),
            end_time=time(18, 0),
            break_duration_minutes=0,
            color="#F59E0B",
            description="Short afternoon shift",
        ),
    ]


def create_sample_staff(count: int = 5) -> list[StaffMember]:
    """Create sample staff for testing.

    Args:
        count: Number of staff members to create.
    """
    core = [
        ("Misaki Tanaka", Position.STYLIST, 5),
        ("Hanako Yamada", Position.STYLIST, 4),
        ("Taro Suzuki", Position.ASSISTANT, 2),
        ("Keiko Sato", Position.RECEPTIONIST, 3),
        ("Ichiro Takahashi", Position.MANAGER, 5),
    ]

    staff = []
    for i in range(count):
        if i < len(core):
            name, position, skill = core[i]
        else:
            name, position, skill = f"Staff {i + 1}", Position.ASSISTANT, 3
        staff.append(
            StaffMember(
                id=str(i + 1),
                name=name,
                position=position,
                skill_level=skill,
                email=f"staff{i + 1}@salon.example",
            )
        )
    return staff


def create_sample_conditions(
    month: str,
    staff: list[StaffMember],
) -> ShiftConditions:
    """Create sample conditions: closed weekends, two staff minimum."""
    staff_conditions = {}
    if len(staff) > 0:
        staff_conditions[staff[0].id] = StaffCondition(
            staff_id=staff[0].id,
            staff_name=staff[0].name,
            max_work_days_per_month=22,
            min_work_days_per_month=18,
            preferred_template_ids=["template-1", "template-3"],
            notes="Senior stylist, prioritize on busy days",
        )
    if len(staff) > 1:
        staff_conditions[staff[1].id] = StaffCondition(
            staff_id=staff[1].id,
            staff_name=staff[1].name,
            max_work_days_per_month=20,
            min_work_days_per_month=16,
            preferred_template_ids=["template-2", "template-3"],
            notes="Prefers evening work",
        )

    return ShiftConditions(
        id=f"conditions-{month}",
        month=month,
        regular_holidays={0, 6},
        staffing_mode=StaffingMode.MINIMUM_REQUIRED,
        minimum_staff_count=2,
        staff_conditions=staff_conditions,
        labor_standards=LaborStandards(),
        deadline_days_before=10,
    )


def create_sample_requests(month: str, staff: list[StaffMember]) -> list[ShiftRequest]:
    """Create one approved and one pending day-off request."""
    paid_leave = first_day(month).replace(day=14)
    dates = month_dates(month)
    mondays = [d for d in dates if d.weekday() == 0]
    requests = []

    if len(staff) > 0:
        requests.append(
            ShiftRequest(
                id=f"request-{month}-1",
                staff_id=staff[0].id,
                staff_name=staff[0].name,
                month=month,
                day_off_requests=[d for d in mondays[1:4] if d != paid_leave],
                paid_leave_requests=[paid_leave],
                status=RequestStatus.APPROVED,
                notes="Family commitments",
            )
        )
    if len(staff) > 1:
        requests.append(
            ShiftRequest(
                id=f"request-{month}-2",
                staff_id=staff[1].id,
                staff_name=staff[1].name,
                month=month,
                day_off_requests=mondays[:4],
                status=RequestStatus.PENDING,
            )
        )
    return requests


def seed_repository(
    repository: ScheduleRepository,
    month: str = DEFAULT_MONTH,
    count: int = 5,
) -> None:
    """Fill a repository with sample templates, staff, conditions and requests."""
    staff = create_sample_staff(count)
    for template in create_sample_templates():
        repository.add_template(template)
    for member in staff:
        repository.add_staff(member)
    repository.add_conditions(create_sample_conditions(month, staff))
    for request in create_sample_requests(month, staff):
        repository.submit_shift_request(request)


def _print_schedule(schedule) -> None:
    summary = schedule.get_summary()
    print(f"\n{'=' * 60}")
    print(f"Generated Schedule: {schedule.month}")
    print(f"{'=' * 60}")
    print(f"  ID: {schedule.id}")
    print(f"  Planner: {schedule.solver}")
    print(f"  Total Shifts: {summary['total_shifts']}")
    print(f"  Total Work Hours: {summary['total_work_hours']:.1f}")
    print(f"  Request Fulfillment: {schedule.fulfillment_rate * 100:.1f}%")
    print(f"  Score: {schedule.score}/100")

    if schedule.shortfall_dates:
        print(f"\nShortfall Days ({len(schedule.shortfall_dates)}):")
        for d in schedule.shortfall_dates:
            print(f"  {d} ({d.strftime('%a')})")

    counts = schedule.violation_counts()
    print(
        f"\nLabor Violations: {len(schedule.violations)} "
        f"(critical {counts[Severity.CRITICAL]}, error {counts[Severity.ERROR]}, "
        f"warning {counts[Severity.WARNING]})"
    )
    for violation in schedule.violations[:10]:
        print(f"    - {violation}")
    if len(schedule.violations) > 10:
        print(f"    ... and {len(schedule.violations) - 10} more")


def _write_outputs(
    schedule,
    repository: ScheduleRepository,
    pdf_path: Optional[str],
    text_path: Optional[str],
    locale: str = "en",
) -> None:
    roster = repository.list_staff()
    if pdf_path:
        generator = PDFGenerator(locale=locale, templates=repository.list_templates())
        generator.generate(schedule, roster, pdf_path)
        print(f"\nPDF saved to: {pdf_path}")
    if text_path:
        ReportGenerator(locale=locale).generate(schedule, roster, text_path)
        print(f"Report saved to: {text_path}")


def run_demo(
    month: str = DEFAULT_MONTH,
    count: int = 5,
    solver: str = "heuristic",
    output_path: Optional[str] = None,
    report_path: Optional[str] = None,
    data_path: Optional[str] = None,
) -> int:
    """Run a demo generation over sample data.

    Args:
        month: Month to schedule.
        count: Number of staff members.
        solver: Planner to use (heuristic, cpsat, hybrid).
        output_path: Optional PDF output path.
        report_path: Optional text report path.
        data_path: Optional JSON file to keep the demo store in.
    """
    if data_path and Path(data_path).exists():
        print(f"Store {data_path} already exists; choose a new path for demo data")
        return 1

    print(f"Generating demo schedule for {count} staff in {month}...")

    repository = JsonFileRepository(data_path) if data_path else InMemoryRepository()
    seed_repository(repository, month, count)

    conditions = repository.get_active_conditions(month)
    print(f"  Solver: {solver}")
    print(f"  Request deadline: {deadline_date(month, conditions.deadline_days_before)}")

    generator = ScheduleGenerator(repository, solver_type=SolverType(solver))
    schedule = generator.generate_schedule(month)
    _print_schedule(schedule)
    _write_outputs(schedule, repository, output_path, report_path)
    if data_path:
        print(f"Store saved to: {data_path}")
    return 0


def run_generate(data_path: str, month: str, solver: str, time_limit: float) -> int:
    repository = JsonFileRepository(data_path)
    generator = ScheduleGenerator(
        repository,
        solver_type=SolverType(solver),
        solver_config=SolverConfig(time_limit_seconds=time_limit),
    )
    schedule = generator.generate_schedule(month)
    if schedule is None:
        print(f"No active shift conditions configured for {month}")
        return 1
    _print_schedule(schedule)
    return 0


def run_approve(data_path: str, schedule_id: str, approver: str) -> int:
    repository = JsonFileRepository(data_path)
    generator = ScheduleGenerator(repository)
    if not generator.approve_schedule(schedule_id, approver):
        print(f"Schedule {schedule_id} not found or already approved")
        return 1
    schedule = repository.get_generated_schedule(schedule_id)
    print(
        f"Approved schedule {schedule_id}: {len(schedule.shifts)} shifts "
        f"now live for {schedule.month}"
    )
    return 0


def run_check(data_path: str, month: str, weekly_hours: bool = False) -> int:
    repository = JsonFileRepository(data_path)
    conditions = repository.get_active_conditions(month)
    standards = conditions.labor_standards if conditions else LaborStandards()
    shifts = repository.list_shifts_for_month(month)

    violations = check_compliance(shifts, standards, enforce_weekly_hours=weekly_hours)
    print(f"Checked {len(shifts)} live shifts for {month}")
    if not violations:
        print("Compliance: PASSED")
        return 0

    print(f"Compliance: {len(violations)} violations")
    for violation in violations:
        print(f"    - {violation}")
    return 1


def run_report(
    data_path: str,
    schedule_id: str,
    output_path: Optional[str],
    text_path: Optional[str],
    locale: str,
) -> int:
    repository = JsonFileRepository(data_path)
    schedule = repository.get_generated_schedule(schedule_id)
    if schedule is None:
        print(f"Schedule {schedule_id} not found")
        return 1
    if not output_path and not text_path:
        print(ReportGenerator(locale=locale).generate_to_string(schedule, repository.list_staff()))
        return 0
    _write_outputs(schedule, repository, output_path, text_path, locale)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="salonshift - Salon Staff Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                          Run demo with 5 staff for 2025-02
  %(prog)s demo --solver cpsat           Plan the month with CP-SAT
  %(prog)s demo --data salon.json        Keep the demo store on disk

  %(prog)s generate --data salon.json --month 2025-02
  %(prog)s approve --data salon.json --id <schedule-id> --approver admin
  %(prog)s check --data salon.json --month 2025-02
  %(prog)s report --data salon.json --id <schedule-id> --output roster.pdf
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    solver_choices = [s.value for s in SolverType]

    demo_parser = subparsers.add_parser("demo", help="Run demo schedule generation")
    demo_parser.add_argument(
        "--month", "-m",
        type=str,
        default=DEFAULT_MONTH,
        help=f"Month to schedule (default: {DEFAULT_MONTH})",
    )
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=5,
        help="Number of staff to generate (default: 5)",
    )
    demo_parser.add_argument(
        "--solver", "-s",
        type=str,
        default="heuristic",
        choices=solver_choices,
        help="Planner: heuristic (default), cpsat, hybrid",
    )
    demo_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    demo_parser.add_argument("--report", "-r", type=str, help="Output text report path")
    demo_parser.add_argument("--data", "-d", type=str, help="JSON store to write")

    generate_parser = subparsers.add_parser("generate", help="Generate a month's schedule")
    generate_parser.add_argument("--data", "-d", type=str, required=True, help="JSON store")
    generate_parser.add_argument("--month", "-m", type=str, required=True, help="Month (YYYY-MM)")
    generate_parser.add_argument(
        "--solver", "-s",
        type=str,
        default="heuristic",
        choices=solver_choices,
        help="Planner: heuristic (default), cpsat, hybrid",
    )
    generate_parser.add_argument(
        "--time-limit", "-t",
        type=float,
        default=10.0,
        help="CP-SAT time limit in seconds (default: 10)",
    )

    approve_parser = subparsers.add_parser("approve", help="Approve a generated schedule")
    approve_parser.add_argument("--data", "-d", type=str, required=True, help="JSON store")
    approve_parser.add_argument("--id", type=str, required=True, help="Generated schedule ID")
    approve_parser.add_argument("--approver", type=str, default="admin", help="Approver ID")

    check_parser = subparsers.add_parser("check", help="Check live shifts for violations")
    check_parser.add_argument("--data", "-d", type=str, required=True, help="JSON store")
    check_parser.add_argument("--month", "-m", type=str, required=True, help="Month (YYYY-MM)")
    check_parser.add_argument(
        "--weekly-hours",
        action="store_true",
        help="Also check weekly hour limits",
    )

    report_parser = subparsers.add_parser("report", help="Report on a generated schedule")
    report_parser.add_argument("--data", "-d", type=str, required=True, help="JSON store")
    report_parser.add_argument("--id", type=str, required=True, help="Generated schedule ID")
    report_parser.add_argument("--output", "-o", type=str, help="Output PDF file path")
    report_parser.add_argument("--text", type=str, help="Output text report path")
    report_parser.add_argument(
        "--locale",
        type=str,
        default="en",
        choices=["en", "ja"],
        help="Label language (default: en)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "demo":
            return run_demo(
                args.month, args.count, args.solver, args.output, args.report, args.data
            )
        elif args.command == "generate":
            return run_generate(args.data, args.month, args.solver, args.time_limit)
        elif args.command == "approve":
            return run_approve(args.data, args.id, args.approver)
        elif args.command == "check":
            return run_check(args.data, args.month, args.weekly_hours)
        elif args.command == "report":
            return run_report(args.data, args.id, args.output, args.text, args.locale)
    except SalonShiftError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
