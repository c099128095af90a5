"""Smoke tests for the command-line interface."""

import json

import pytest

from salonshift.cli import (
    build_parser,
    create_sample_conditions,
    create_sample_requests,
    create_sample_staff,
    create_sample_templates,
    main,
    seed_repository,
)
from salonshift.storage.repository import InMemoryRepository


class TestSampleData:
    """Tests for the sample data builders."""

    def test_sample_staff(self):
        """Sample staff get sequential IDs and the core roster first."""
        staff = create_sample_staff(7)
        assert [s.id for s in staff] == ["1", "2", "3", "4", "5", "6", "7"]
        assert staff[0].name == "Misaki Tanaka"
        assert staff[6].name == "Staff 7"

    def test_sample_templates(self):
        """Four standard templates are created."""
        assert [t.name for t in create_sample_templates()] == [
            "Early",
            "Late",
            "Full-time",
            "Short",
        ]

    @pytest.mark.parametrize("month", ["2025-02", "2025-04", "2026-09"])
    def test_sample_requests_any_month(self, month):
        """Sample requests are valid for any month."""
        staff = create_sample_staff(2)
        requests = create_sample_requests(month, staff)
        assert len(requests) == 2
        assert all(d.strftime("%Y-%m") == month for r in requests for d in r.requested_dates)

    def test_seed_repository(self):
        """Seeding fills every record kind."""
        repository = InMemoryRepository()
        seed_repository(repository, "2025-02", 5)

        assert len(repository.list_staff()) == 5
        assert len(repository.list_templates()) == 4
        assert repository.get_active_conditions("2025-02").regular_holidays == {0, 6}
        assert len(repository.list_approved_shift_requests("2025-02")) == 1

    def test_sample_conditions(self):
        """The first two staff get personal conditions."""
        conditions = create_sample_conditions("2025-02", create_sample_staff(5))
        assert set(conditions.staff_conditions) == {"1", "2"}


class TestCLI:
    """Tests for CLI commands."""

    def test_no_command_prints_help(self, capsys):
        """Without a command the help text is shown."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_parser_choices(self):
        """Solver choices match the planner types."""
        args = build_parser().parse_args(["demo", "--solver", "cpsat"])
        assert args.solver == "cpsat"
        with pytest.raises(SystemExit):
            build_parser().parse_args(["demo", "--solver", "magic"])

    def test_demo(self, capsys):
        """The demo generates a schedule for the sample salon."""
        assert main(["demo"]) == 0
        out = capsys.readouterr().out
        assert "Generated Schedule: 2025-02" in out
        assert "Score:" in out

    def test_demo_report(self, tmp_path):
        """The demo can write a text report."""
        report = tmp_path / "report.txt"
        assert main(["demo", "--report", str(report)]) == 0
        assert "SHIFT SCHEDULE - 2025-02" in report.read_text(encoding="utf-8")

    def test_invalid_month(self, capsys):
        """Malformed months exit with an error code."""
        assert main(["demo", "--month", "February"]) == 2
        assert "Invalid month key" in capsys.readouterr().err

    def test_store_workflow(self, tmp_path, capsys):
        """Demo data can be generated, approved, checked and reported."""
        store = tmp_path / "salon.json"
        assert main(["demo", "--data", str(store)]) == 0
        assert main(["demo", "--data", str(store)]) == 1

        assert main(["generate", "--data", str(store), "--month", "2025-02"]) == 0
        data = json.loads(store.read_text(encoding="utf-8"))
        schedule_id = data["generated_schedules"][-1]["id"]
        assert len(data["generated_schedules"]) == 2

        assert main(["approve", "--data", str(store), "--id", schedule_id]) == 0
        assert main(["approve", "--data", str(store), "--id", schedule_id]) == 1

        data = json.loads(store.read_text(encoding="utf-8"))
        assert data["shifts"]
        assert all(s["date"].startswith("2025-02") for s in data["shifts"])

        assert main(["check", "--data", str(store), "--month", "2025-02"]) in (0, 1)
        capsys.readouterr()

        assert main(["report", "--data", str(store), "--id", schedule_id]) == 0
        assert "SHIFT SCHEDULE - 2025-02" in capsys.readouterr().out

        assert main(["report", "--data", str(store), "--id", "missing"]) == 1

    def test_generate_without_conditions(self, tmp_path):
        """Months without conditions cannot be generated."""
        store = tmp_path / "salon.json"
        assert main(["demo", "--data", str(store)]) == 0
        assert main(["generate", "--data", str(store), "--month", "2025-03"]) == 1

    def test_corrupt_store(self, tmp_path, capsys):
        """Unreadable stores exit with an error code."""
        store = tmp_path / "salon.json"
        store.write_text("not json", encoding="utf-8")
        assert main(["check", "--data", str(store), "--month", "2025-02"]) == 2
        assert "Cannot read schedule store" in capsys.readouterr().err
