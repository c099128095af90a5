"""Tests for the in-memory and JSON file repositories."""

import json
from datetime import date, time

import pytest

from salonshift.domain.models import (
    GeneratedSchedule,
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
    StaffMember,
    ViolationType,
)
from salonshift.storage.errors import (
    RepositoryError,
    RequestNotFoundError,
    ShiftNotFoundError,
)
from salonshift.storage.json_repository import JsonFileRepository
from salonshift.storage.locks import MonthLocks
from salonshift.storage.repository import InMemoryRepository


def make_shift(shift_id, d, staff_id="1"):
    return Shift(
        id=shift_id,
        staff_id=staff_id,
        staff_name="Tanaka",
        shift_date=d,
        start_time=time(9, 0),
        end_time=time(17, 0),
        break_duration_minutes=60,
        status=ShiftStatus.APPROVED,
    )


@pytest.fixture
def repository():
    return InMemoryRepository()


class TestInMemoryRepository:
    """Tests for InMemoryRepository."""

    def test_active_staff_in_roster_order(self, repository):
        """Inactive staff are filtered out and order is kept."""
        repository.add_staff(StaffMember(id="b", name="B"))
        repository.add_staff(StaffMember(id="a", name="A", is_active=False))
        repository.add_staff(StaffMember(id="c", name="C"))
        assert [s.id for s in repository.list_active_staff()] == ["b", "c"]

    def test_templates(self, repository):
        """Templates can be looked up by ID and filtered by activity."""
        repository.add_template(
            ShiftTemplate(id="t1", name="Early", start_time=time(9), end_time=time(17))
        )
        repository.add_template(
            ShiftTemplate(
                id="t2", name="Late", start_time=time(12), end_time=time(20), is_active=False
            )
        )
        assert repository.get_template("t2").name == "Late"
        assert repository.get_template("missing") is None
        assert [t.id for t in repository.list_active_templates()] == ["t1"]

    def test_new_conditions_supersede_old(self, repository):
        """Only the newest conditions record of a month stays active."""
        repository.add_conditions(ShiftConditions(id="v1", month="2025-02"))
        repository.add_conditions(ShiftConditions(id="jan", month="2025-01"))
        repository.add_conditions(ShiftConditions(id="v2", month="2025-02"))

        assert repository.get_active_conditions("2025-02").id == "v2"
        assert repository.get_active_conditions("2025-01").id == "jan"
        assert [c.id for c in repository.list_conditions("2025-02")] == ["v1", "v2"]
        assert repository.get_active_conditions("2025-03") is None

    def test_request_resubmission_replaces(self, repository):
        """A new request for the same staff and month replaces the old one."""
        first = ShiftRequest(
            id="r1", staff_id="1", staff_name="A", month="2025-02",
            day_off_requests=[date(2025, 2, 3)],
        )
        second = ShiftRequest(
            id="r2", staff_id="1", staff_name="A", month="2025-02",
            day_off_requests=[date(2025, 2, 4)],
        )
        repository.submit_shift_request(first)
        repository.submit_shift_request(second)

        requests = repository.list_shift_requests("2025-02")
        assert [r.id for r in requests] == ["r2"]
        assert requests[0].submitted_at is not None

    def test_request_status(self, repository):
        """Only approved requests are listed as approved."""
        repository.submit_shift_request(
            ShiftRequest(id="r1", staff_id="1", staff_name="A", month="2025-02")
        )
        assert repository.list_approved_shift_requests("2025-02") == []

        repository.set_request_status("r1", RequestStatus.APPROVED)
        assert [r.id for r in repository.list_approved_shift_requests("2025-02")] == ["r1"]

        with pytest.raises(RequestNotFoundError):
            repository.set_request_status("missing", RequestStatus.APPROVED)

    def test_shift_crud(self, repository):
        """Shifts can be added, saved and deleted."""
        shift = make_shift("s1", date(2025, 2, 3))
        repository.add_shift(shift)
        assert repository.get_shift("s1") is shift

        edited = make_shift("s1", date(2025, 2, 4))
        repository.save_shift(edited)
        assert repository.get_shift("s1").shift_date == date(2025, 2, 4)

        repository.delete_shift("s1")
        assert repository.list_shifts() == []

        with pytest.raises(ShiftNotFoundError):
            repository.delete_shift("s1")
        with pytest.raises(ShiftNotFoundError):
            repository.save_shift(edited)

    def test_replace_shifts_for_month(self, repository):
        """Replacing a month leaves other months untouched."""
        repository.add_shift(make_shift("jan", date(2025, 1, 31)))
        repository.add_shift(make_shift("feb-old", date(2025, 2, 1)))
        repository.add_shift(make_shift("mar", date(2025, 3, 1)))

        repository.replace_shifts_for_month("2025-02", [make_shift("feb-new", date(2025, 2, 2))])

        assert sorted(s.id for s in repository.list_shifts()) == ["feb-new", "jan", "mar"]
        assert [s.id for s in repository.list_shifts_for_month("2025-02")] == ["feb-new"]


class TestJsonFileRepository:
    """Tests for JsonFileRepository persistence."""

    def test_missing_file_is_empty(self, tmp_path):
        """A missing file starts an empty store without creating it."""
        path = tmp_path / "salon.json"
        repository = JsonFileRepository(path)
        assert repository.list_staff() == []
        assert not path.exists()

    def test_round_trip(self, tmp_path):
        """Every record kind survives a reload."""
        path = tmp_path / "store" / "salon.json"
        repository = JsonFileRepository(path)
        repository.add_staff(
            StaffMember(id="1", name="田中 美咲", position=Position.STYLIST, skill_level=5)
        )
        repository.add_template(
            ShiftTemplate(
                id="t1", name="早番", start_time=time(9), end_time=time(17),
                break_duration_minutes=45,
            )
        )
        repository.add_conditions(
            ShiftConditions(
                id="c1",
                month="2025-02",
                regular_holidays={0, 1},
                special_holidays={date(2025, 2, 11)},
                staff_conditions={
                    "1": StaffCondition(
                        staff_id="1",
                        max_work_days_per_month=20,
                        fixed_off_days={date(2025, 2, 14)},
                        preferred_template_ids=["t1"],
                    )
                },
            )
        )
        repository.submit_shift_request(
            ShiftRequest(
                id="r1", staff_id="1", staff_name="田中 美咲", month="2025-02",
                paid_leave_requests=[date(2025, 2, 20)], status=RequestStatus.APPROVED,
            )
        )
        shift = make_shift("s1", date(2025, 2, 3))
        shift.break_duration_minutes = None
        repository.add_shift(shift)
        repository.append_generated_schedule(
            GeneratedSchedule(
                id="g1",
                month="2025-02",
                shifts=[make_shift("s2", date(2025, 2, 4))],
                violations=[
                    LaborViolation(
                        ViolationType.MONTHLY_HOURS, Severity.ERROR, "1", details="over"
                    )
                ],
                score=87,
                shortfall_dates=[date(2025, 2, 5)],
            )
        )

        reloaded = JsonFileRepository(path)

        assert reloaded.list_staff()[0].name == "田中 美咲"
        assert reloaded.list_staff()[0].position == Position.STYLIST
        assert reloaded.get_template("t1").break_duration_minutes == 45

        conditions = reloaded.get_active_conditions("2025-02")
        assert conditions.regular_holidays == {0, 1}
        assert conditions.special_holidays == {date(2025, 2, 11)}
        condition = conditions.get_staff_condition("1")
        assert condition.fixed_off_days == {date(2025, 2, 14)}
        assert condition.preferred_template_ids == ["t1"]

        request = reloaded.list_approved_shift_requests("2025-02")[0]
        assert request.paid_leave_requests == [date(2025, 2, 20)]

        assert reloaded.get_shift("s1").break_duration_minutes is None
        assert reloaded.get_shift("s1").start_time == time(9, 0)

        schedule = reloaded.get_generated_schedule("g1")
        assert schedule.score == 87
        assert schedule.shortfall_dates == [date(2025, 2, 5)]
        assert schedule.violations[0].violation_date is None
        assert schedule.shifts[0].id == "s2"

    def test_file_format(self, tmp_path):
        """The store is readable JSON with dates and times as strings."""
        path = tmp_path / "salon.json"
        repository = JsonFileRepository(path)
        repository.add_shift(make_shift("s1", date(2025, 2, 3)))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["shifts"][0]["date"] == "2025-02-03"
        assert data["shifts"][0]["start_time"] == "09:00"

    def test_seconds_survive_reload(self, tmp_path):
        """Times with seconds keep them across a reload."""
        path = tmp_path / "salon.json"
        repository = JsonFileRepository(path)
        shift = make_shift("s1", date(2025, 2, 3))
        shift.end_time = time(17, 0, 30)
        repository.add_shift(shift)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["shifts"][0]["start_time"] == "09:00"
        assert data["shifts"][0]["end_time"] == "17:00:30"
        assert JsonFileRepository(path).get_shift("s1").end_time == time(17, 0, 30)

    def test_corrupt_file(self, tmp_path):
        """Unreadable stores raise RepositoryError."""
        path = tmp_path / "salon.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RepositoryError):
            JsonFileRepository(path)


class TestMonthLocks:
    """Tests for per-month locks."""

    def test_hold(self):
        """A month's lock is held inside the block and released after."""
        locks = MonthLocks()
        with locks.hold("2025-02"):
            assert locks.is_locked("2025-02")
            assert not locks.is_locked("2025-03")
        assert not locks.is_locked("2025-02")

    def test_same_lock_per_month(self):
        """Each month key maps to one lock."""
        locks = MonthLocks()
        assert locks.lock_for("2025-02") is locks.lock_for("2025-02")
        assert locks.lock_for("2025-02") is not locks.lock_for("2025-03")

    def test_repository_owns_one_registry(self, repository):
        """A repository hands out the same locks on every access."""
        assert isinstance(repository.locks, MonthLocks)
        assert repository.locks is repository.locks
        assert repository.locks is not InMemoryRepository().locks
