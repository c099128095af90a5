"""Repository seam between the scheduling engine and its data store.

The engine never reaches for a global store; a ScheduleRepository is
injected into the generator and the shift manager.
"""

from abc import ABC, abstractmethod
from typing import Optional

from salonshift.domain.models import (
    GeneratedSchedule,
    RequestStatus,
    Shift,
    ShiftConditions,
    ShiftRequest,
    ShiftTemplate,
    StaffMember,
    utcnow,
)
from salonshift.storage.errors import RequestNotFoundError, ShiftNotFoundError
from salonshift.storage.locks import MonthLocks


class ScheduleRepository(ABC):
    """Abstract data access for staff, conditions, requests and shifts."""

    @property
    def locks(self) -> MonthLocks:
        """Per-month locks shared by every service working on this store."""
        # setdefault keeps concurrent first calls on one registry
        return self.__dict__.setdefault("_locks", MonthLocks())

    # Staff

    @abstractmethod
    def add_staff(self, staff: StaffMember) -> None:
        pass

    @abstractmethod
    def list_staff(self) -> list[StaffMember]:
        pass

    def list_active_staff(self) -> list[StaffMember]:
        """Active staff in roster order."""
        return [s for s in self.list_staff() if s.is_active]

    # Templates

    @abstractmethod
    def add_template(self, template: ShiftTemplate) -> None:
        pass

    @abstractmethod
    def list_templates(self) -> list[ShiftTemplate]:
        pass

    def get_template(self, template_id: str) -> Optional[ShiftTemplate]:
        return next((t for t in self.list_templates() if t.id == template_id), None)

    def list_active_templates(self) -> list[ShiftTemplate]:
        """Active templates in registry order."""
        return [t for t in self.list_templates() if t.is_active]

    # Conditions

    @abstractmethod
    def add_conditions(self, conditions: ShiftConditions) -> None:
        """Store conditions, deactivating any prior active record of the month."""
        pass

    @abstractmethod
    def list_conditions(self, month: Optional[str] = None) -> list[ShiftConditions]:
        pass

    def get_active_conditions(self, month: str) -> Optional[ShiftConditions]:
        return next((c for c in self.list_conditions(month) if c.is_active), None)

    # Shift requests

    @abstractmethod
    def submit_shift_request(self, request: ShiftRequest) -> ShiftRequest:
        """Store a request, replacing any earlier one for the same staff and month."""
        pass

    @abstractmethod
    def set_request_status(self, request_id: str, status: RequestStatus) -> ShiftRequest:
        pass

    @abstractmethod
    def list_shift_requests(self, month: Optional[str] = None) -> list[ShiftRequest]:
        pass

    def list_approved_shift_requests(self, month: str) -> list[ShiftRequest]:
        return [
            r for r in self.list_shift_requests(month) if r.status == RequestStatus.APPROVED
        ]

    # Shifts

    @abstractmethod
    def list_shifts(self) -> list[Shift]:
        pass

    @abstractmethod
    def add_shift(self, shift: Shift) -> None:
        pass

    @abstractmethod
    def save_shift(self, shift: Shift) -> None:
        """Overwrite a stored shift with the same ID."""
        pass

    @abstractmethod
    def delete_shift(self, shift_id: str) -> None:
        pass

    @abstractmethod
    def replace_shifts_for_month(self, month: str, shifts: list[Shift]) -> None:
        """Swap out every live shift in the month, leaving other months untouched."""
        pass

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        return next((s for s in self.list_shifts() if s.id == shift_id), None)

    def list_shifts_for_month(self, month: str) -> list[Shift]:
        return [s for s in self.list_shifts() if s.month == month]

    # Generated schedules

    @abstractmethod
    def list_generated_schedules(self) -> list[GeneratedSchedule]:
        pass

    @abstractmethod
    def append_generated_schedule(self, schedule: GeneratedSchedule) -> None:
        pass

    @abstractmethod
    def save_generated_schedule(self, schedule: GeneratedSchedule) -> None:
        """Overwrite a stored generated schedule with the same ID."""
        pass

    def get_generated_schedule(self, schedule_id: str) -> Optional[GeneratedSchedule]:
        return next(
            (g for g in self.list_generated_schedules() if g.id == schedule_id), None
        )


class InMemoryRepository(ScheduleRepository):
    """Repository keeping every record in process memory.

    Subclasses that persist elsewhere override ``_commit``, which runs after
    every mutation.
    """

    def __init__(self):
        self._locks = MonthLocks()
        self.staff: list[StaffMember] = []
        self.templates: list[ShiftTemplate] = []
        self.conditions: list[ShiftConditions] = []
        self.requests: list[ShiftRequest] = []
        self.shifts: list[Shift] = []
        self.generated: list[GeneratedSchedule] = []

    def _commit(self) -> None:
        pass

    def add_staff(self, staff: StaffMember) -> None:
        self.staff.append(staff)
        self._commit()

    def list_staff(self) -> list[StaffMember]:
        return list(self.staff)

    def add_template(self, template: ShiftTemplate) -> None:
        self.templates.append(template)
        self._commit()

    def list_templates(self) -> list[ShiftTemplate]:
        return list(self.templates)

    def add_conditions(self, conditions: ShiftConditions) -> None:
        if conditions.is_active:
            for existing in self.conditions:
                if existing.month == conditions.month:
                    existing.is_active = False
        if conditions.created_at is None:
            conditions.created_at = utcnow()
        self.conditions.append(conditions)
        self._commit()

    def list_conditions(self, month: Optional[str] = None) -> list[ShiftConditions]:
        return [c for c in self.conditions if month is None or c.month == month]

    def submit_shift_request(self, request: ShiftRequest) -> ShiftRequest:
        now = utcnow()
        if request.submitted_at is None:
            request.submitted_at = now
        request.updated_at = now
        self.requests = [
            r
            for r in self.requests
            if not (r.staff_id == request.staff_id and r.month == request.month)
        ]
        self.requests.append(request)
        self._commit()
        return request

    def set_request_status(self, request_id: str, status: RequestStatus) -> ShiftRequest:
        for request in self.requests:
            if request.id == request_id:
                request.status = status
                request.updated_at = utcnow()
                self._commit()
                return request
        raise RequestNotFoundError(request_id)

    def list_shift_requests(self, month: Optional[str] = None) -> list[ShiftRequest]:
        return [r for r in self.requests if month is None or r.month == month]

    def list_shifts(self) -> list[Shift]:
        return list(self.shifts)

    def add_shift(self, shift: Shift) -> None:
        self.shifts.append(shift)
        self._commit()

    def save_shift(self, shift: Shift) -> None:
        for i, existing in enumerate(self.shifts):
            if existing.id == shift.id:
                self.shifts[i] = shift
                self._commit()
                return
        raise ShiftNotFoundError(shift.id)

    def delete_shift(self, shift_id: str) -> None:
        remaining = [s for s in self.shifts if s.id != shift_id]
        if len(remaining) == len(self.shifts):
            raise ShiftNotFoundError(shift_id)
        self.shifts = remaining
        self._commit()

    def replace_shifts_for_month(self, month: str, shifts: list[Shift]) -> None:
        self.shifts = [s for s in self.shifts if s.month != month] + list(shifts)
        self._commit()

    def list_generated_schedules(self) -> list[GeneratedSchedule]:
        return list(self.generated)

    def append_generated_schedule(self, schedule: GeneratedSchedule) -> None:
        self.generated.append(schedule)
        self._commit()

    def save_generated_schedule(self, schedule: GeneratedSchedule) -> None:
        for i, existing in enumerate(self.generated):
            if existing.id == schedule.id:
                self.generated[i] = schedule
                self._commit()
                return
        self.generated.append(schedule)
        self._commit()
