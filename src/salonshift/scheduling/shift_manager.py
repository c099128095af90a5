"""Manual shift management on top of the repository.

Administrators can add single shifts from a template, edit or delete live
shifts and move them through the approval workflow. Edits can be previewed
against the labor standards before they are saved.
"""

import logging
from contextlib import ExitStack
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from salonshift.domain.models import (
    LaborStandards,
    LaborViolation,
    Shift,
    ShiftStatus,
    StaffMember,
    new_id,
    utcnow,
)
from salonshift.storage.errors import (
    DuplicateShiftError,
    ShiftNotFoundError,
    TemplateNotFoundError,
)
from salonshift.storage.locks import MonthLocks
from salonshift.storage.repository import ScheduleRepository
from salonshift.validation.compliance import LaborComplianceChecker

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "shift_date",
        "start_time",
        "end_time",
        "break_duration_minutes",
        "notes",
        "status",
    }
)


def shift_stats(shifts: Iterable[Shift], today: Optional[date] = None) -> dict[str, int]:
    """Shift counts per status, plus today's approved shifts."""
    today = today or date.today()
    shifts = list(shifts)
    return {
        "total": len(shifts),
        "approved": sum(1 for s in shifts if s.status == ShiftStatus.APPROVED),
        "pending": sum(1 for s in shifts if s.status == ShiftStatus.PENDING),
        "rejected": sum(1 for s in shifts if s.status == ShiftStatus.REJECTED),
        "today": sum(
            1 for s in shifts if s.shift_date == today and s.status == ShiftStatus.APPROVED
        ),
    }


class ShiftManager:
    """Creates, edits and deletes individual live shifts."""

    def __init__(
        self,
        repository: ScheduleRepository,
        checker: Optional[LaborComplianceChecker] = None,
        locks: Optional[MonthLocks] = None,
    ):
        self.repository = repository
        self.checker = checker or LaborComplianceChecker()
        self.locks = locks or repository.locks

    def _standards_for(self, month: str) -> LaborStandards:
        conditions = self.repository.get_active_conditions(month)
        return conditions.labor_standards if conditions else LaborStandards()

    def _get(self, shift_id: str) -> Shift:
        shift = self.repository.get_shift(shift_id)
        if shift is None:
            raise ShiftNotFoundError(shift_id)
        return shift

    def _ensure_free(self, staff_id: str, d: date, ignore_id: Optional[str] = None) -> None:
        for existing in self.repository.list_shifts():
            if (
                existing.staff_id == staff_id
                and existing.shift_date == d
                and existing.id != ignore_id
            ):
                raise DuplicateShiftError(staff_id, d)

    def create_from_template(
        self,
        template_id: str,
        staff: StaffMember,
        shift_date: date,
        notes: str = "",
    ) -> Shift:
        """Add a pending shift stamped from a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            DuplicateShiftError: If the staff member already works that day.
        """
        template = self.repository.get_template(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        shift = Shift(
            id=new_id(),
            staff_id=staff.id,
            staff_name=staff.name,
            shift_date=shift_date,
            start_time=template.start_time,
            end_time=template.end_time,
            break_duration_minutes=template.break_duration_minutes,
            template_id=template.id,
            template_name=template.name,
            position=staff.position,
            status=ShiftStatus.PENDING,
            notes=notes,
        )

        with self.locks.hold(shift.month):
            self._ensure_free(staff.id, shift_date)
            shift.created_at = shift.updated_at = utcnow()
            self.repository.add_shift(shift)

        logger.info(f"Created shift {shift.id} for {staff.name} on {shift_date.isoformat()}")
        return shift

    def _apply(self, shift: Shift, changes: dict) -> Shift:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit shift fields: {sorted(unknown)}")
        return replace(shift, **changes)

    def preview_update(self, shift_id: str, **changes) -> list[LaborViolation]:
        """Violations the edited shift's month would have, without saving."""
        edited = self._apply(self._get(shift_id), changes)
        return self._check_month_with(edited)

    def _check_month_with(self, edited: Shift) -> list[LaborViolation]:
        month_shifts = [
            s for s in self.repository.list_shifts_for_month(edited.month)
            if s.id != edited.id
        ]
        month_shifts.append(edited)
        return self.checker.check(month_shifts, self._standards_for(edited.month))

    def update_shift(self, shift_id: str, editor_id: str, **changes) -> list[LaborViolation]:
        """Apply and save an edit.

        Returns:
            Violations of the edited shift's month after the edit.

        Raises:
            ShiftNotFoundError: If the shift does not exist.
            DuplicateShiftError: If the edit moves the shift onto a day the
                staff member already works.
            ValueError: If a non-editable field is changed or the edited
                shift would not end after it starts.
        """
        original = self._get(shift_id)
        edited = self._apply(original, changes)
        months = sorted({original.month, edited.month})

        with ExitStack() as stack:
            for month in months:
                stack.enter_context(self.locks.hold(month))
            self._ensure_free(edited.staff_id, edited.shift_date, ignore_id=shift_id)
            edited.updated_at = utcnow()
            self.repository.save_shift(edited)

        logger.info(f"Shift {shift_id} edited by {editor_id}: {sorted(changes)}")
        return self._check_month_with(edited)

    def set_status(self, shift_id: str, status: ShiftStatus) -> Shift:
        """Move a shift through the approval workflow."""
        shift = self._get(shift_id)
        with self.locks.hold(shift.month):
            updated = replace(shift, status=status, updated_at=utcnow())
            self.repository.save_shift(updated)
        return updated

    def delete_shift(self, shift_id: str) -> None:
        shift = self._get(shift_id)
        with self.locks.hold(shift.month):
            self.repository.delete_shift(shift_id)
        logger.info(f"Deleted shift {shift_id}")
