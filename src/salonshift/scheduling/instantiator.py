"""Turns a (staff, date) pairing into a concrete shift."""

from datetime import date
from typing import Iterable, Optional

from salonshift.domain.calendar import is_weekend
from salonshift.domain.models import (
    Position,
    Shift,
    ShiftConditions,
    ShiftStatus,
    ShiftTemplate,
    StaffMember,
    new_id,
    utcnow,
)

# Keywords recognized in template names, matched case-insensitively
FULL_DAY_KEYWORDS = ("full", "フルタイム")
EARLY_KEYWORDS = ("early", "早番")

OPENING_POSITIONS = (Position.STYLIST, Position.MANAGER)


def _name_has(template: ShiftTemplate, keywords: tuple[str, ...]) -> bool:
    name = template.name.lower()
    return any(keyword in name for keyword in keywords)


def is_full_day_template(template: ShiftTemplate) -> bool:
    return _name_has(template, FULL_DAY_KEYWORDS)


def is_early_template(template: ShiftTemplate) -> bool:
    return _name_has(template, EARLY_KEYWORDS)


class ShiftInstantiator:
    """Chooses a template for a pairing and stamps the shift record.

    Template choice, in order:
    1. The first of the staff member's preferred templates that is active.
    2. On weekends, the first full-day template.
    3. On weekdays, for stylists and managers, the first early or full-day
       template.
    4. The first active template.
    """

    def choose_template(
        self,
        staff: StaffMember,
        d: date,
        conditions: ShiftConditions,
        templates: Iterable[ShiftTemplate],
    ) -> Optional[ShiftTemplate]:
        active = [t for t in templates if t.is_active]
        if not active:
            return None

        condition = conditions.get_staff_condition(staff.id)
        if condition:
            by_id = {t.id: t for t in active}
            for template_id in condition.preferred_template_ids:
                if template_id in by_id:
                    return by_id[template_id]

        if is_weekend(d):
            for template in active:
                if is_full_day_template(template):
                    return template
        elif staff.position in OPENING_POSITIONS:
            for template in active:
                if is_early_template(template) or is_full_day_template(template):
                    return template

        return active[0]

    def build_shift(
        self,
        staff: StaffMember,
        d: date,
        conditions: ShiftConditions,
        templates: Iterable[ShiftTemplate],
    ) -> Optional[Shift]:
        """Build an approved shift, or None when no active template exists."""
        template = self.choose_template(staff, d, conditions, templates)
        if template is None:
            return None

        now = utcnow()
        return Shift(
            id=new_id(),
            staff_id=staff.id,
            staff_name=staff.name,
            shift_date=d,
            start_time=template.start_time,
            end_time=template.end_time,
            break_duration_minutes=template.break_duration_minutes,
            template_id=template.id,
            template_name=template.name,
            position=staff.position,
            status=ShiftStatus.APPROVED,
            created_at=now,
            updated_at=now,
        )


def build_shift(
    staff: StaffMember,
    d: date,
    conditions: ShiftConditions,
    templates: Iterable[ShiftTemplate],
) -> Optional[Shift]:
    """Build a generated shift for a staff member on a date."""
    return ShiftInstantiator().build_shift(staff, d, conditions, templates)
