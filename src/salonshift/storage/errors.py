"""Exceptions raised by the repository and manual-edit paths."""

from typing import Any, Optional


class SalonShiftError(Exception):
    """Base exception for scheduling store errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(SalonShiftError):
    """A referenced record does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}", {"id": record_id})
        self.record_id = record_id


class ShiftNotFoundError(NotFoundError):
    def __init__(self, shift_id: str):
        super().__init__("Shift", shift_id)


class TemplateNotFoundError(NotFoundError):
    def __init__(self, template_id: str):
        super().__init__("Shift template", template_id)


class RequestNotFoundError(NotFoundError):
    def __init__(self, request_id: str):
        super().__init__("Shift request", request_id)


class DuplicateShiftError(SalonShiftError):
    """A staff member already has a shift on the date."""

    def __init__(self, staff_id: str, shift_date):
        super().__init__(
            f"Staff {staff_id} already has a shift on {shift_date.isoformat()}",
            {"staff_id": staff_id, "date": shift_date.isoformat()},
        )


class RepositoryError(SalonShiftError):
    """The backing store could not be read or written."""
