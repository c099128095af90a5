"""Data access for the scheduling engine."""

from salonshift.storage.errors import (
    DuplicateShiftError,
    NotFoundError,
    RepositoryError,
    RequestNotFoundError,
    SalonShiftError,
    ShiftNotFoundError,
    TemplateNotFoundError,
)
from salonshift.storage.json_repository import JsonFileRepository
from salonshift.storage.locks import MonthLocks
from salonshift.storage.repository import InMemoryRepository, ScheduleRepository

__all__ = [
    # Errors
    "DuplicateShiftError",
    "NotFoundError",
    "RepositoryError",
    "RequestNotFoundError",
    "SalonShiftError",
    "ShiftNotFoundError",
    "TemplateNotFoundError",
    # Repositories
    "InMemoryRepository",
    "JsonFileRepository",
    "ScheduleRepository",
    # Locks
    "MonthLocks",
]
