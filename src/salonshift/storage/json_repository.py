"""Repository backed by a single JSON document on disk."""

import json
import logging
from pathlib import Path
from typing import Union

from salonshift.storage import serialization as ser
from salonshift.storage.errors import RepositoryError
from salonshift.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class JsonFileRepository(InMemoryRepository):
    """In-memory repository that rewrites its JSON file after every change.

    A missing file is treated as an empty store and created on the first
    write.

    Example:
        >>> repo = JsonFileRepository("salon.json")
        >>> repo.add_staff(StaffMember(id="s1", name="Sato"))
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            self.staff = [ser.staff_from_dict(d) for d in data.get("staff", [])]
            self.templates = [ser.template_from_dict(d) for d in data.get("templates", [])]
            self.conditions = [
                ser.conditions_from_dict(d) for d in data.get("conditions", [])
            ]
            self.requests = [ser.request_from_dict(d) for d in data.get("requests", [])]
            self.shifts = [ser.shift_from_dict(d) for d in data.get("shifts", [])]
            self.generated = [
                ser.schedule_from_dict(d) for d in data.get("generated_schedules", [])
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise RepositoryError(
                f"Cannot read schedule store {self.path}: {e}", {"path": str(self.path)}
            ) from e

        logger.debug(
            f"Loaded {self.path}: {len(self.staff)} staff, {len(self.shifts)} shifts, "
            f"{len(self.generated)} generated schedules"
        )

    def to_dict(self) -> dict:
        return {
            "version": FORMAT_VERSION,
            "staff": [ser.staff_to_dict(s) for s in self.staff],
            "templates": [ser.template_to_dict(t) for t in self.templates],
            "conditions": [ser.conditions_to_dict(c) for c in self.conditions],
            "requests": [ser.request_to_dict(r) for r in self.requests],
            "shifts": [ser.shift_to_dict(s) for s in self.shifts],
            "generated_schedules": [ser.schedule_to_dict(g) for g in self.generated],
        }

    def _commit(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise RepositoryError(
                f"Cannot write schedule store {self.path}: {e}", {"path": str(self.path)}
            ) from e
