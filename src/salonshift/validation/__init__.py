"""Labor compliance checking for shift sets."""

from salonshift.validation.compliance import (
    LaborComplianceChecker,
    check_compliance,
    overlaps_night_window,
)

__all__ = ["LaborComplianceChecker", "check_compliance", "overlaps_night_window"]
