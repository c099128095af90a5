"""Output generation for schedules (text reports, PDF)."""

from salonshift.output.labels import label, weekday_name
from salonshift.output.pdf_generator import PDFGenerator
from salonshift.output.report_generator import ReportGenerator

__all__ = [
    "PDFGenerator",
    "ReportGenerator",
    "label",
    "weekday_name",
]
