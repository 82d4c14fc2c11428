from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.services.planning.models import DiagramModel


@dataclass
class ScheduleReportContext:
    diagram: DiagramModel
    start_date: date
    generated_on: date


@dataclass
class PdfReportContext(ScheduleReportContext):
    network_png_path: Optional[str] = None
