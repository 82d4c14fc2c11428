from .engine import SchedulingEngine, compute_schedule, solve
from .models import ScheduleResult

__all__ = [
    "SchedulingEngine",
    "ScheduleResult",
    "compute_schedule",
    "solve",
]
