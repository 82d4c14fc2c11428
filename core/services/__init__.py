from .layout import CollapsedView, LayoutResult, layout, project_collapsed_view
from .planning import DiagramModel, PlanningService
from .scheduling import ScheduleResult, SchedulingEngine, compute_schedule, solve

__all__ = [
    "SchedulingEngine",
    "ScheduleResult",
    "compute_schedule",
    "solve",
    "CollapsedView",
    "LayoutResult",
    "layout",
    "project_collapsed_view",
    "DiagramModel",
    "PlanningService",
]
