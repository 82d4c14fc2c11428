from __future__ import annotations

from dataclasses import dataclass

from core.services.layout.models import CollapsedView, LayoutResult
from core.services.scheduling.models import ScheduleResult


@dataclass(frozen=True)
class DiagramModel:
    plan_id: str
    plan_name: str
    schedule: ScheduleResult
    view: CollapsedView
    layout: LayoutResult

    @property
    def project_duration(self) -> float:
        return self.schedule.project_duration

    @property
    def critical_task_ids(self) -> tuple[str, ...]:
        return self.schedule.critical_task_ids


__all__ = ["DiagramModel"]
