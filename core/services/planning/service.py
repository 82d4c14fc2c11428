from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.domain.plan import ProjectPlan
from core.events.domain_events import DomainEvents, domain_events
from core.exceptions import CyclicDependencyError, NotFoundError, ValidationError
from core.services.layout.collapsed import project_collapsed_view
from core.services.layout.lanes import layout
from core.services.planning.models import DiagramModel
from core.services.scheduling.engine import SchedulingEngine
from core.services.scheduling.models import ScheduleResult

logger = logging.getLogger(__name__)


class PlanningService:
    """
    Runs the full pipeline for one plan snapshot:
    solve -> collapsed-view projection -> lane layout.
    """

    def __init__(
        self,
        scheduling_engine: SchedulingEngine | None = None,
        events: DomainEvents | None = None,
    ):
        self._scheduling_engine: SchedulingEngine = scheduling_engine or SchedulingEngine()
        self._events: DomainEvents = events or domain_events

    def recalculate(self, plan: ProjectPlan) -> ScheduleResult:
        try:
            result = self._scheduling_engine.compute(plan.tasks)
        except CyclicDependencyError as exc:
            logger.warning("Schedule for plan %s rejected: %s", plan.id, exc)
            raise
        logger.info(
            "Recalculated plan %s - %s: %s tasks, duration %s",
            plan.id,
            plan.name,
            len(result.tasks),
            result.project_duration,
        )
        self._events.schedule_changed.emit(plan.id)
        return result

    def build_diagram(
        self,
        plan: ProjectPlan,
        collapsed_ids: Optional[Iterable[str]] = None,
    ) -> DiagramModel:
        schedule = self.recalculate(plan)
        view = project_collapsed_view(schedule.tasks, collapsed_ids)
        arranged = layout(view.visible_tasks, plan.zone_order)
        logger.info(
            "Laid out plan %s: %s visible of %s tasks, %s rows in %s zones",
            plan.id,
            len(view.visible_tasks),
            len(schedule.tasks),
            arranged.total_rows,
            len(arranged.zones),
        )
        self._events.layout_changed.emit(plan.id)
        return DiagramModel(
            plan_id=plan.id,
            plan_name=plan.name,
            schedule=schedule,
            view=view,
            layout=arranged,
        )

    def toggle_collapsed(self, plan: ProjectPlan, task_id: str) -> ProjectPlan:
        task = plan.get_task(task_id)
        if task is None:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        if not any(t.parent_id == task_id for t in plan.tasks):
            raise ValidationError(
                "Only summary tasks can be collapsed.",
                code="TASK_NOT_SUMMARY",
            )
        updated = plan.with_collapsed(task_id, not task.is_collapsed)
        logger.info("Summary task %s collapsed=%s", task_id, not task.is_collapsed)
        self._events.collapse_changed.emit(task_id)
        return updated


__all__ = ["PlanningService"]
