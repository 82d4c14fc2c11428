from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional

from core.domain.identifiers import generate_id
from core.domain.task import Task


@dataclass(frozen=True)
class ProjectPlan:
    id: str
    name: str
    tasks: tuple[Task, ...] = ()
    zone_order: tuple[str, ...] = ()
    start_date: Optional[date] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.tasks, tuple):
            object.__setattr__(self, "tasks", tuple(self.tasks or ()))
        if not isinstance(self.zone_order, tuple):
            object.__setattr__(self, "zone_order", tuple(self.zone_order or ()))

    @staticmethod
    def create(
        name: str,
        tasks: Iterable[Task] = (),
        zone_order: Iterable[str] = (),
        start_date: Optional[date] = None,
        description: str = "",
    ) -> "ProjectPlan":
        return ProjectPlan(
            id=generate_id(),
            name=name,
            tasks=tuple(tasks),
            zone_order=tuple(zone_order),
            start_date=start_date,
            description=description,
        )

    def with_tasks(self, tasks: Iterable[Task]) -> "ProjectPlan":
        return replace(self, tasks=tuple(tasks))

    def with_zone_order(self, zone_order: Iterable[str]) -> "ProjectPlan":
        return replace(self, zone_order=tuple(zone_order))

    def with_collapsed(self, task_id: str, collapsed: bool) -> "ProjectPlan":
        return self.with_tasks(
            replace(t, is_collapsed=collapsed) if t.id == task_id else t
            for t in self.tasks
        )

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


__all__ = ["ProjectPlan"]
