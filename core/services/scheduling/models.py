from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from core.domain.task import Task


@dataclass(frozen=True)
class ScheduleResult:
    tasks: tuple[Task, ...]
    project_duration: float
    critical_task_ids: tuple[str, ...]
    forward_sweeps: int = 0

    def by_id(self) -> Dict[str, Task]:
        return {task.id: task for task in self.tasks}

    @property
    def summary_task_ids(self) -> tuple[str, ...]:
        return tuple(task.id for task in self.tasks if task.is_summary)
