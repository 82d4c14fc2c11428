from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from core.domain.task import Task


@dataclass(frozen=True)
class LaneAssignment:
    task: Task
    zone: str
    lane_index: int
    global_row_index: int


@dataclass(frozen=True)
class ZoneMeta:
    name: str
    start_row: int
    row_count: int
    end_row: int
    color: str


@dataclass(frozen=True)
class LayoutResult:
    rows: tuple[LaneAssignment, ...]
    zones: tuple[ZoneMeta, ...]
    total_rows: int
    project_duration: float

    def row_of(self, task_id: str) -> LaneAssignment | None:
        for row in self.rows:
            if row.task.id == task_id:
                return row
        return None


@dataclass(frozen=True)
class Edge:
    predecessor_id: str
    successor_id: str


@dataclass(frozen=True)
class CollapsedView:
    visible_tasks: tuple[Task, ...]
    visible_edges: tuple[Edge, ...]
    representative_of: Dict[str, str] = field(default_factory=dict)

    @property
    def visible_ids(self) -> tuple[str, ...]:
        return tuple(task.id for task in self.visible_tasks)


__all__ = ["CollapsedView", "Edge", "LaneAssignment", "LayoutResult", "ZoneMeta"]
