from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from core.domain.enums import TaskType
from core.domain.identifiers import generate_id


@dataclass(frozen=True)
class Task:
    """
    One activity of the network.

    Author-set fields come first; the block after `completion` is owned by the
    scheduler and is recomputed from scratch on every solve. `None` on a computed
    field means "not solved", which is different from a solved value of 0.
    """

    id: str
    name: str = ""
    duration: float = 0
    predecessors: tuple[str, ...] = ()
    type: TaskType = TaskType.NORMAL
    zone: Optional[str] = None
    parent_id: Optional[str] = None
    is_collapsed: bool = False
    constraint_date: Optional[float] = None
    manual_lane: Optional[int] = None
    description: str = ""
    completion: float = 0.0

    early_start: Optional[float] = None
    early_finish: Optional[float] = None
    late_start: Optional[float] = None
    late_finish: Optional[float] = None
    total_float: Optional[float] = None
    free_float: Optional[float] = None
    is_critical: bool = False
    is_summary: bool = False

    def __post_init__(self) -> None:
        # predecessors are always stored as a tuple
        if not isinstance(self.predecessors, tuple):
            object.__setattr__(self, "predecessors", tuple(self.predecessors or ()))
        if not isinstance(self.type, TaskType):
            object.__setattr__(self, "type", TaskType(self.type))

    @staticmethod
    def create(
        name: str,
        duration: float = 0,
        predecessors: Iterable[str] = (),
        **extra,
    ) -> "Task":
        return Task(
            id=generate_id(),
            name=name,
            duration=duration,
            predecessors=tuple(predecessors),
            **extra,
        )

    @property
    def is_milestone(self) -> bool:
        return self.type == TaskType.MILESTONE

    def cleared(self) -> "Task":
        """Copy of the task with every scheduler-owned field reset."""
        return replace(
            self,
            early_start=None,
            early_finish=None,
            late_start=None,
            late_finish=None,
            total_float=None,
            free_float=None,
            is_critical=False,
            is_summary=False,
        )


__all__ = ["Task"]
