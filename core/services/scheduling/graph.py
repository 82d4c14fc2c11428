from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from core.domain.task import Task
from core.exceptions import CyclicDependencyError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleGraph:
    """
    Id-keyed view of one task snapshot.

    Predecessor and successor lists only hold edges between non-summary tasks that
    both exist in the snapshot. Unknown ids are dropped.
    """

    tasks_by_id: Dict[str, Task]
    order: tuple[str, ...]
    leaf_ids: tuple[str, ...]
    summary_ids: tuple[str, ...]
    durations: Dict[str, float]
    constraints: Dict[str, Optional[float]]
    predecessors_of: Dict[str, tuple[str, ...]]
    successors_of: Dict[str, tuple[str, ...]]
    children_of: Dict[str, tuple[str, ...]]

    def is_summary(self, task_id: str) -> bool:
        return task_id in self.children_of


def normalize_duration(task: Task) -> float:
    value = task.duration
    if value is None or isinstance(value, bool):
        return 0
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Task '{task.id}' has a non-numeric duration: {task.duration!r}",
                code="TASK_DURATION_INVALID",
            ) from None
    if not math.isfinite(value) or value < 0:
        return 0
    return value


def normalize_constraint(task: Task) -> Optional[float]:
    """Start-no-earlier-than offset; None and NaN mean the task is unconstrained."""
    value = task.constraint_date
    if value is None:
        return None
    if isinstance(value, bool):
        raise _invalid_constraint(task)
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise _invalid_constraint(task) from None
    if math.isnan(value):
        return None
    if math.isinf(value):
        raise _invalid_constraint(task)
    return value


def _invalid_constraint(task: Task) -> ValidationError:
    return ValidationError(
        f"Task '{task.id}' has an invalid constraint date: {task.constraint_date!r}",
        code="TASK_CONSTRAINT_INVALID",
    )


def build_schedule_graph(tasks: Sequence[Task]) -> ScheduleGraph:
    tasks_by_id: Dict[str, Task] = {}
    order: List[str] = []
    for task in tasks:
        if task.id is None or (isinstance(task.id, str) and not task.id.strip()):
            raise ValidationError("Task id must not be blank.", code="TASK_ID_BLANK")
        if task.id in tasks_by_id:
            raise ValidationError(
                f"Duplicate task id '{task.id}'.",
                code="TASK_ID_DUPLICATE",
            )
        tasks_by_id[task.id] = task
        order.append(task.id)

    children: Dict[str, List[str]] = {}
    for task_id in order:
        parent_id = tasks_by_id[task_id].parent_id
        if parent_id is None:
            continue
        if parent_id not in tasks_by_id:
            logger.debug("Ignoring unknown parent '%s' of task '%s'", parent_id, task_id)
            continue
        children.setdefault(parent_id, []).append(task_id)

    leaf_ids = tuple(task_id for task_id in order if task_id not in children)
    summary_ids = tuple(task_id for task_id in order if task_id in children)

    predecessors_of: Dict[str, tuple[str, ...]] = {}
    successors: Dict[str, List[str]] = {task_id: [] for task_id in leaf_ids}
    for task_id in leaf_ids:
        resolved: List[str] = []
        for pred_id in dict.fromkeys(tasks_by_id[task_id].predecessors):
            if pred_id not in tasks_by_id:
                logger.debug("Ignoring unknown predecessor '%s' of task '%s'", pred_id, task_id)
                continue
            if pred_id in children:
                # summary spans are derived from their children and never drive a successor
                continue
            resolved.append(pred_id)
            successors[pred_id].append(task_id)
        predecessors_of[task_id] = tuple(resolved)

    return ScheduleGraph(
        tasks_by_id=tasks_by_id,
        order=tuple(order),
        leaf_ids=leaf_ids,
        summary_ids=summary_ids,
        durations={task_id: normalize_duration(tasks_by_id[task_id]) for task_id in order},
        constraints={task_id: normalize_constraint(tasks_by_id[task_id]) for task_id in order},
        predecessors_of=predecessors_of,
        successors_of={task_id: tuple(succ) for task_id, succ in successors.items()},
        children_of={task_id: tuple(kids) for task_id, kids in children.items()},
    )


def find_dependency_cycle(graph: ScheduleGraph) -> Optional[list[str]]:
    """
    Depth-first search over predecessor edges.

    Returns the ids along the first loop found (first id repeated at the end), or
    None for an acyclic network. Start points follow snapshot order so the reported
    path is stable between runs.
    """
    visiting, done = 1, 2
    state: Dict[str, int] = {}

    for root in graph.leaf_ids:
        if root in state:
            continue
        path: List[str] = [root]
        stack = [iter(graph.predecessors_of[root])]
        state[root] = visiting
        while stack:
            pred_id = next(stack[-1], None)
            if pred_id is None:
                state[path.pop()] = done
                stack.pop()
                continue
            mark = state.get(pred_id)
            if mark == visiting:
                loop = path[path.index(pred_id):]
                # path runs successor -> predecessor; report it in schedule order
                loop.reverse()
                return loop + [loop[0]]
            if mark == done:
                continue
            state[pred_id] = visiting
            path.append(pred_id)
            stack.append(iter(graph.predecessors_of[pred_id]))
    return None


def find_hierarchy_cycle(tasks_by_id: Dict[str, Task]) -> Optional[list[str]]:
    cleared: set[str] = set()
    for start_id in tasks_by_id:
        chain: List[str] = []
        seen: set[str] = set()
        current: Optional[str] = start_id
        while current is not None and current in tasks_by_id and current not in cleared:
            if current in seen:
                loop = chain[chain.index(current):]
                return loop + [current]
            seen.add(current)
            chain.append(current)
            current = tasks_by_id[current].parent_id
        cleared.update(chain)
    return None


def validate_acyclic(graph: ScheduleGraph) -> None:
    loop = find_hierarchy_cycle(graph.tasks_by_id)
    if loop:
        raise CyclicDependencyError(
            "Cannot schedule project: circular summary hierarchy "
            + " -> ".join(loop),
            code="HIERARCHY_CYCLE",
            cycle=loop,
        )
    loop = find_dependency_cycle(graph)
    if loop:
        raise CyclicDependencyError(
            "Cannot schedule project: circular dependency detected "
            + " -> ".join(loop),
            code="SCHEDULE_CYCLE",
            cycle=loop,
        )


__all__ = [
    "ScheduleGraph",
    "build_schedule_graph",
    "find_dependency_cycle",
    "find_hierarchy_cycle",
    "normalize_constraint",
    "normalize_duration",
    "validate_acyclic",
]
