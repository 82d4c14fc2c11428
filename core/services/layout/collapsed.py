from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from core.domain.task import Task
from core.exceptions import CyclicDependencyError
from core.services.layout.models import CollapsedView, Edge


def _ancestors(task: Task, tasks_by_id: Dict[str, Task]) -> List[str]:
    """Parent chain from the direct parent up to the root; unknown parents end the walk."""
    chain: List[str] = []
    current = task.parent_id
    while current is not None and current in tasks_by_id:
        if current in chain or current == task.id:
            raise CyclicDependencyError(
                f"Circular summary hierarchy above task '{task.id}'.",
                code="HIERARCHY_CYCLE",
                cycle=chain + [current],
            )
        chain.append(current)
        current = tasks_by_id[current].parent_id
    return chain


def visible_representative(
    task: Task,
    tasks_by_id: Dict[str, Task],
    summary_ids: set[str],
    collapsed_ids: set[str],
) -> Optional[str]:
    """
    Id drawn in place of `task`, or None when the task is hidden without a stand-in.

    The outermost collapsed ancestor wins. An expanded summary has no representative
    of its own because its children are drawn instead.
    """
    for ancestor_id in reversed(_ancestors(task, tasks_by_id)):
        if ancestor_id in collapsed_ids:
            return ancestor_id
    if task.id in summary_ids:
        return task.id if task.id in collapsed_ids else None
    return task.id


def project_collapsed_view(
    solved_tasks: Sequence[Task],
    collapsed_ids: Optional[Iterable[str]] = None,
) -> CollapsedView:
    tasks = list(solved_tasks)
    tasks_by_id = {t.id: t for t in tasks}
    summary_ids = {t.parent_id for t in tasks if t.parent_id is not None and t.parent_id in tasks_by_id}

    if collapsed_ids is None:
        requested = {t.id for t in tasks if t.is_collapsed}
    else:
        requested = set(collapsed_ids)
    # the flag only means something on a summary task
    collapsed = requested & summary_ids

    representative_of: Dict[str, str] = {}
    for task in tasks:
        rep = visible_representative(task, tasks_by_id, summary_ids, collapsed)
        if rep is not None:
            representative_of[task.id] = rep

    visible_order = list(dict.fromkeys(representative_of.values()))

    links: Dict[str, List[str]] = {rep: [] for rep in visible_order}
    edges: List[Edge] = []
    seen: set[tuple[str, str]] = set()
    for task in tasks:
        target = representative_of.get(task.id)
        if target is None:
            continue
        for pred_id in task.predecessors:
            source = representative_of.get(pred_id)
            if source is None or source == target:
                continue
            if (source, target) in seen:
                continue
            seen.add((source, target))
            links[target].append(source)
            edges.append(Edge(predecessor_id=source, successor_id=target))

    visible_tasks = tuple(
        replace(
            tasks_by_id[rep],
            predecessors=tuple(links[rep]),
            is_collapsed=rep in collapsed,
        )
        for rep in visible_order
    )
    return CollapsedView(
        visible_tasks=visible_tasks,
        visible_edges=tuple(edges),
        representative_of=representative_of,
    )


__all__ = ["project_collapsed_view", "visible_representative"]
