from __future__ import annotations

from dataclasses import replace
from typing import Dict, List

from core.domain.task import Task
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.models import ScheduleResult
from core.services.scheduling.passes import TimeMap

CRITICAL_TOLERANCE = 1e-3


def _free_float(graph: ScheduleGraph, task_id: str, es: TimeMap, ef: TimeMap, project_finish: float) -> float:
    finish = ef[task_id] or 0
    successor_starts = [es[succ_id] or 0 for succ_id in graph.successors_of[task_id]]
    if successor_starts:
        return min(successor_starts) - finish
    return project_finish - finish


def build_schedule_result(
    graph: ScheduleGraph,
    es: TimeMap,
    ef: TimeMap,
    ls: TimeMap,
    lf: TimeMap,
    durations: Dict[str, float],
    project_finish: float,
    forward_sweeps: int = 0,
) -> ScheduleResult:
    tasks: List[Task] = []
    critical: List[str] = []

    for task_id in graph.order:
        task = graph.tasks_by_id[task_id]

        if graph.is_summary(task_id):
            # summaries aggregate their children and are never scheduled on their own
            tasks.append(
                replace(
                    task,
                    duration=durations[task_id],
                    early_start=es[task_id],
                    early_finish=ef[task_id],
                    late_start=ls[task_id],
                    late_finish=lf[task_id],
                    total_float=0,
                    free_float=None,
                    is_critical=False,
                    is_summary=True,
                )
            )
            continue

        total_float = (ls[task_id] or 0) - (es[task_id] or 0)
        is_critical = abs(total_float) < CRITICAL_TOLERANCE
        if is_critical:
            critical.append(task_id)

        tasks.append(
            replace(
                task,
                duration=durations[task_id],
                early_start=es[task_id],
                early_finish=ef[task_id],
                late_start=ls[task_id],
                late_finish=lf[task_id],
                total_float=total_float,
                free_float=_free_float(graph, task_id, es, ef, project_finish),
                is_critical=is_critical,
                is_summary=False,
            )
        )

    return ScheduleResult(
        tasks=tuple(tasks),
        project_duration=project_finish,
        critical_task_ids=tuple(critical),
        forward_sweeps=forward_sweeps,
    )


__all__ = ["CRITICAL_TOLERANCE", "build_schedule_result"]
