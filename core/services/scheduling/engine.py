from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from core.domain.task import Task
from core.services.scheduling.graph import build_schedule_graph, validate_acyclic
from core.services.scheduling.models import ScheduleResult
from core.services.scheduling.passes import (
    project_duration,
    run_backward_pass,
    run_forward_pass,
    run_rollup_pass,
    summary_duration,
)
from core.services.scheduling.results import build_schedule_result

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    CPM engine over offset-based time units:
    - Summary detection from parent links
    - Forward pass: ES/EF, relaxed to a fixed point, honouring constraint dates
    - Summary rollup: span of the children
    - Backward pass: LS/LF from the project finish
    - Total float, free float and criticality

    Every call works on a fresh copy of the snapshot; the input tasks are never touched.
    Computed fields already present on the input are ignored.
    """

    def compute(self, tasks: Iterable[Task]) -> ScheduleResult:
        snapshot = list(tasks)
        if not snapshot:
            return ScheduleResult(tasks=(), project_duration=0, critical_task_ids=())

        graph = build_schedule_graph(snapshot)
        validate_acyclic(graph)

        es, ef, sweeps = run_forward_pass(graph)
        es, ef = run_rollup_pass(graph, es, ef)
        finish = project_duration(ef)

        durations: Dict[str, float] = dict(graph.durations)
        for summary_id in graph.summary_ids:
            durations[summary_id] = summary_duration(es[summary_id], ef[summary_id], durations[summary_id])

        ls, lf = run_backward_pass(graph, durations, finish)

        result = build_schedule_result(
            graph=graph,
            es=es,
            ef=ef,
            ls=ls,
            lf=lf,
            durations=durations,
            project_finish=finish,
            forward_sweeps=sweeps,
        )
        logger.debug(
            "Solved %s tasks (%s summaries): duration=%s, critical=%s",
            len(result.tasks),
            len(graph.summary_ids),
            finish,
            len(result.critical_task_ids),
        )
        return result

    def solve(self, tasks: Iterable[Task]) -> List[Task]:
        return list(self.compute(tasks).tasks)


def solve(tasks: Iterable[Task]) -> List[Task]:
    """Annotated copy of `tasks`; raises CyclicDependencyError on looping input."""
    return SchedulingEngine().solve(tasks)


def compute_schedule(tasks: Iterable[Task]) -> ScheduleResult:
    return SchedulingEngine().compute(tasks)


__all__ = ["SchedulingEngine", "compute_schedule", "solve"]
