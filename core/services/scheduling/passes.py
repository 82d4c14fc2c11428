from __future__ import annotations

import logging
from typing import Dict, Optional

from core.exceptions import CyclicDependencyError
from core.services.scheduling.graph import ScheduleGraph
from core.services.scheduling.policy import max_sweeps

logger = logging.getLogger(__name__)

TimeMap = Dict[str, Optional[float]]


def _forward_sweep(graph: ScheduleGraph, es: TimeMap, ef: TimeMap) -> tuple[TimeMap, TimeMap, bool]:
    es = dict(es)
    ef = dict(ef)
    changed = False

    for task_id in graph.leaf_ids:
        max_es: Optional[float] = None
        for pred_id in graph.predecessors_of[task_id]:
            pred_finish = ef[pred_id]
            if pred_finish is not None and (max_es is None or pred_finish > max_es):
                max_es = pred_finish

        constraint = graph.constraints[task_id]
        if constraint is not None:
            # manual constraints only ever push the start later
            max_es = constraint if max_es is None else max(max_es, constraint)

        start = 0 if max_es is None else max_es
        if es[task_id] != start:
            es[task_id] = start
            ef[task_id] = start + graph.durations[task_id]
            changed = True

    return es, ef, changed


def run_forward_pass(graph: ScheduleGraph) -> tuple[TimeMap, TimeMap, int]:
    """
    Earliest start/finish for every non-summary task, relaxed until a sweep is quiet.

    Snapshot order is not assumed to be topological, so one sweep is not enough in
    general. Returns (es, ef, sweeps).
    """
    es: TimeMap = {task_id: None for task_id in graph.order}
    ef: TimeMap = {task_id: None for task_id in graph.order}

    limit = max_sweeps(len(graph.leaf_ids))
    for sweep in range(1, limit + 1):
        es, ef, changed = _forward_sweep(graph, es, ef)
        if not changed:
            logger.debug("Forward pass settled after %s sweeps", sweep)
            return es, ef, sweep

    logger.warning("Forward pass did not settle within %s sweeps", limit)
    raise CyclicDependencyError(
        f"Cannot schedule project: forward pass did not settle within {limit} sweeps.",
        code="SCHEDULE_CYCLE",
    )


def _rollup_sweep(graph: ScheduleGraph, es: TimeMap, ef: TimeMap) -> tuple[TimeMap, TimeMap, bool]:
    es = dict(es)
    ef = dict(ef)
    changed = False

    for summary_id in graph.summary_ids:
        starts = []
        finishes = []
        for child_id in graph.children_of[summary_id]:
            if es[child_id] is None or ef[child_id] is None:
                continue
            starts.append(es[child_id])
            finishes.append(ef[child_id])
        if not starts:
            continue

        min_start = min(starts)
        max_finish = max(finishes)
        if es[summary_id] != min_start or ef[summary_id] != max_finish:
            es[summary_id] = min_start
            ef[summary_id] = max_finish
            changed = True

    return es, ef, changed


def run_rollup_pass(graph: ScheduleGraph, es: TimeMap, ef: TimeMap) -> tuple[TimeMap, TimeMap]:
    """Summary spans from their direct children; nested summaries need extra sweeps."""
    limit = max_sweeps(len(graph.summary_ids))
    for sweep in range(1, limit + 1):
        es, ef, changed = _rollup_sweep(graph, es, ef)
        if not changed:
            logger.debug("Summary rollup settled after %s sweeps", sweep)
            return es, ef

    logger.warning("Summary rollup did not settle within %s sweeps", limit)
    raise CyclicDependencyError(
        f"Cannot roll up summary tasks: hierarchy did not settle within {limit} sweeps.",
        code="HIERARCHY_CYCLE",
    )


def summary_duration(es: Optional[float], ef: Optional[float], fallback: float) -> float:
    if es is None or ef is None:
        return fallback
    return ef - es


def project_duration(ef: TimeMap) -> float:
    finishes = [value for value in ef.values() if value is not None]
    if not finishes:
        return 0
    return max(finishes)


def _backward_sweep(graph: ScheduleGraph, ls: TimeMap, lf: TimeMap) -> tuple[TimeMap, TimeMap, bool]:
    ls = dict(ls)
    lf = dict(lf)
    changed = False

    for task_id in graph.leaf_ids:
        successors = graph.successors_of[task_id]
        if not successors:
            continue
        late_starts = [ls[succ_id] for succ_id in successors if ls[succ_id] is not None]
        if not late_starts:
            continue
        min_ls = min(late_starts)
        if lf[task_id] != min_ls:
            lf[task_id] = min_ls
            ls[task_id] = min_ls - graph.durations[task_id]
            changed = True

    return ls, lf, changed


def run_backward_pass(
    graph: ScheduleGraph,
    durations: Dict[str, float],
    project_finish: float,
) -> tuple[TimeMap, TimeMap]:
    """
    Latest start/finish, seeded with the project finish for every task.

    `durations` must already carry the derived spans of summary tasks; only
    non-summary tasks are relaxed against their successors.
    """
    lf: TimeMap = {task_id: project_finish for task_id in graph.order}
    ls: TimeMap = {task_id: project_finish - durations[task_id] for task_id in graph.order}

    limit = max_sweeps(len(graph.leaf_ids))
    for sweep in range(1, limit + 1):
        ls, lf, changed = _backward_sweep(graph, ls, lf)
        if not changed:
            logger.debug("Backward pass settled after %s sweeps", sweep)
            return ls, lf

    logger.warning("Backward pass did not settle within %s sweeps", limit)
    raise CyclicDependencyError(
        f"Cannot schedule project: backward pass did not settle within {limit} sweeps.",
        code="SCHEDULE_CYCLE",
    )


__all__ = [
    "TimeMap",
    "project_duration",
    "run_backward_pass",
    "run_forward_pass",
    "run_rollup_pass",
    "summary_duration",
]
