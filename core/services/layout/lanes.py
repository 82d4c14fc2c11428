from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from core.domain.task import Task
from core.services.layout.models import LaneAssignment, LayoutResult
from core.services.layout.policy import default_zone_label
from core.services.layout.zones import build_zone_meta, order_zones, zone_of

logger = logging.getLogger(__name__)

FREE_LANE_TOLERANCE = 0.1
CONTINUITY_TOLERANCE = 0.01
_FREE = float("-inf")


def _start(task: Task) -> float:
    return task.early_start or 0


def _finish(task: Task) -> float:
    return task.early_finish or 0


def _lane_is_free(lanes: List[float], lane: int, at: float) -> bool:
    return lanes[lane] <= at + FREE_LANE_TOLERANCE


def _continuity_lane(
    task: Task,
    zone: str,
    default_zone: str,
    tasks_by_id: Dict[str, Task],
    lane_of: Dict[str, int],
) -> Optional[int]:
    """Lane of the first same-zone predecessor that hands over exactly at this start."""
    start = _start(task)
    for pred_id in task.predecessors:
        pred = tasks_by_id.get(pred_id)
        if pred is None or zone_of(pred, default_zone) != zone:
            continue
        if abs(_finish(pred) - start) < CONTINUITY_TOLERANCE:
            return lane_of.get(pred.id)
    return None


def assign_zone_lanes(
    zone: str,
    zone_tasks: Sequence[Task],
    default_zone: str,
    tasks_by_id: Dict[str, Task],
    lane_of: Dict[str, int],
) -> tuple[list[tuple[Task, int]], int]:
    """
    Greedy lane assignment for one zone.

    Returns (task, lane) pairs in processing order and the number of lanes opened.
    `lane_of` is filled in as tasks are placed so later tasks can follow their
    predecessor's row.
    """
    ordered = sorted(zone_tasks, key=lambda t: (_start(t), str(t.id)))
    lanes: List[float] = []
    placed: list[tuple[Task, int]] = []

    for task in ordered:
        start = _start(task)
        lane: Optional[int] = None

        if task.manual_lane is not None and int(task.manual_lane) >= 0:
            lane = int(task.manual_lane)
            while len(lanes) <= lane:
                lanes.append(_FREE)
        else:
            pred_lane = _continuity_lane(task, zone, default_zone, tasks_by_id, lane_of)
            if pred_lane is not None and pred_lane < len(lanes) and _lane_is_free(lanes, pred_lane, start):
                lane = pred_lane
            if lane is None:
                lane = next((i for i in range(len(lanes)) if _lane_is_free(lanes, i, start)), None)
            if lane is None:
                lane = len(lanes)
                lanes.append(_FREE)

        lanes[lane] = max(lanes[lane], _finish(task))
        lane_of[task.id] = lane
        placed.append((task, lane))

    return placed, len(lanes)


def layout(solved_tasks: Sequence[Task], zone_order: Optional[Sequence[str]] = None) -> LayoutResult:
    """
    Row assignment for a solved snapshot.

    Expanded summary tasks are skipped, their children carry the rows. Pass the
    visible tasks of a collapsed view to lay out a collapsed diagram. Schedule values
    are read, never changed.
    """
    default_zone = default_zone_label()
    tasks = [t for t in solved_tasks if not (t.is_summary and not t.is_collapsed)]
    tasks_by_id = {t.id: t for t in tasks}

    by_zone: Dict[str, List[Task]] = {}
    for task in tasks:
        by_zone.setdefault(zone_of(task, default_zone), []).append(task)

    rows: List[LaneAssignment] = []
    zones = []
    lane_of: Dict[str, int] = {}
    current_row = 0

    for index, zone in enumerate(order_zones(by_zone, zone_order)):
        placed, lane_count = assign_zone_lanes(zone, by_zone[zone], default_zone, tasks_by_id, lane_of)
        for task, lane in placed:
            rows.append(
                LaneAssignment(
                    task=task,
                    zone=zone,
                    lane_index=lane,
                    global_row_index=current_row + lane,
                )
            )
        meta = build_zone_meta(zone, index, current_row, lane_count)
        zones.append(meta)
        current_row = meta.end_row

    duration = max((_finish(t) for t in tasks), default=0)
    logger.debug("Laid out %s tasks in %s zones over %s rows", len(rows), len(zones), current_row)
    return LayoutResult(
        rows=tuple(rows),
        zones=tuple(zones),
        total_rows=current_row,
        project_duration=max(duration, 0),
    )


__all__ = ["CONTINUITY_TOLERANCE", "FREE_LANE_TOLERANCE", "assign_zone_lanes", "layout"]
