from __future__ import annotations

import random
from dataclasses import replace

from core.services.scheduling import compute_schedule, solve


def _float_scenario(make_task):
    return [
        make_task("A", 5),
        make_task("B", 3, ["A"]),
        make_task("C", 2, ["B"]),
        make_task("D", 4),
        make_task("E", 2, ["D"]),
        make_task("F", 0, ["E", "C"]),
    ]


def test_raising_a_constraint_never_moves_anything_earlier(make_task):
    base = {t.id: t for t in solve(_float_scenario(make_task))}

    for constraint in (1, 3, 7, 12):
        delayed = [
            replace(t, constraint_date=constraint) if t.id == "D" else t
            for t in _float_scenario(make_task)
        ]
        solved = {t.id: t for t in solve(delayed)}
        for task_id, task in solved.items():
            assert task.early_start >= base[task_id].early_start
            assert task.early_finish >= base[task_id].early_finish


def test_longest_path_has_zero_float(sample_plan):
    result = compute_schedule(sample_plan.tasks)
    by_id = result.by_id()

    current = max((t for t in result.tasks if not t.is_summary), key=lambda t: t.early_finish)
    assert current.early_finish == result.project_duration
    path = [current.id]
    while True:
        driving = [
            by_id[pred_id]
            for pred_id in current.predecessors
            if pred_id in by_id
            and not by_id[pred_id].is_summary
            and by_id[pred_id].early_finish == current.early_start
        ]
        if not driving:
            break
        current = driving[0]
        path.append(current.id)

    assert current.early_start == 0
    for task_id in path:
        assert by_id[task_id].total_float == 0
        assert by_id[task_id].is_critical


def test_result_does_not_depend_on_input_order(sample_plan):
    expected = {t.id: t for t in solve(sample_plan.tasks)}
    shuffled = list(sample_plan.tasks)
    random.Random(7).shuffle(shuffled)

    actual = {t.id: t for t in solve(shuffled)}

    assert actual == expected


def test_late_dates_never_precede_early_dates(sample_plan):
    for task in solve(sample_plan.tasks):
        assert task.late_start >= task.early_start
        assert task.late_finish >= task.early_finish
        if not task.is_summary:
            assert task.free_float <= task.total_float
