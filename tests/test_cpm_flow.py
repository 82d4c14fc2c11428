from __future__ import annotations

import math

import pytest

from core.domain import Task
from core.exceptions import CyclicDependencyError, ValidationError
from core.services.scheduling import compute_schedule, passes, solve
from core.services.scheduling.graph import build_schedule_graph
from core.services.scheduling.passes import (
    project_duration,
    run_backward_pass,
    run_forward_pass,
    run_rollup_pass,
)


def _by_id(tasks):
    return {t.id: t for t in tasks}


def test_cpm_linear_chain_is_fully_critical(make_task):
    tasks = [
        make_task("A", 5),
        make_task("B", 3, ["A"]),
        make_task("C", 2, ["B"]),
    ]

    result = compute_schedule(tasks)
    solved = result.by_id()

    assert (solved["A"].early_start, solved["A"].early_finish) == (0, 5)
    assert (solved["B"].early_start, solved["B"].early_finish) == (5, 8)
    assert (solved["C"].early_start, solved["C"].early_finish) == (8, 10)
    assert result.project_duration == 10
    for task_id in ("A", "B", "C"):
        assert solved[task_id].total_float == 0
        assert solved[task_id].is_critical
    assert result.critical_task_ids == ("A", "B", "C")
    # one sweep to settle, one quiet sweep to confirm
    assert result.forward_sweeps == 2


def test_cpm_parallel_branch_carries_float(make_task):
    tasks = [
        make_task("A", 5),
        make_task("B", 3, ["A"]),
        make_task("C", 2, ["B"]),
        make_task("D", 4),
        make_task("E", 2, ["D"]),
        make_task("F", 0, ["E", "C"]),
    ]

    solved = _by_id(solve(tasks))

    assert (solved["D"].early_start, solved["D"].early_finish) == (0, 4)
    assert (solved["E"].early_start, solved["E"].early_finish) == (4, 6)
    assert (solved["F"].early_start, solved["F"].early_finish) == (10, 10)

    assert solved["E"].late_start == 8
    assert solved["E"].late_finish == 10
    assert solved["E"].total_float == 4
    assert solved["D"].total_float == 4
    assert not solved["D"].is_critical
    assert not solved["E"].is_critical

    # E waits 4 units before F can start; D hands over to E immediately
    assert solved["E"].free_float == 4
    assert solved["D"].free_float == 0
    assert solved["F"].is_critical
    assert solved["F"].free_float == 0


def test_cpm_constraint_date_only_delays(make_task):
    tasks = [
        make_task("X", 3, constraint_date=10),
        make_task("A", 5),
        make_task("B", 1, ["A"], constraint_date=2),
    ]

    solved = _by_id(solve(tasks))

    assert (solved["X"].early_start, solved["X"].early_finish) == (10, 13)
    # constraint earlier than the predecessor finish has no effect
    assert solved["B"].early_start == 5


def test_cpm_non_topological_order_gives_same_schedule(make_task):
    ordered = [
        make_task("A", 5),
        make_task("B", 3, ["A"]),
        make_task("C", 2, ["B"]),
    ]
    reversed_tasks = list(reversed(ordered))

    expected = _by_id(solve(ordered))
    actual = _by_id(solve(reversed_tasks))

    assert actual == expected
    assert [t.id for t in solve(reversed_tasks)] == ["C", "B", "A"]


def test_cpm_empty_input_returns_empty_schedule():
    result = compute_schedule([])

    assert result.tasks == ()
    assert result.project_duration == 0
    assert result.critical_task_ids == ()
    assert solve([]) == []


def test_cpm_does_not_mutate_input_and_ignores_stale_values(make_task):
    stale = make_task("A", 5, early_start=99, early_finish=104, total_float=7, is_critical=False)
    tasks = [stale, make_task("B", 3, ["A"])]

    solved = _by_id(solve(tasks))

    assert solved["A"].early_start == 0
    assert solved["A"].is_critical
    assert stale.early_start == 99
    assert tasks[1].early_start is None


def test_cpm_solve_is_idempotent(sample_plan):
    once = solve(sample_plan.tasks)
    twice = solve(once)

    assert twice == once


def test_cpm_dangling_predecessor_is_ignored(make_task):
    tasks = [make_task("A", 5), make_task("B", 3, ["A", "ghost"])]

    solved = _by_id(solve(tasks))

    assert solved["B"].early_start == 5
    assert solved["B"].predecessors == ("A", "ghost")


@pytest.mark.parametrize("raw", [None, -4, math.nan, math.inf])
def test_cpm_missing_or_negative_duration_counts_as_zero(make_task, raw):
    tasks = [make_task("A", raw), make_task("B", 2, ["A"])]

    solved = _by_id(solve(tasks))

    assert solved["A"].early_finish == 0
    assert solved["A"].duration == 0
    assert solved["B"].early_start == 0


def test_cpm_non_numeric_duration_is_rejected(make_task):
    with pytest.raises(ValidationError) as exc:
        solve([make_task("A", "five")])
    assert exc.value.code == "TASK_DURATION_INVALID"


def test_cpm_duplicate_and_blank_ids_are_rejected(make_task):
    with pytest.raises(ValidationError) as exc_dup:
        solve([make_task("A", 1), make_task("A", 2)])
    assert exc_dup.value.code == "TASK_ID_DUPLICATE"

    with pytest.raises(ValidationError) as exc_blank:
        solve([make_task("  ", 1)])
    assert exc_blank.value.code == "TASK_ID_BLANK"


def test_cpm_two_task_cycle_is_reported_with_path(make_task):
    tasks = [make_task("A", 1, ["B"]), make_task("B", 1, ["A"])]

    with pytest.raises(CyclicDependencyError) as exc:
        solve(tasks)

    assert exc.value.code == "SCHEDULE_CYCLE"
    assert exc.value.cycle[0] == exc.value.cycle[-1]
    assert set(exc.value.cycle) == {"A", "B"}


def test_cpm_self_loop_and_zero_duration_cycle_are_rejected(make_task):
    with pytest.raises(CyclicDependencyError) as exc_self:
        solve([make_task("A", 2, ["A"])])
    assert exc_self.value.cycle == ("A", "A")

    # zero durations would settle numerically but the network still loops
    with pytest.raises(CyclicDependencyError):
        solve([make_task("A", 0, ["C"]), make_task("B", 0, ["A"]), make_task("C", 0, ["B"])])


def test_cpm_cycle_in_one_branch_fails_whole_solve(make_task):
    tasks = [
        make_task("A", 5),
        make_task("B", 3, ["A", "C"]),
        make_task("C", 2, ["B"]),
    ]

    with pytest.raises(CyclicDependencyError) as exc:
        compute_schedule(tasks)
    assert "B" in exc.value.cycle and "C" in exc.value.cycle


def test_forward_pass_sweep_cap_stops_unbounded_growth(make_task, monkeypatch):
    monkeypatch.setenv("PM_SCHEDULE_SWEEP_HEADROOM", "1")
    graph = build_schedule_graph([make_task("A", 1, ["B"]), make_task("B", 1, ["A"])])

    with pytest.raises(CyclicDependencyError) as exc:
        run_forward_pass(graph)

    assert exc.value.code == "SCHEDULE_CYCLE"
    assert exc.value.cycle == ()
    assert "3 sweeps" in str(exc.value)


def test_cpm_sample_plan_critical_path(sample_plan):
    result = compute_schedule(sample_plan.tasks)
    solved = result.by_id()

    assert result.project_duration == 510
    assert result.critical_task_ids == ("10", "81", "90", "100", "110", "240")
    assert solved["70"].early_finish == 392
    assert solved["70"].total_float == 118
    assert solved["240"].is_milestone
    assert solved["240"].early_start == 510


def test_task_create_generates_unique_ids():
    first = Task.create("Alpha", 3)
    second = Task.create("Beta", 2, predecessors=[first.id])

    assert first.id != second.id
    assert second.predecessors == (first.id,)


def test_cpm_constraint_values_are_normalized(make_task):
    tasks = [
        make_task("A", 2, constraint_date=math.nan),
        make_task("B", 2, constraint_date="3"),
        make_task("C", 1, ["A"], constraint_date=" 1.5 "),
    ]

    solved = _by_id(solve(tasks))

    # NaN means unconstrained, numeric text is read as an offset
    assert (solved["A"].early_start, solved["A"].early_finish) == (0, 2)
    assert (solved["B"].early_start, solved["B"].early_finish) == (3, 5)
    assert solved["C"].early_start == 2


@pytest.mark.parametrize("raw", ["next week", math.inf, True, object()])
def test_cpm_invalid_constraint_is_rejected(make_task, raw):
    with pytest.raises(ValidationError) as exc:
        solve([make_task("A", 2, constraint_date=raw)])
    assert exc.value.code == "TASK_CONSTRAINT_INVALID"


def test_cpm_infinite_duration_does_not_look_like_a_cycle(make_task):
    tasks = [make_task("A", 2), make_task("B", math.inf, ["A"])]

    result = compute_schedule(tasks)

    assert result.project_duration == 2
    assert result.by_id()["B"].early_finish == 2


def test_rollup_pass_sweep_cap_reports_hierarchy_error(make_task, monkeypatch):
    graph = build_schedule_graph([
        make_task("R", 0),
        make_task("S", 0, parent_id="R"),
        make_task("X", 4, parent_id="S"),
    ])
    es, ef, _ = run_forward_pass(graph)
    monkeypatch.setattr(passes, "max_sweeps", lambda count: 1)

    with pytest.raises(CyclicDependencyError) as exc:
        run_rollup_pass(graph, es, ef)

    assert exc.value.code == "HIERARCHY_CYCLE"
    assert exc.value.cycle == ()
    assert "1 sweeps" in str(exc.value)


def test_backward_pass_sweep_cap_reports_schedule_error(make_task, monkeypatch):
    graph = build_schedule_graph([make_task("A", 5), make_task("B", 3, ["A"])])
    es, ef, _ = run_forward_pass(graph)
    monkeypatch.setattr(passes, "max_sweeps", lambda count: 1)

    with pytest.raises(CyclicDependencyError) as exc:
        run_backward_pass(graph, dict(graph.durations), project_duration(ef))

    assert exc.value.code == "SCHEDULE_CYCLE"
    assert exc.value.cycle == ()
    assert "backward pass" in str(exc.value)
