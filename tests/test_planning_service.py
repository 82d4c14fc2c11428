from __future__ import annotations

import pytest

from core.domain import ProjectPlan, Task
from core.exceptions import CyclicDependencyError, NotFoundError, ValidationError


def _record(signal):
    received = []
    signal.connect(received.append)
    return received


def test_build_diagram_runs_full_pipeline(services, sample_plan):
    planning = services["planning_service"]

    diagram = planning.build_diagram(sample_plan)

    assert diagram.plan_id == sample_plan.id
    assert diagram.project_duration == 510
    assert "110" in diagram.critical_task_ids
    assert len(diagram.schedule.tasks) == len(sample_plan.tasks)
    # expanded summary 80 is replaced by its children
    assert "80" not in diagram.view.visible_ids
    assert diagram.layout.row_of("80") is None
    assert diagram.layout.total_rows == 4


def test_build_diagram_with_collapsed_summary(services, sample_plan):
    planning = services["planning_service"]

    diagram = planning.build_diagram(sample_plan, collapsed_ids=["80"])

    assert "80" in diagram.view.visible_ids
    assert "81" not in diagram.view.visible_ids
    row = diagram.layout.row_of("80")
    assert row is not None
    assert row.zone == "Zone 2"
    assert row.task.early_start == 20


def test_build_diagram_emits_schedule_and_layout_events(services, sample_plan):
    planning = services["planning_service"]
    events = services["events"]
    schedule_events = _record(events.schedule_changed)
    layout_events = _record(events.layout_changed)

    planning.build_diagram(sample_plan)

    assert schedule_events == [sample_plan.id]
    assert layout_events == [sample_plan.id]


def test_recalculate_propagates_cycle_without_events(services):
    planning = services["planning_service"]
    schedule_events = _record(services["events"].schedule_changed)
    plan = ProjectPlan.create(
        "Loop",
        tasks=[Task(id="A", duration=1, predecessors=("B",)), Task(id="B", duration=1, predecessors=("A",))],
    )

    with pytest.raises(CyclicDependencyError) as exc:
        planning.recalculate(plan)

    assert exc.value.code == "SCHEDULE_CYCLE"
    assert schedule_events == []


def test_toggle_collapsed_flips_flag_on_summary(services, sample_plan):
    planning = services["planning_service"]
    collapse_events = _record(services["events"].collapse_changed)

    collapsed = planning.toggle_collapsed(sample_plan, "80")
    expanded = planning.toggle_collapsed(collapsed, "80")

    assert collapsed.get_task("80").is_collapsed
    assert not expanded.get_task("80").is_collapsed
    assert not sample_plan.get_task("80").is_collapsed
    assert collapse_events == ["80", "80"]

    diagram = planning.build_diagram(collapsed)
    assert "80" in diagram.view.visible_ids


def test_toggle_collapsed_rejects_unknown_and_leaf_tasks(services, sample_plan):
    planning = services["planning_service"]

    with pytest.raises(NotFoundError) as exc_missing:
        planning.toggle_collapsed(sample_plan, "999")
    assert exc_missing.value.code == "TASK_NOT_FOUND"

    with pytest.raises(ValidationError) as exc_leaf:
        planning.toggle_collapsed(sample_plan, "20")
    assert exc_leaf.value.code == "TASK_NOT_SUMMARY"


def test_plan_helpers_return_new_instances(sample_plan):
    reordered = sample_plan.with_zone_order(["Zone 4"])

    assert reordered.zone_order == ("Zone 4",)
    assert sample_plan.zone_order == ("Zone 1", "Zone 2", "Zone 3", "Zone 4")
    assert reordered.get_task("missing") is None


def test_signal_disconnect_stops_delivery(services):
    signal = services["events"].layout_changed
    received = []
    signal.connect(received.append)
    signal.connect(received.append)
    assert signal.subscriber_count() == 1

    signal.emit("p1")
    signal.disconnect(received.append)
    signal.emit("p2")

    assert received == ["p1"]
    assert signal.subscriber_count() == 0
