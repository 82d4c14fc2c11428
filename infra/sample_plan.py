from __future__ import annotations

from datetime import date

from core.domain import ProjectPlan, Task, TaskType


def build_sample_plan(start_date: date | None = None) -> ProjectPlan:
    """Airport terminal lighting installation, four work zones and one summary block."""
    tasks = [
        Task(id="10", name="Site preparation", duration=20, zone="Zone 1"),
        Task(id="20", name="Survey and setting out", duration=92, predecessors=("10",), zone="Zone 1"),
        Task(id="30", name="Trenching and conduits", duration=30, predecessors=("20",), zone="Zone 1"),
        Task(id="40", name="Light box installation", duration=90, predecessors=("30",), zone="Zone 1"),
        Task(id="50", name="Cable laying and jointing", duration=100, predecessors=("40",), zone="Zone 1"),
        Task(id="60", name="Low-voltage pressure test", duration=30, predecessors=("50",), zone="Zone 1"),
        Task(id="70", name="Fixture installation", duration=30, predecessors=("60",), zone="Zone 1"),
        Task(id="80", name="Zone 2 combined works", duration=0, predecessors=("10",), zone="Zone 2"),
        Task(id="81", name="Survey and setting out", duration=32, predecessors=("10",), zone="Zone 2", parent_id="80"),
        Task(id="90", name="Trenching and conduits", duration=233, predecessors=("81",), zone="Zone 2", parent_id="80"),
        Task(id="100", name="Light box installation", duration=125, predecessors=("90",), zone="Zone 2", parent_id="80"),
        Task(id="110", name="Cable laying", duration=100, predecessors=("100",), zone="Zone 2", parent_id="80"),
        Task(id="120", name="High mast foundations", duration=42, predecessors=("10",), zone="Zone 3"),
        Task(id="130", name="High mast erection", duration=44, predecessors=("120",), zone="Zone 3"),
        Task(id="140", name="Trenching and conduits", duration=202, predecessors=("130",), zone="Zone 3"),
        Task(id="150", name="Substation installation", duration=47, predecessors=("140",), zone="Zone 3"),
        Task(id="200", name="Structure and finishes", duration=76, predecessors=("10",), zone="Zone 4"),
        Task(id="210", name="MEP pipework", duration=112, predecessors=("200",), zone="Zone 4"),
        Task(id="220", name="MEP equipment and commissioning", duration=60, predecessors=("210",), zone="Zone 4"),
        Task(id="230", name="Airfield lighting commissioning", duration=59, predecessors=("220",), zone="Zone 4"),
        Task(
            id="240",
            name="Completion acceptance",
            duration=0,
            predecessors=("70", "110", "150", "230"),
            type=TaskType.MILESTONE,
            zone="Zone 4",
        ),
    ]
    return ProjectPlan.create(
        name="Airport terminal lighting installation master schedule",
        tasks=tasks,
        zone_order=("Zone 1", "Zone 2", "Zone 3", "Zone 4"),
        start_date=start_date,
    )


__all__ = ["build_sample_plan"]
