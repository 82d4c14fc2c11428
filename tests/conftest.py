# tests/conftest.py
from datetime import date

import pytest

import infra.operational_support as operational_support
from core.domain import Task
from core.events.domain_events import DomainEvents
from core.services.planning import PlanningService
from core.services.scheduling import SchedulingEngine
from infra.sample_plan import build_sample_plan


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    # keep support events and exports out of the real user data dir
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for name in ("PM_SCHEDULE_SWEEP_HEADROOM", "PM_DEFAULT_ZONE", "PM_APP_VERSION", "PM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(operational_support, "_GLOBAL_SUPPORT", None)


@pytest.fixture
def services():
    # Recreate what build_services() does, but with a private event hub
    events = DomainEvents()
    scheduling_engine = SchedulingEngine()
    planning_service = PlanningService(scheduling_engine, events)
    return {
        "scheduling_engine": scheduling_engine,
        "planning_service": planning_service,
        "events": events,
    }


@pytest.fixture
def sample_plan():
    return build_sample_plan(start_date=date(2024, 3, 4))


@pytest.fixture
def make_task():
    def _make(task_id, duration=0, predecessors=(), **extra):
        return Task(id=task_id, name=f"Task {task_id}", duration=duration, predecessors=tuple(predecessors), **extra)

    return _make
