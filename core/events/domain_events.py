"""Track schedule and diagram changes so views can refresh."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.schedule_changed: Signal[str] = Signal()  # plan_id
        self.layout_changed: Signal[str] = Signal()    # plan_id
        self.collapse_changed: Signal[str] = Signal()  # summary task id


# SINGLE global instance
domain_events = DomainEvents()
