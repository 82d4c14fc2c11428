from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from core.domain.task import Task


def offset_to_date(start_date: date, offset: Optional[float]) -> date:
    """Calendar date of a schedule offset, counting plain calendar days."""
    return start_date + timedelta(days=int(offset or 0))


def task_start_date(start_date: date, task: Task) -> date:
    return offset_to_date(start_date, task.early_start)


def task_finish_date(start_date: date, task: Task) -> date:
    """
    Last day the task occupies.

    Offsets are exclusive at the finish, so a 3-unit task starting at 0 ends on day 2.
    Zero-length tasks finish on their start day.
    """
    start = task.early_start or 0
    finish = task.early_finish if task.early_finish is not None else start
    last_day = max(start, finish - 1)
    return offset_to_date(start_date, last_day)


def date_to_offset(start_date: date, value: date) -> int:
    return (value - start_date).days


__all__ = ["date_to_offset", "offset_to_date", "task_finish_date", "task_start_date"]
