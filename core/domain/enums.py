from __future__ import annotations

from enum import Enum


class TaskType(str, Enum):
    NORMAL = "Normal"
    VIRTUAL = "Virtual"
    MILESTONE = "Milestone"


__all__ = ["TaskType"]
