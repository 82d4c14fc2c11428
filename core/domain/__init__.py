from core.domain.enums import TaskType
from core.domain.identifiers import generate_id
from core.domain.plan import ProjectPlan
from core.domain.task import Task

__all__ = [
    "generate_id",
    "TaskType",
    "Task",
    "ProjectPlan",
]
