from .models import DiagramModel
from .service import PlanningService

__all__ = ["DiagramModel", "PlanningService"]
