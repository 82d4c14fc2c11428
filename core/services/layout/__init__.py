from .collapsed import project_collapsed_view
from .lanes import layout
from .models import CollapsedView, Edge, LaneAssignment, LayoutResult, ZoneMeta
from .zones import ZONE_COLORS, order_zones

__all__ = [
    "CollapsedView",
    "Edge",
    "LaneAssignment",
    "LayoutResult",
    "ZONE_COLORS",
    "ZoneMeta",
    "layout",
    "order_zones",
    "project_collapsed_view",
]
