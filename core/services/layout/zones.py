from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from core.domain.task import Task
from core.services.layout.models import ZoneMeta
from core.services.layout.policy import default_zone_label

ZONE_COLORS = (
    "#2563eb",
    "#059669",
    "#d97706",
    "#7c3aed",
    "#db2777",
    "#0891b2",
    "#4f46e5",
    "#ea580c",
    "#65a30d",
    "#be185d",
)


def zone_of(task: Task, default: Optional[str] = None) -> str:
    zone = (task.zone or "").strip()
    if zone:
        return zone
    return default if default is not None else default_zone_label()


def order_zones(zones: Iterable[str], zone_order: Optional[Sequence[str]] = None) -> List[str]:
    """
    Display order of zones.

    Zones named in `zone_order` come first in list order. The rest follow
    alphabetically. Without an explicit order everything is alphabetical.
    """
    unique = list(dict.fromkeys(zones))
    if not zone_order:
        return sorted(unique)

    rank = {}
    for index, name in enumerate(zone_order):
        rank.setdefault((name or "").strip(), index)
    listed = sorted((zone for zone in unique if zone in rank), key=lambda zone: rank[zone])
    unlisted = sorted(zone for zone in unique if zone not in rank)
    return listed + unlisted


def zone_color(index: int) -> str:
    return ZONE_COLORS[index % len(ZONE_COLORS)]


def build_zone_meta(name: str, index: int, start_row: int, lane_count: int) -> ZoneMeta:
    row_count = max(lane_count, 1)
    return ZoneMeta(
        name=name,
        start_row=start_row,
        row_count=row_count,
        end_row=start_row + row_count,
        color=zone_color(index),
    )


__all__ = ["ZONE_COLORS", "build_zone_meta", "order_zones", "zone_color", "zone_of"]
