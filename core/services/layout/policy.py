from __future__ import annotations

import os


DEFAULT_ZONE_LABEL = "Default Zone"


def default_zone_label() -> str:
    label = (os.getenv("PM_DEFAULT_ZONE", "") or "").strip()
    return label or DEFAULT_ZONE_LABEL


__all__ = ["DEFAULT_ZONE_LABEL", "default_zone_label"]
