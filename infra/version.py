from __future__ import annotations

import os
from importlib import metadata

DISTRIBUTION_NAME = "network-planner"
_FALLBACK_VERSION = "0.0.0+local"


def get_app_version() -> str:
    """PM_APP_VERSION wins; otherwise the installed distribution version."""
    env_override = (os.getenv("PM_APP_VERSION") or "").strip()
    if env_override:
        return env_override
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        # running from a source checkout without `pip install -e .`
        return _FALLBACK_VERSION


__all__ = ["DISTRIBUTION_NAME", "get_app_version"]
