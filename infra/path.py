# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "NetworkPlanner"
COMPANY_NAME = "TECHASH"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory, e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TECHASH\\NetworkPlanner

    macOS:
        ~/Library/Application Support/TECHASH/NetworkPlanner

    Linux:
        ~/.local/share/TECHASH/NetworkPlanner
    """
    try:
        if sys.platform.startswith("win"):
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif sys.platform == "darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

        path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Last-resort fallback: use home directory
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_export_dir() -> Path:
    """
    Folder for exported diagrams and schedule workbooks under the user data dir.
    """
    path = user_data_dir() / "exports"
    path.mkdir(parents=True, exist_ok=True)
    return path
