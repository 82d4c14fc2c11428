from __future__ import annotations

import os


DEFAULT_SWEEP_HEADROOM = 2


def sweep_headroom() -> int:
    raw = (os.getenv("PM_SCHEDULE_SWEEP_HEADROOM", "") or "").strip()
    if not raw:
        return DEFAULT_SWEEP_HEADROOM
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_SWEEP_HEADROOM
    return max(1, value)


def max_sweeps(task_count: int) -> int:
    """
    Upper bound on relaxation sweeps for a network of `task_count` tasks.

    An acyclic network settles after at most one sweep per task plus one quiet sweep
    confirming nothing moved; anything beyond the headroom means a loop.
    """
    return max(0, task_count) + sweep_headroom()


__all__ = ["DEFAULT_SWEEP_HEADROOM", "max_sweeps", "sweep_headroom"]
