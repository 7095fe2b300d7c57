from __future__ import annotations

import time

import psutil


def uptime_seconds() -> float:
    """Seconds since this process was created."""

    return max(0.0, time.time() - psutil.Process().create_time())


def memory_usage() -> dict[str, int]:
    info = psutil.Process().memory_info()
    return {"rss": int(info.rss), "vms": int(info.vms)}
