"""Worker-pool engine for loadpool.

A :class:`Pool` owns one :class:`Target` per URL and spawns a fixed number
of :class:`Worker` threads per target. Each worker calls the shared
:class:`RequestExecutor` in a tight loop until its target is signalled to
stop.
"""

from __future__ import annotations

from loadpool.engine.executor import Outcome, RequestExecutor, TimeoutPolicy
from loadpool.engine.pool import Pool
from loadpool.engine.target import Target, TargetSnapshot
from loadpool.engine.worker import Worker, WorkerState

__all__ = [
    "Outcome",
    "Pool",
    "RequestExecutor",
    "Target",
    "TargetSnapshot",
    "TimeoutPolicy",
    "Worker",
    "WorkerState",
]
