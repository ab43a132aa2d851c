"""loadpool: sustained concurrent HTTP load against a list of URLs."""

from __future__ import annotations

from loadpool.engine.executor import Outcome, RequestExecutor, TimeoutPolicy
from loadpool.engine.pool import Pool
from loadpool.engine.runner import LoadRunner
from loadpool.engine.target import Target, TargetSnapshot
from loadpool.engine.worker import Worker, WorkerState
from loadpool.metrics.models import PoolSnapshot, TargetStats
from loadpool.metrics.reporter import StatsReporter

__version__ = "0.1.0"

__all__ = [
    "LoadRunner",
    "Outcome",
    "Pool",
    "PoolSnapshot",
    "RequestExecutor",
    "StatsReporter",
    "Target",
    "TargetSnapshot",
    "TargetStats",
    "TimeoutPolicy",
    "Worker",
    "WorkerState",
]
