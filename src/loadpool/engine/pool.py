"""Pool of targets and the worker threads spawned against them."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from loadpool._internal.errors import EngineError
from loadpool._internal.logging import get_logger
from loadpool.engine.target import Target
from loadpool.engine.worker import Worker, WorkerState
from loadpool.metrics.models import PoolSnapshot, TargetStats

if TYPE_CHECKING:
    from collections.abc import Iterable

    from loadpool.engine.executor import RequestExecutor

logger = get_logger("engine.pool")


class Pool:
    """Owns every target and fans out ``max_workers`` workers per target.

    :meth:`run` blocks until every worker has stopped. Nothing in the
    engine ever signals a target, so an undisturbed run never returns;
    stopping is always triggered from outside, through :meth:`stop` or
    :meth:`Target.signal_stop`.

    Attributes:
        max_workers: Workers spawned for each target.
        start_time: Wall-clock creation time (``time.time()``).
    """

    def __init__(self, max_workers: int, executor: RequestExecutor) -> None:
        """Initialize an empty pool.

        Args:
            max_workers: Workers spawned for each target. Must be >= 1.
            executor: Executor shared by all workers.

        Raises:
            EngineError: If ``max_workers`` is less than 1.
        """
        if max_workers < 1:
            msg = f"max_workers must be >= 1, got: {max_workers}"
            raise EngineError(msg)

        self.max_workers = max_workers
        self.start_time = time.time()
        self._started_at = time.monotonic()
        self._executor = executor
        self._targets: list[Target] = []
        self._workers: tuple[Worker, ...] = ()
        self._running = False
        self._state_lock = threading.Lock()

    @property
    def targets(self) -> tuple[Target, ...]:
        """Return the targets in insertion order."""
        return tuple(self._targets)

    @property
    def workers(self) -> tuple[Worker, ...]:
        """Return the workers spawned by the current or last run."""
        return self._workers

    @property
    def is_running(self) -> bool:
        """Return True while :meth:`run` is blocking."""
        return self._running

    @property
    def elapsed_seconds(self) -> float:
        """Return seconds since the pool was created."""
        return time.monotonic() - self._started_at

    @property
    def active_worker_count(self) -> int:
        """Return the number of workers not yet stopped.

        Best effort: the figure is read without synchronizing with the
        workers themselves.
        """
        return sum(1 for w in self._workers if w.state is WorkerState.RUNNING)

    def add_target(self, target: Target) -> None:
        """Append a target.

        Raises:
            EngineError: If the pool is already running.
        """
        with self._state_lock:
            if self._running:
                msg = "cannot add targets while the pool is running"
                raise EngineError(msg)
            self._targets.append(target)

    def populate(self, addresses: Iterable[str]) -> None:
        """Create and append one target per address."""
        for address in addresses:
            self.add_target(Target(address))

    def run(self) -> None:
        """Spawn the workers and block until all of them have stopped.

        Returns immediately when the pool holds no targets. If a worker
        cannot be started, the workers already running are stopped and
        joined before the error is re-raised. If the wait itself is
        interrupted (e.g. ``KeyboardInterrupt``), every target is signalled
        and the interruption propagates without waiting.

        Raises:
            EngineError: If the pool is already running.
        """
        with self._state_lock:
            if self._running:
                msg = "pool is already running"
                raise EngineError(msg)
            self._running = True

        try:
            workers: list[Worker] = []
            for target in self._targets:
                for _ in range(self.max_workers):
                    workers.append(Worker(len(workers), target, self._executor))

            self._workers = tuple(workers)
            logger.info(
                "Starting %d workers (%d per target) against %d targets",
                len(workers),
                self.max_workers,
                len(self._targets),
            )

            started: list[Worker] = []
            try:
                for worker in workers:
                    worker.start()
                    started.append(worker)
            except BaseException:
                logger.exception(
                    "Failed to start worker %d of %d, stopping the pool",
                    len(started),
                    len(workers),
                )
                self._workers = tuple(started)
                self.stop()
                for worker in started:
                    worker.join()
                raise

            try:
                for worker in started:
                    worker.join()
            except BaseException:
                self.stop()
                raise
        finally:
            self._running = False

        logger.info("All workers stopped after %.1fs", self.elapsed_seconds)

    def stop(self) -> None:
        """Signal every target to stop. Safe to call from any thread."""
        logger.info("Stopping %d targets", len(self._targets))
        for target in self._targets:
            target.signal_stop()

    def snapshot(self) -> PoolSnapshot:
        """Return elapsed runtime, live workers and every target's counters."""
        stats = []
        for target in self._targets:
            request_count, error_count = target.snapshot()
            stats.append(TargetStats(target.address, request_count, error_count))
        return PoolSnapshot(
            elapsed_seconds=self.elapsed_seconds,
            active_workers=self.active_worker_count,
            targets=stats,
        )
