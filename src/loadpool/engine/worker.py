"""Worker threads that hammer a single target."""

from __future__ import annotations

import threading
from enum import Enum, auto
from typing import TYPE_CHECKING

from loadpool._internal.logging import get_logger

if TYPE_CHECKING:
    from loadpool.engine.executor import RequestExecutor
    from loadpool.engine.target import Target

logger = get_logger("engine.worker")


class WorkerState(Enum):
    """State machine for a worker: RUNNING -> STOPPED."""

    RUNNING = auto()
    STOPPED = auto()


class Worker:
    """Repeatedly executes requests against one target on its own thread.

    There is no pause between requests; throughput is bounded only by
    request latency and the executor's timeout. The loop checks the
    target's stop signal before every request and exits once it is set.
    STOPPED is terminal: a worker is never restarted.

    Attributes:
        worker_id: Identifier unique within the owning pool.
        target: The target this worker is bound to.
    """

    def __init__(
        self,
        worker_id: int,
        target: Target,
        executor: RequestExecutor,
    ) -> None:
        self.worker_id = worker_id
        self.target = target
        self._executor = executor
        self._state = WorkerState.RUNNING
        self._requests_issued = 0
        self._thread = threading.Thread(
            target=self._run,
            name=f"loadpool-worker-{worker_id}",
            daemon=True,
        )

    @property
    def state(self) -> WorkerState:
        """Return the current worker state."""
        return self._state

    @property
    def requests_issued(self) -> int:
        """Return how many requests this worker has executed."""
        return self._requests_issued

    @property
    def is_alive(self) -> bool:
        """Return True while the worker thread is running."""
        return self._thread.is_alive()

    def start(self) -> None:
        """Launch the worker thread."""
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit.

        Args:
            timeout: Maximum seconds to wait, or None to wait forever.
        """
        self._thread.join(timeout)

    def _run(self) -> None:
        logger.debug("Worker %d started for %s", self.worker_id, self.target.address)
        try:
            while not self.target.stop_requested:
                try:
                    self._executor.execute(self.target)
                except Exception:
                    logger.exception(
                        "Unexpected failure in worker %d for %s",
                        self.worker_id,
                        self.target.address,
                    )
                self._requests_issued += 1
        finally:
            self._state = WorkerState.STOPPED
            logger.debug(
                "Worker %d stopped after %d requests",
                self.worker_id,
                self._requests_issued,
            )
