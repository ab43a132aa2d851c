"""Periodic statistics reporting for a running pool."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loadpool._internal.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadpool.engine.pool import Pool
    from loadpool.metrics.models import PoolSnapshot

logger = get_logger("metrics.reporter")


class StatsReporter:
    """Logs a pool snapshot immediately and then on a fixed interval.

    Runs on a daemon thread next to :meth:`Pool.run`. Counters are read
    through ``Target.snapshot()`` only, so workers never wait on the
    reporter.

    Attributes:
        interval: Seconds between reports.
    """

    def __init__(
        self,
        pool: Pool,
        interval: float = 10.0,
        on_report: Callable[[PoolSnapshot], None] | None = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            pool: The pool to observe.
            interval: Seconds between reports.
            on_report: Optional callback invoked with every snapshot.
        """
        self.interval = interval
        self._pool = pool
        self._on_report = on_report
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background reporting thread."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name="loadpool-stats",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the reporting thread and wait for it to exit.

        Args:
            timeout: Maximum seconds to wait for the thread.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def report(self) -> PoolSnapshot:
        """Take one snapshot, log it and pass it to ``on_report``."""
        snapshot = self._pool.snapshot()

        logger.info(
            "running for: %.1fs",
            snapshot.elapsed_seconds,
            extra={"elapsed_seconds": round(snapshot.elapsed_seconds, 3)},
        )
        logger.info(
            "active workers: %d",
            snapshot.active_workers,
            extra={"active_workers": snapshot.active_workers},
        )
        for stats in snapshot.targets:
            logger.info(
                "url: %s requests: %d errors: %d",
                stats.address,
                stats.request_count,
                stats.error_count,
                extra={
                    "url": stats.address,
                    "requests": stats.request_count,
                    "errors": stats.error_count,
                },
            )

        if self._on_report is not None:
            self._on_report(snapshot)
        return snapshot

    def _loop(self) -> None:
        while True:
            try:
                self.report()
            except Exception:
                logger.exception("Stats report failed")
            if self._stop_event.wait(self.interval):
                break
