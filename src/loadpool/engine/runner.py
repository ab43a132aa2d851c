"""Top-level wiring of client, executor, pool and reporter."""

from __future__ import annotations

import signal
import threading
from typing import TYPE_CHECKING

from loadpool._internal.logging import get_logger
from loadpool.engine.executor import RequestExecutor, TimeoutPolicy, create_http_client
from loadpool.engine.pool import Pool
from loadpool.metrics.reporter import StatsReporter

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import httpx

    from loadpool._internal.config import LoadPoolConfig
    from loadpool.metrics.models import PoolSnapshot

logger = get_logger("engine.runner")


class LoadRunner:
    """Runs a pool against a list of URLs until it is stopped from outside.

    Builds the shared HTTP client, the executor, the pool and the stats
    reporter, then blocks in :meth:`run`. When called from the main
    thread, SIGINT and SIGTERM signal every target so workers drain and
    :meth:`run` returns; a second signal raises ``KeyboardInterrupt``
    instead of waiting for in-flight requests.

    Attributes:
        config: The configuration this runner was built from.
        pool: The pool holding one target per URL.
    """

    def __init__(
        self,
        config: LoadPoolConfig,
        urls: Sequence[str],
        *,
        transport: httpx.BaseTransport | None = None,
        on_report: Callable[[PoolSnapshot], None] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Loaded configuration.
            urls: Target URLs, one target each.
            transport: Optional HTTP transport override, used by tests.
            on_report: Optional callback invoked with every periodic report.
        """
        self.config = config
        self._client = create_http_client(
            config,
            pool_size=config.max_workers * len(urls),
            transport=transport,
        )
        self._timeout_policy = TimeoutPolicy.from_config(config)
        self.pool = Pool(
            config.max_workers,
            RequestExecutor(self._client, self._timeout_policy),
        )
        self.pool.populate(urls)
        self._signal_received = False
        self._reporter = StatsReporter(
            self.pool,
            interval=config.stats_interval,
            on_report=on_report,
        )

    def stop(self) -> None:
        """Signal every target to stop. Safe to call from any thread."""
        self.pool.stop()

    def run(self) -> PoolSnapshot:
        """Run until every worker has stopped and return the final counters.

        Returns:
            Snapshot taken after all workers have exited.
        """
        logger.info(
            "Load starting: targets=%d, workers_per_target=%d, timeout=%s",
            len(self.pool.targets),
            self.pool.max_workers,
            self._timeout_policy.describe(),
        )

        restore = self._install_signal_handlers()
        try:
            self._reporter.start()
            self.pool.run()
        finally:
            self._reporter.stop()
            restore()
            self._client.close()

        final = self._reporter.report()
        logger.info(
            "Load finished: duration=%.1fs, total_requests=%d, total_errors=%d",
            final.elapsed_seconds,
            final.total_requests,
            final.total_errors,
        )
        return final

    def _install_signal_handlers(self) -> Callable[[], None]:
        """Route SIGINT and SIGTERM to :meth:`stop`.

        Returns:
            A callable restoring the previous handlers. A no-op when not
            running on the main thread, where handlers cannot be set.
        """
        if threading.current_thread() is not threading.main_thread():
            return lambda: None

        original_sigint = signal.getsignal(signal.SIGINT)
        original_sigterm = signal.getsignal(signal.SIGTERM)

        def _signal_handler(signum: int, _frame: object) -> None:
            self.handle_signal(signum)

        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        def _restore() -> None:
            signal.signal(signal.SIGINT, original_sigint)
            signal.signal(signal.SIGTERM, original_sigterm)

        return _restore

    def handle_signal(self, signum: int) -> None:
        """Stop gracefully on the first signal, abort on any later one.

        The first signal asks every target to stop and lets in-flight
        requests run out their timeout. A repeated signal raises
        ``KeyboardInterrupt`` so the wait in :meth:`run` is abandoned.

        Args:
            signum: The signal number received.

        Raises:
            KeyboardInterrupt: On every signal after the first.
        """
        if self._signal_received:
            logger.warning("Signal %d received again, aborting without draining", signum)
            raise KeyboardInterrupt
        self._signal_received = True
        logger.info("Signal %d received, stopping all targets", signum)
        self.stop()
