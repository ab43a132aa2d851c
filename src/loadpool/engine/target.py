"""A single URL under load, with its counters and stop signal."""

from __future__ import annotations

import threading
from typing import NamedTuple


class TargetSnapshot(NamedTuple):
    """Point-in-time copy of a target's counters.

    Attributes:
        request_count: Requests attempted so far, successful or not.
        error_count: Requests among those classified as errors.
    """

    request_count: int
    error_count: int


class Target:
    """One URL under sustained load.

    Workers bound to a target record every outcome through
    :meth:`record_outcome` and poll :attr:`stop_requested` between
    requests. Both counters are guarded by one lock so a snapshot never
    sees an error counted before its request.

    The address is not validated; a malformed URL simply produces a
    steady stream of errors.
    """

    def __init__(self, address: str) -> None:
        self._address = address
        self._request_count = 0
        self._error_count = 0
        self._lock = threading.Lock()
        self._stop = threading.Event()

    def __repr__(self) -> str:
        return f"Target({self._address!r})"

    @property
    def address(self) -> str:
        """Return the URL this target hits."""
        return self._address

    @property
    def request_count(self) -> int:
        """Return the number of requests attempted so far."""
        return self.snapshot().request_count

    @property
    def error_count(self) -> int:
        """Return the number of requests classified as errors so far."""
        return self.snapshot().error_count

    @property
    def stop_requested(self) -> bool:
        """Return True once :meth:`signal_stop` has been called."""
        return self._stop.is_set()

    def record_outcome(self, is_error: bool) -> None:
        """Count one finished request.

        Safe to call from any number of threads at once.

        Args:
            is_error: Whether the request was classified as an error.
        """
        with self._lock:
            self._request_count += 1
            if is_error:
                self._error_count += 1

    def snapshot(self) -> TargetSnapshot:
        """Return a consistent ``(request_count, error_count)`` pair."""
        with self._lock:
            return TargetSnapshot(self._request_count, self._error_count)

    def signal_stop(self) -> None:
        """Tell every worker bound to this target to finish.

        The signal is broadcast: all current and future workers observe it.
        Calling it more than once has no further effect.
        """
        self._stop.set()

    def wait_stopped(self, timeout: float | None = None) -> bool:
        """Block until :meth:`signal_stop` has been called.

        Args:
            timeout: Maximum seconds to wait, or None to wait forever.

        Returns:
            True if the stop signal is set, False on timeout.
        """
        return self._stop.wait(timeout)
