"""Immutable records produced by statistics reporting."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TargetStats:
    """Counters of one target at a point in time.

    Attributes:
        address: The target URL.
        request_count: Requests attempted so far.
        error_count: Requests classified as errors so far.
    """

    address: str
    request_count: int
    error_count: int

    @property
    def error_rate(self) -> float:
        """Fraction of requests that were errors (0.0 when none were made)."""
        if self.request_count == 0:
            return 0.0
        return self.error_count / self.request_count


@dataclass(frozen=True)
class PoolSnapshot:
    """Pool-wide statistics at a point in time.

    Attributes:
        elapsed_seconds: Seconds since the pool was created.
        active_workers: Workers still running (best effort).
        targets: Per-target counters in pool order.
    """

    elapsed_seconds: float
    active_workers: int
    targets: list[TargetStats] = field(default_factory=list)

    @property
    def total_requests(self) -> int:
        return sum(t.request_count for t in self.targets)

    @property
    def total_errors(self) -> int:
        return sum(t.error_count for t in self.targets)
