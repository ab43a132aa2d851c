"""Single-request execution, outcome classification and HTTP client setup."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import httpx

from loadpool._internal.logging import get_logger

if TYPE_CHECKING:
    from loadpool._internal.config import LoadPoolConfig
    from loadpool._internal.types import TimeoutMode
    from loadpool.engine.target import Target

logger = get_logger("engine.executor")


class Outcome(Enum):
    """Classification of one finished request."""

    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_error(self) -> bool:
        return self is Outcome.ERROR


def classify_status(status_code: int) -> Outcome:
    """Classify a response status code.

    Anything outside the 2xx range (status >= 300) is an error.

    Args:
        status_code: HTTP status code of the final response.

    Returns:
        The corresponding Outcome.
    """
    return Outcome.ERROR if status_code >= 300 else Outcome.SUCCESS


@dataclass(frozen=True)
class TimeoutPolicy:
    """How long a single request may take.

    Attributes:
        mode: ``"fixed"`` applies ``timeout`` to every request. ``"random"``
            draws each request's timeout uniformly from ``[0, max_timeout]``.
        timeout: Fixed timeout in seconds.
        max_timeout: Upper bound in seconds for random timeouts.
    """

    mode: TimeoutMode = "fixed"
    timeout: float = 5.0
    max_timeout: float = 120.0

    @classmethod
    def from_config(cls, config: LoadPoolConfig) -> TimeoutPolicy:
        return cls(
            mode=config.timeout_mode,
            timeout=config.request_timeout,
            max_timeout=config.max_random_timeout,
        )

    def next_timeout(self) -> float:
        """Return the timeout in seconds for the next request."""
        if self.mode == "random":
            return random.uniform(0.0, self.max_timeout)  # noqa: S311
        return self.timeout

    def describe(self) -> str:
        if self.mode == "random":
            return f"random(0-{self.max_timeout:g}s)"
        return f"fixed({self.timeout:g}s)"


def create_http_client(
    config: LoadPoolConfig,
    pool_size: int,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build the HTTP client shared by every worker.

    ``httpx.Client`` keeps a thread-safe connection pool, so workers use it
    without any locking of their own. The total number of connections is
    not capped; only idle keep-alive connections are limited.

    Args:
        config: Loaded configuration.
        pool_size: Keep-alive connections to retain, normally the total
            worker count.
        transport: Optional transport override, used by tests.

    Returns:
        A configured ``httpx.Client``. The caller owns closing it.
    """
    limits = httpx.Limits(
        max_connections=None,
        max_keepalive_connections=max(pool_size, 1),
    )
    return httpx.Client(
        timeout=config.request_timeout,
        follow_redirects=config.follow_redirects,
        limits=limits,
        transport=transport,
    )


class RequestExecutor:
    """Performs one GET against a target and records the outcome.

    Request failures never leave :meth:`execute`; they are counted as
    errors on the target. The response stream is closed on every path.

    Attributes:
        timeout_policy: Policy deciding each request's timeout.
    """

    def __init__(
        self,
        client: httpx.Client,
        timeout_policy: TimeoutPolicy | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            client: Shared HTTP client.
            timeout_policy: Per-request timeout policy. Defaults to a fixed
                five second timeout.
        """
        self._client = client
        self.timeout_policy = timeout_policy or TimeoutPolicy()

    def execute(self, target: Target) -> Outcome:
        """Issue a single GET to ``target.address``.

        Args:
            target: The target to hit. Its counters are updated exactly once.

        Returns:
            SUCCESS for a status below 300, ERROR otherwise or when the
            request could not be completed.
        """
        outcome = Outcome.ERROR
        try:
            request = self._client.build_request(
                "GET",
                target.address,
                timeout=self.timeout_policy.next_timeout(),
            )
            response = self._client.send(request, stream=True)
        except Exception as exc:
            logger.debug(
                "Request to %s failed: %s: %s",
                target.address,
                type(exc).__name__,
                exc,
            )
        else:
            outcome = classify_status(response.status_code)
            _close_response(response, target.address)

        target.record_outcome(outcome.is_error)
        return outcome


def _close_response(response: httpx.Response, address: str) -> None:
    """Release a response's connection, tolerating failures."""
    try:
        response.close()
    except Exception:
        logger.debug("Failed to close response from %s", address, exc_info=True)
