"""Shared test fixtures for the loadpool test suite."""

from __future__ import annotations

import asyncio
import socket
import threading
from typing import TYPE_CHECKING

import httpx
import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from loadpool._internal.config import LoadPoolConfig


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


# =============================================================================
# Network utilities
# =============================================================================


def get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# =============================================================================
# HTTP server handlers
# =============================================================================


async def _ok_handler(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def _status_handler(request: web.Request) -> web.Response:
    """Return the status code given in the path, e.g. ``/status/503``."""
    status = int(request.match_info["code"])
    return web.Response(status=status, text="status")


async def _delay_handler(request: web.Request) -> web.Response:
    """Respond after a configurable delay (query param: ?delay=0.5)."""
    delay = float(request.query.get("delay", "0.1"))
    await asyncio.sleep(delay)
    return web.json_response({"delayed_by": delay})


def _create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/health", _ok_handler)
    app.router.add_get("/status/{code:\\d+}", _status_handler)
    app.router.add_get("/delay", _delay_handler)
    return app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def sync_server() -> Iterator[str]:
    """Aiohttp server running in a background thread.

    Workers are plain threads, so the server needs its own event loop.
    Yields the base URL (e.g., 'http://127.0.0.1:54321').
    """
    port = get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_app())
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    yield f"http://127.0.0.1:{port}"

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


@pytest.fixture
def closed_port_url() -> str:
    """URL on a localhost port nothing is listening on."""
    return f"http://127.0.0.1:{get_free_port()}/"


class TrackingStream(httpx.SyncByteStream):
    """Response body stream that records whether it was closed."""

    def __init__(self, registry: list[TrackingStream], body: bytes = b"body") -> None:
        self._body = body
        self.closed = False
        registry.append(self)

    def __iter__(self) -> Iterator[bytes]:
        yield self._body

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def stream_registry() -> list[TrackingStream]:
    """Every TrackingStream created by ``status_transport``."""
    return []


@pytest.fixture
def status_transport(
    stream_registry: list[TrackingStream],
) -> httpx.MockTransport:
    """Mock transport answering ``/status/<code>`` with that code.

    Any other path answers 200. Each response body is a TrackingStream.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        parts = request.url.path.strip("/").split("/")
        status = int(parts[1]) if len(parts) == 2 and parts[0] == "status" else 200
        return httpx.Response(status, stream=TrackingStream(stream_registry))

    return httpx.MockTransport(_handler)


@pytest.fixture
def make_config(tmp_path) -> Callable[..., LoadPoolConfig]:
    """Factory for LoadPoolConfig with test-friendly defaults."""
    from loadpool._internal.config import LoadPoolConfig

    def _make(**overrides: object) -> LoadPoolConfig:
        values: dict[str, object] = {
            "urls_file": tmp_path / "urls.txt",
            "max_workers": 2,
            "request_timeout": 2.0,
            "stats_interval": 0.2,
        }
        values.update(overrides)
        return LoadPoolConfig(**values)  # type: ignore[arg-type]

    return _make
