"""``loadpool run``: load every URL in a file until interrupted."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from loadpool._internal.config import load_config
from loadpool._internal.errors import LoadPoolError
from loadpool._internal.logging import setup_logging
from loadpool.engine.executor import TimeoutPolicy
from loadpool.engine.runner import LoadRunner
from loadpool.input.url_file import load_urls

if TYPE_CHECKING:
    from loadpool.metrics.models import PoolSnapshot

console = Console(stderr=True)


def _print_summary(snapshot: PoolSnapshot) -> None:
    """Print per-target counters after the pool has stopped.

    Args:
        snapshot: Final pool snapshot.
    """
    table = Table(
        title="Load Stopped",
        show_header=True,
        header_style="bold green",
        expand=True,
    )
    table.add_column("URL")
    table.add_column("Requests", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Error %", justify="right")

    for stats in snapshot.targets:
        table.add_row(
            stats.address,
            str(stats.request_count),
            str(stats.error_count),
            f"{stats.error_rate * 100:.2f}%",
        )

    table.add_section()
    total_rate = (
        snapshot.total_errors / snapshot.total_requests if snapshot.total_requests else 0.0
    )
    table.add_row(
        f"Total ({snapshot.elapsed_seconds:.1f}s)",
        str(snapshot.total_requests),
        str(snapshot.total_errors),
        f"{total_rate * 100:.2f}%",
    )
    console.print(table)


def run_cmd(
    urls: Path | None = typer.Option(
        None,
        "--urls",
        "-u",
        help="Path to the newline-delimited URL file (default: ./urls.txt).",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: trace, debug, info, warning, error, critical or panic (default: info).",
    ),
    max_workers: int | None = typer.Option(
        None,
        "--max-workers",
        "-w",
        help="Concurrent workers per URL (default: 50).",
        min=1,
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Fixed per-request timeout in seconds (default: 5.0).",
    ),
    timeout_mode: str | None = typer.Option(
        None,
        "--timeout-mode",
        help="Timeout policy: fixed, or random (uniform 0 to --max-random-timeout).",
    ),
    max_random_timeout: float | None = typer.Option(
        None,
        "--max-random-timeout",
        help="Upper bound in seconds for random timeouts (default: 120).",
    ),
    interval: float | None = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between statistics reports (default: 10).",
    ),
    no_follow_redirects: bool = typer.Option(
        False,
        "--no-follow-redirects",
        help="Classify 3xx responses as errors instead of following them.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit one JSON object per log line.",
    ),
) -> None:
    """Hammer every URL until SIGINT or SIGTERM, then print a summary."""
    try:
        config = load_config().with_overrides(
            urls_file=urls,
            log_level=log_level,
            max_workers=max_workers,
            request_timeout=timeout,
            timeout_mode=timeout_mode,
            max_random_timeout=max_random_timeout,
            stats_interval=interval,
            follow_redirects=False if no_follow_redirects else None,
        )
        setup_logging(level=config.log_level_value, json_format=json_logs)
        targets = load_urls(config.urls_file)
    except LoadPoolError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            f"[bold]URL file:[/bold] {config.urls_file}\n"
            f"[bold]Targets:[/bold]  {len(targets)}\n"
            f"[bold]Workers:[/bold]  {config.max_workers} per target\n"
            f"[bold]Timeout:[/bold]  {TimeoutPolicy.from_config(config).describe()}",
            title="loadpool",
            border_style="cyan",
        )
    )

    runner = LoadRunner(config, targets)
    final = runner.run()

    _print_summary(final)
