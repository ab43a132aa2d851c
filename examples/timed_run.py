"""Example: drive a pool from Python and stop it after a fixed time.

The pool itself never stops on its own; here a timer thread signals every
target after 30 seconds.

Run with:
    python examples/timed_run.py examples/urls.txt
"""

from __future__ import annotations

import sys
import threading
from pathlib import Path

from loadpool import LoadRunner
from loadpool._internal.config import LoadPoolConfig
from loadpool._internal.logging import setup_logging
from loadpool.input.url_file import load_urls

config = LoadPoolConfig(urls_file=Path(sys.argv[1]), max_workers=10, stats_interval=5.0)
setup_logging(config.log_level_value)

runner = LoadRunner(config, load_urls(config.urls_file))
threading.Timer(30.0, runner.stop).start()
final = runner.run()

for stats in final.targets:
    print(f"{stats.address}: {stats.request_count} requests, {stats.error_rate:.1%} errors")
