"""Configuration loading for loadpool."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from loadpool._internal.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from loadpool._internal.types import TimeoutMode

_LOG_LEVELS: dict[str, int] = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}

_TIMEOUT_MODES = ("fixed", "random")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def parse_log_level(name: str) -> int:
    """Translate a log level name into a ``logging`` level.

    Args:
        name: Case-insensitive level name such as ``"info"`` or ``"DEBUG"``.

    Returns:
        The numeric ``logging`` level.

    Raises:
        ConfigError: If the name is not a known level.
    """
    try:
        return _LOG_LEVELS[name.strip().lower()]
    except KeyError:
        valid = ", ".join(sorted(_LOG_LEVELS))
        msg = f"not a valid log level: {name!r} (expected one of: {valid})"
        raise ConfigError(msg) from None


@dataclass(frozen=True)
class LoadPoolConfig:
    """Process-wide loadpool configuration, fixed at startup.

    Attributes:
        urls_file: Path to the newline-delimited URL file.
        log_level: Log level name, validated on construction.
        max_workers: Number of concurrent workers spawned per target.
        request_timeout: Per-request timeout in seconds when
            ``timeout_mode`` is ``"fixed"``.
        timeout_mode: ``"fixed"`` uses ``request_timeout`` for every
            request; ``"random"`` draws each timeout uniformly from
            ``[0, max_random_timeout]``.
        max_random_timeout: Upper bound in seconds for random timeouts.
        stats_interval: Seconds between statistics reports.
        follow_redirects: Whether redirects are followed before the final
            status code is classified.
    """

    urls_file: Path = field(default_factory=lambda: Path("urls.txt"))
    log_level: str = "info"
    max_workers: int = 50
    request_timeout: float = 5.0
    timeout_mode: TimeoutMode = "fixed"
    max_random_timeout: float = 120.0
    stats_interval: float = 10.0
    follow_redirects: bool = True

    def __post_init__(self) -> None:
        parse_log_level(self.log_level)

        if self.max_workers < 1:
            msg = f"max_workers must be >= 1, got: {self.max_workers}"
            raise ConfigError(msg)

        if self.request_timeout <= 0:
            msg = f"request_timeout must be positive, got: {self.request_timeout}"
            raise ConfigError(msg)

        if self.timeout_mode not in _TIMEOUT_MODES:
            msg = f"timeout_mode must be 'fixed' or 'random', got: {self.timeout_mode!r}"
            raise ConfigError(msg)

        if self.max_random_timeout <= 0:
            msg = f"max_random_timeout must be positive, got: {self.max_random_timeout}"
            raise ConfigError(msg)

        if self.stats_interval <= 0:
            msg = f"stats_interval must be positive, got: {self.stats_interval}"
            raise ConfigError(msg)

    @property
    def log_level_value(self) -> int:
        """Return the numeric ``logging`` level for ``log_level``."""
        return parse_log_level(self.log_level)

    def with_overrides(self, **overrides: object) -> LoadPoolConfig:
        """Return a copy with every non-None override applied.

        Used by the CLI so that explicit flags win over environment values.
        The copy is validated again.

        Raises:
            ConfigError: If an overridden value is invalid.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]


def _int_from_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got: {raw!r}"
        raise ConfigError(msg) from None


def _float_from_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got: {raw!r}"
        raise ConfigError(msg) from None


def _bool_from_env(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean (true/false, yes/no, on/off, 1/0), got: {raw!r}"
    raise ConfigError(msg)


def load_config(environ: Mapping[str, str] | None = None) -> LoadPoolConfig:
    """Load configuration from environment variables with defaults.

    Environment variables:
        LOADPOOL_URLS: Path to the URL file (default: ./urls.txt).
        LOADPOOL_LOG_LEVEL: Log level name (default: info).
        LOADPOOL_MAX_WORKERS: Workers per target (default: 50).
        LOADPOOL_TIMEOUT: Fixed request timeout in seconds (default: 5.0).
        LOADPOOL_TIMEOUT_MODE: ``fixed`` or ``random`` (default: fixed).
        LOADPOOL_MAX_RANDOM_TIMEOUT: Upper bound in seconds for random
            timeouts (default: 120.0).
        LOADPOOL_STATS_INTERVAL: Seconds between reports (default: 10.0).
        LOADPOOL_FOLLOW_REDIRECTS: ``true``/``false`` (also ``yes``/``no``,
            ``on``/``off``, ``1``/``0``; default: true).

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Populated and validated LoadPoolConfig instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    env = os.environ if environ is None else environ
    defaults = LoadPoolConfig()

    return LoadPoolConfig(
        urls_file=Path(env.get("LOADPOOL_URLS", str(defaults.urls_file))),
        log_level=env.get("LOADPOOL_LOG_LEVEL", defaults.log_level),
        max_workers=_int_from_env(env, "LOADPOOL_MAX_WORKERS", defaults.max_workers),
        request_timeout=_float_from_env(env, "LOADPOOL_TIMEOUT", defaults.request_timeout),
        timeout_mode=env.get("LOADPOOL_TIMEOUT_MODE", defaults.timeout_mode),  # type: ignore[arg-type]
        max_random_timeout=_float_from_env(
            env, "LOADPOOL_MAX_RANDOM_TIMEOUT", defaults.max_random_timeout
        ),
        stats_interval=_float_from_env(
            env, "LOADPOOL_STATS_INTERVAL", defaults.stats_interval
        ),
        follow_redirects=_bool_from_env(
            env, "LOADPOOL_FOLLOW_REDIRECTS", defaults.follow_redirects
        ),
    )
