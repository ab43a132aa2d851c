"""Custom exception hierarchy for loadpool."""

from __future__ import annotations


class LoadPoolError(Exception):
    """Base exception for all loadpool errors.

    Every error raised on purpose by loadpool derives from this class, so
    the CLI can turn any of them into a clean startup failure with a
    single except clause.
    """


class ConfigError(LoadPoolError):
    """Raised when configuration is invalid.

    Examples:
        - An environment variable or CLI flag has a malformed value.
        - The configured log level is not a known level name.
        - A numeric value is out of its acceptable range.
    """


class TargetFileError(LoadPoolError):
    """Raised when the URL file cannot be loaded.

    Examples:
        - The path does not exist or is a directory.
        - The file cannot be read or decoded.
    """


class EngineError(LoadPoolError):
    """Raised when the pool is used incorrectly.

    Examples:
        - Adding a target after ``Pool.run()`` has started.
        - Constructing a pool with fewer than one worker per target.
    """
