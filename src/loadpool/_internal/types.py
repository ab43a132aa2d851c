"""Shared type aliases for loadpool."""

from __future__ import annotations

from typing import Literal

# How per-request timeouts are chosen.
TimeoutMode = Literal["fixed", "random"]
